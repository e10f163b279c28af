"""
Learning content models (the /v2 platform).

- LearningModule: a short lesson on a trade topic
- Quiz / QuizQuestion / QuizOption: graded quizzes, optionally attached to a module
- QuizAttempt: a user's scored submission
- DictionaryTerm: glossary entries
- TradeAgreement: reference pages for trade agreements
- DailyChallenge / ChallengeCompletion: one challenge per day and who finished it
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, UniqueConstraint
from tariffsmart.web.db import db
from tariffsmart.web.db.models.base import BaseModel


def slugify(text: str) -> str:
    """'United States-Mexico-Canada Agreement (USMCA)' -> 'united-states-mexico-canada-agreement-usmca'"""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ModuleCategory(str, Enum):
    TARIFFS = "tariffs"
    TRADE_POLICY = "trade_policy"
    TREATIES = "treaties"
    CUSTOMS = "customs"
    SHIPPING = "shipping"
    COMPLIANCE = "compliance"


class DictionaryCategory(str, Enum):
    TARIFFS = "tariffs"
    TRADE_POLICY = "trade_policy"
    SHIPPING = "shipping"
    CUSTOMS = "customs"
    REGULATIONS = "regulations"
    AGREEMENTS = "agreements"


class AgreementStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    PROPOSED = "proposed"


class ChallengeType(str, Enum):
    QUIZ = "quiz"
    FLASHCARD = "flashcard"
    MATCHING = "matching"
    TRUE_FALSE = "true_false"


class LearningModule(BaseModel):
    __tablename__ = "modules"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    difficulty = db.Column(db.String(16), nullable=False)
    estimated_minutes = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(32), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    published = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    quizzes = db.relationship("Quiz", back_populates="module", order_by="Quiz.id")

    @classmethod
    def search(cls, category: Optional[str] = None, published_only: bool = False):
        query = cls.query
        if category:
            query = query.filter(cls.category == category)
        if published_only:
            query = query.filter(cls.published.is_(True))
        return query.order_by(cls.id)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "difficulty": self.difficulty,
            "estimatedMinutes": self.estimated_minutes,
            "category": self.category,
            "content": self.content,
            "published": self.published,
        }


class Quiz(BaseModel):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=True, index=True)
    description = db.Column(db.Text, nullable=True)
    module_id = db.Column(db.Integer, db.ForeignKey("modules.id"), nullable=True)
    passing_score = db.Column(db.Integer, nullable=False, default=70)
    published = db.Column(db.Boolean, nullable=False, default=False)

    module = db.relationship("LearningModule", back_populates="quizzes")
    questions = db.relationship("QuizQuestion", back_populates="quiz", order_by="QuizQuestion.order")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "moduleId": self.module_id,
            "passingScore": self.passing_score,
            "published": self.published,
        }


class QuizQuestion(BaseModel):
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    question = db.Column(db.Text, nullable=False)
    explanation = db.Column(db.Text, nullable=True)
    points = db.Column(db.Integer, nullable=False, default=1)
    order = db.Column(db.Integer, nullable=False)

    quiz = db.relationship("Quiz", back_populates="questions")
    options = db.relationship("QuizOption", back_populates="question", order_by="QuizOption.order")

    @property
    def correct_option_ids(self) -> List[int]:
        return [opt.id for opt in self.options if opt.is_correct]

    def as_dict(self, reveal_answers: bool = False) -> Dict[str, Any]:
        return {
            "id": self.id,
            "quizId": self.quiz_id,
            "question": self.question,
            "explanation": self.explanation if reveal_answers else None,
            "points": self.points,
            "order": self.order,
            "options": [opt.as_dict(reveal_answers) for opt in self.options],
        }


class QuizOption(BaseModel):
    __tablename__ = "quiz_options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id"), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    order = db.Column(db.Integer, nullable=False, default=0)

    question = db.relationship("QuizQuestion", back_populates="options")

    def as_dict(self, reveal_answers: bool = False) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "questionId": self.question_id,
            "text": self.text,
            "order": self.order,
        }
        if reveal_answers:
            result["isCorrect"] = self.is_correct
        return result


class QuizAttempt(BaseModel):
    __tablename__ = "quiz_attempts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    passed = db.Column(db.Boolean, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @classmethod
    def for_user(cls, user_id: int) -> List["QuizAttempt"]:
        return cls.query.filter_by(user_id=user_id).order_by(cls.completed_at, cls.id).all()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "quizId": self.quiz_id,
            "score": self.score,
            "passed": self.passed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }


class DictionaryTerm(BaseModel):
    __tablename__ = "dictionary_terms"
    __table_args__ = (
        UniqueConstraint("term", "category", name="uq_dictionary_term"),
    )

    id = db.Column(db.Integer, primary_key=True)
    term = db.Column(db.String(200), nullable=False, index=True)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    definition = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(32), nullable=False)
    example = db.Column(db.Text, nullable=True)
    related_terms = db.Column(JSON, nullable=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.slug and self.term:
            self.slug = slugify(self.term)

    @classmethod
    def search(cls, category: Optional[str] = None, query: Optional[str] = None):
        """Filter by category and a case-insensitive substring of term or definition."""
        q = cls.query
        if category:
            q = q.filter(cls.category == category)
        if query:
            pattern = f"%{query}%"
            q = q.filter(db.or_(cls.term.ilike(pattern), cls.definition.ilike(pattern)))
        return q.order_by(cls.term)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "term": self.term,
            "slug": self.slug,
            "definition": self.definition,
            "category": self.category,
            "example": self.example,
            "relatedTerms": self.related_terms or [],
        }


class TradeAgreement(BaseModel):
    __tablename__ = "trade_agreements"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    short_description = db.Column(db.Text, nullable=False)
    full_description = db.Column(db.Text, nullable=False)
    key_points = db.Column(JSON, nullable=False, default=list)
    countries = db.Column(JSON, nullable=False, default=list)
    year = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.slug and self.name:
            self.slug = slugify(self.name)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "shortDescription": self.short_description,
            "fullDescription": self.full_description,
            "keyPoints": self.key_points or [],
            "countries": self.countries or [],
            "year": self.year,
            "status": self.status,
        }


class DailyChallenge(BaseModel):
    """A short exercise scheduled for one calendar day."""
    __tablename__ = "daily_challenges"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(16), nullable=False)
    difficulty = db.Column(db.String(16), nullable=False)
    content = db.Column(JSON, nullable=False)
    date = db.Column(db.Date, unique=True, nullable=False, index=True)
    points = db.Column(db.Integer, nullable=False, default=10)

    completions = db.relationship("ChallengeCompletion", back_populates="challenge")

    @classmethod
    def for_date(cls, day) -> Optional["DailyChallenge"]:
        return cls.query.filter_by(date=day).first()

    def is_completed_by(self, user_id: int) -> bool:
        return ChallengeCompletion.count(user_id=user_id, challenge_id=self.id) > 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "difficulty": self.difficulty,
            "content": self.content,
            "date": self.date.isoformat(),
            "points": self.points,
        }


class ChallengeCompletion(BaseModel):
    __tablename__ = "challenge_completions"
    __table_args__ = (
        UniqueConstraint("user_id", "challenge_id", name="uq_challenge_completion"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    challenge_id = db.Column(db.Integer, db.ForeignKey("daily_challenges.id"), nullable=False)
    completed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    challenge = db.relationship("DailyChallenge", back_populates="completions")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "challengeId": self.challenge_id,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }
