"""
Quiz grading and progress summaries.

Answers map a question id to either one option id (single choice) or a list of
option ids (multi-select). A multi-select answer is correct only when it names
exactly the set of correct options.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

DEFAULT_PASSING_SCORE = 70

Answer = Union[int, List[int]]


@dataclass
class QuizGrade:
    score: int
    passed: bool
    correct_count: int
    question_count: int
    correct_answers: Dict[int, List[int]] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "passed": self.passed,
            "correctCount": self.correct_count,
            "questionCount": self.question_count,
            # JSON object keys are strings
            "correctAnswers": {str(qid): ids for qid, ids in self.correct_answers.items()},
        }


def is_correct(answer: Answer, correct_ids: List[int]) -> bool:
    if isinstance(answer, bool):
        return False
    if isinstance(answer, int):
        return answer in correct_ids
    if isinstance(answer, (list, tuple)):
        return len(answer) == len(correct_ids) and set(answer) == set(correct_ids)
    return False


def grade_quiz(
    correct_answers: Mapping[int, List[int]],
    answers: Mapping[Any, Answer],
    passing_score: int = DEFAULT_PASSING_SCORE,
) -> QuizGrade:
    """
    Grade a submission.

    correct_answers: question id -> ids of the correct options, one entry per question
    answers: question id (int or numeric string, as decoded from JSON) -> answer
    """
    normalized = {}
    for qid, answer in answers.items():
        try:
            normalized[int(qid)] = answer
        except (TypeError, ValueError):
            continue

    correct_count = sum(
        1
        for qid, correct_ids in correct_answers.items()
        if qid in normalized and is_correct(normalized[qid], correct_ids)
    )
    question_count = len(correct_answers)
    score = 0
    if question_count:
        ratio = Decimal(correct_count * 100) / Decimal(question_count)
        score = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return QuizGrade(
        score=score,
        passed=score >= passing_score,
        correct_count=correct_count,
        question_count=question_count,
        correct_answers={qid: list(ids) for qid, ids in correct_answers.items()},
    )


@dataclass
class ProgressSummary:
    completed_quizzes: int
    total_quizzes: int
    average_quiz_score: Decimal
    attempts: int
    challenges_completed: int = 0
    challenge_points: int = 0

    @property
    def completion_percent(self) -> int:
        if not self.total_quizzes:
            return 0
        ratio = Decimal(self.completed_quizzes * 100) / Decimal(self.total_quizzes)
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "completedQuizzes": self.completed_quizzes,
            "totalQuizzes": self.total_quizzes,
            "quizCompletionPercent": self.completion_percent,
            "averageQuizScore": float(self.average_quiz_score),
            "attempts": self.attempts,
            "challengesCompleted": self.challenges_completed,
            "challengePoints": self.challenge_points,
        }


def summarize_progress(
    attempts: Iterable[Tuple[int, int, bool]],
    total_quizzes: int,
    challenge_points: Iterable[int] = (),
) -> ProgressSummary:
    """
    Roll a user's quiz attempts up into progress stats.

    attempts: (quiz id, score, passed) per attempt, in any order
    challenge_points: points of each completed daily challenge

    A quiz counts as completed once any attempt passed it. The average score
    uses the best attempt per quiz, so retries do not drag it down.
    """
    best: Dict[int, int] = {}
    passed = set()
    count = 0
    for quiz_id, score, did_pass in attempts:
        count += 1
        best[quiz_id] = max(score, best.get(quiz_id, score))
        if did_pass:
            passed.add(quiz_id)

    average = Decimal("0")
    if best:
        average = (Decimal(sum(best.values())) / Decimal(len(best))).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )

    points = list(challenge_points)
    return ProgressSummary(
        completed_quizzes=len(passed),
        total_quizzes=total_quizzes,
        average_quiz_score=average,
        attempts=count,
        challenges_completed=len(points),
        challenge_points=sum(points),
    )
