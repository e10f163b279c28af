"""
Learning platform API (v2): modules, quizzes, dictionary, trade agreements,
daily challenges and user progress.

All routes are served under /v2/api.
"""

import logging
from datetime import date, datetime

from flask import Blueprint, g, jsonify, request

from tariffsmart.services.quiz_scoring import grade_quiz, summarize_progress
from tariffsmart.web.db import db
from tariffsmart.web.db.models import (
    AgreementStatus,
    ChallengeCompletion,
    DailyChallenge,
    DictionaryTerm,
    FeatureFlag,
    LearningModule,
    Quiz,
    QuizAttempt,
    TradeAgreement,
    User,
)
from tariffsmart.web.hooks import editor_required, load_model, login_required
from tariffsmart.web.schemas import (
    DailyChallengeCreate,
    DictionaryTermCreate,
    ModuleCreate,
    QuizSubmission,
    TradeAgreementCreate,
    parse_body,
)

logger = logging.getLogger(__name__)

bp = Blueprint("learning", __name__, url_prefix="/v2/api")


def _paginate(query):
    limit = request.args.get("limit", type=int)
    offset = request.args.get("offset", type=int)
    if offset:
        query = query.offset(offset)
    if limit:
        query = query.limit(min(limit, 200))
    return query.all()


def _quiz_payload(quiz):
    return {
        "quiz": quiz.as_dict(),
        "questions": [q.as_dict() for q in quiz.questions],
    }


@bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "version": "2.0", "timestamp": datetime.utcnow().isoformat()})


@bp.route("/feature-flags", methods=["GET"])
def list_flags():
    flags = FeatureFlag.query.order_by(FeatureFlag.id).all()
    return jsonify({"flags": FeatureFlag.as_dicts(flags)})


# ─────────────────────────────────────────────────────────────────────────────
# Modules
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/modules", methods=["GET"])
def list_modules():
    """
    List learning modules.

    Query params:
        category: Filter by module category
        published: "true" to only return published modules
        limit / offset: Pagination
    """
    category = request.args.get("category")
    published_only = request.args.get("published") == "true"

    query = LearningModule.search(category=category, published_only=published_only)
    total = query.count()
    modules = _paginate(query)

    categories_query = db.session.query(LearningModule.category).distinct()
    if published_only:
        categories_query = categories_query.filter(LearningModule.published.is_(True))
    categories = sorted(c for (c,) in categories_query.all())

    return jsonify({
        "modules": LearningModule.as_dicts(modules),
        "categories": categories,
        "totalModules": total,
    })


@bp.route("/modules/<module_id>", methods=["GET"])
@load_model(LearningModule, label="module")
def get_module(module):
    return jsonify({"module": module.as_dict(), "quizzes": Quiz.as_dicts(module.quizzes)})


@bp.route("/modules/slug/<string:slug>", methods=["GET"])
def get_module_by_slug(slug):
    module = LearningModule.find_by(slug=slug)
    if not module:
        return jsonify({"message": "Module not found"}), 404
    return jsonify({"module": module.as_dict(), "quizzes": Quiz.as_dicts(module.quizzes)})


@bp.route("/modules", methods=["POST"])
@editor_required
def create_module():
    data = parse_body(ModuleCreate)

    if LearningModule.find_by(slug=data.slug):
        return jsonify({"message": "A module with this slug already exists"}), 409

    module = LearningModule.create(**data.model_dump())
    logger.info("Module created: id=%s slug=%s by user %s", module.id, module.slug, g.user.id)
    return jsonify({"module": module.as_dict()}), 201


# ─────────────────────────────────────────────────────────────────────────────
# Quizzes
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/quizzes", methods=["GET"])
def list_quizzes():
    query = Quiz.query
    module_id = request.args.get("moduleId", type=int)
    if module_id:
        query = query.filter(Quiz.module_id == module_id)
    query = query.order_by(Quiz.id)

    total = query.count()
    return jsonify({"quizzes": Quiz.as_dicts(_paginate(query)), "totalQuizzes": total})


@bp.route("/quizzes/<quiz_id>", methods=["GET"])
@load_model(Quiz, label="quiz")
def get_quiz(quiz):
    """Quiz with its questions and options (correct answers are not revealed)."""
    return jsonify(_quiz_payload(quiz))


@bp.route("/quizzes/slug/<string:slug>", methods=["GET"])
def get_quiz_by_slug(slug):
    quiz = Quiz.find_by(slug=slug)
    if not quiz:
        return jsonify({"message": "Quiz not found"}), 404
    return jsonify(_quiz_payload(quiz))


@bp.route("/quizzes/<quiz_id>/submit", methods=["POST"])
@login_required
@load_model(Quiz, label="quiz")
def submit_quiz(quiz):
    """
    Grade a quiz attempt for the signed-in user.

    Body:
        {"answers": {"<questionId>": <optionId> | [<optionId>, ...]}}
    """
    data = parse_body(QuizSubmission)

    correct_answers = {q.id: q.correct_option_ids for q in quiz.questions}
    grade = grade_quiz(correct_answers, data.answers, passing_score=quiz.passing_score)

    attempt = QuizAttempt.create(
        user_id=g.user.id,
        quiz_id=quiz.id,
        score=grade.score,
        passed=grade.passed,
    )

    return jsonify({
        "success": True,
        **grade.as_dict(),
        "questions": [q.as_dict(reveal_answers=True) for q in quiz.questions],
        "progress": attempt.as_dict(),
    })


# ─────────────────────────────────────────────────────────────────────────────
# Dictionary
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/dictionary", methods=["GET"])
def list_terms():
    """
    Query params:
        category: Filter by dictionary category
        query: Case-insensitive match against term and definition
        limit / offset: Pagination
    """
    query = DictionaryTerm.search(
        category=request.args.get("category"),
        query=request.args.get("query"),
    )
    total = query.count()
    terms = _paginate(query)

    categories = sorted(c for (c,) in db.session.query(DictionaryTerm.category).distinct().all())

    return jsonify({
        "terms": DictionaryTerm.as_dicts(terms),
        "categories": categories,
        "totalTerms": total,
    })


@bp.route("/dictionary/<term_id>", methods=["GET"])
@load_model(DictionaryTerm, label="term")
def get_term(term):
    return jsonify({"term": term.as_dict()})


@bp.route("/dictionary/slug/<string:slug>", methods=["GET"])
def get_term_by_slug(slug):
    term = DictionaryTerm.find_by(slug=slug)
    if not term:
        return jsonify({"message": "Term not found"}), 404
    return jsonify({"term": term.as_dict()})


@bp.route("/dictionary", methods=["POST"])
@editor_required
def create_term():
    data = parse_body(DictionaryTermCreate)

    term = DictionaryTerm(**data.model_dump())
    if DictionaryTerm.find_by(slug=term.slug) or DictionaryTerm.find_by(term=term.term, category=term.category):
        return jsonify({"message": "This term already exists"}), 409

    term.save()
    logger.info("Dictionary term created: id=%s slug=%s by user %s", term.id, term.slug, g.user.id)
    return jsonify({"term": term.as_dict()}), 201


# ─────────────────────────────────────────────────────────────────────────────
# Trade agreements
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/agreements", methods=["GET"])
def list_agreements():
    """
    Query params:
        status: one of active, pending, expired, proposed
    """
    query = TradeAgreement.query
    status = request.args.get("status")
    if status:
        try:
            status = AgreementStatus(status)
        except ValueError:
            return jsonify({"message": f"Invalid status: {status}"}), 400
        query = query.filter(TradeAgreement.status == status.value)
    agreements = query.order_by(TradeAgreement.year.desc(), TradeAgreement.id).all()
    return jsonify({"agreements": TradeAgreement.as_dicts(agreements)})


@bp.route("/agreements/<agreement_id>", methods=["GET"])
@load_model(TradeAgreement, label="agreement")
def get_agreement(agreement):
    return jsonify({"agreement": agreement.as_dict()})


@bp.route("/agreements/slug/<string:slug>", methods=["GET"])
def get_agreement_by_slug(slug):
    agreement = TradeAgreement.find_by(slug=slug)
    if not agreement:
        return jsonify({"message": "Agreement not found"}), 404
    return jsonify({"agreement": agreement.as_dict()})


@bp.route("/agreements", methods=["POST"])
@editor_required
def create_agreement():
    data = parse_body(TradeAgreementCreate)

    agreement = TradeAgreement(**data.model_dump())
    if TradeAgreement.find_by(slug=agreement.slug):
        return jsonify({"message": "An agreement with this slug already exists"}), 409

    agreement.save()
    logger.info("Trade agreement created: id=%s slug=%s by user %s", agreement.id, agreement.slug, g.user.id)
    return jsonify({"agreement": agreement.as_dict()}), 201


# ─────────────────────────────────────────────────────────────────────────────
# Daily challenge
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/daily-challenge", methods=["GET"])
def get_daily_challenge():
    """
    The challenge scheduled for a day.

    Query params:
        date: YYYY-MM-DD, defaults to today (UTC)

    "completed" is only ever true for a signed-in user who finished it.
    """
    raw_date = request.args.get("date")
    if raw_date:
        try:
            day = date.fromisoformat(raw_date)
        except ValueError:
            return jsonify({"message": "Invalid date, expected YYYY-MM-DD"}), 400
    else:
        day = datetime.utcnow().date()

    challenge = DailyChallenge.for_date(day)
    if not challenge:
        return jsonify({"message": "No challenge found for today"}), 404

    completed = g.user is not None and challenge.is_completed_by(g.user.id)
    return jsonify({"challenge": challenge.as_dict(), "completed": completed})


@bp.route("/daily-challenge", methods=["POST"])
@editor_required
def create_daily_challenge():
    data = parse_body(DailyChallengeCreate)

    if DailyChallenge.for_date(data.day):
        return jsonify({"message": "A challenge already exists for this date"}), 409

    challenge = DailyChallenge.create(**data.model_dump(by_alias=True))
    logger.info("Daily challenge created: id=%s date=%s by user %s", challenge.id, challenge.date, g.user.id)
    return jsonify({"challenge": challenge.as_dict()}), 201


@bp.route("/daily-challenge/<challenge_id>/complete", methods=["POST"])
@login_required
@load_model(DailyChallenge, label="challenge")
def complete_daily_challenge(challenge):
    if challenge.is_completed_by(g.user.id):
        return jsonify({"message": "Challenge already completed"}), 400

    completion = ChallengeCompletion.create(user_id=g.user.id, challenge_id=challenge.id)
    logger.info("Daily challenge %s completed by user %s", challenge.id, g.user.id)
    return jsonify({"success": True, "completion": completion.as_dict(), "points": challenge.points})


# ─────────────────────────────────────────────────────────────────────────────
# User progress
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/user-progress/<user_id>", methods=["GET"])
@login_required
@load_model(User, label="user")
def get_user_progress(user):
    """Quiz attempts and summary stats. Users see their own; admins see anyone's."""
    if user.id != g.user.id and not g.user.has_role("admin"):
        return jsonify({
            "error": "Forbidden",
            "message": "You can only view your own progress",
        }), 403

    attempts = QuizAttempt.for_user(user.id)
    completions = ChallengeCompletion.query.filter_by(user_id=user.id).all()
    summary = summarize_progress(
        ((a.quiz_id, a.score, a.passed) for a in attempts),
        total_quizzes=Quiz.count(),
        challenge_points=[c.challenge.points for c in completions],
    )

    return jsonify({
        "userId": user.id,
        "quizProgress": QuizAttempt.as_dicts(attempts),
        "stats": summary.as_dict(),
    })
