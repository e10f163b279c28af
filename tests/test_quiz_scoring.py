"""
Unit tests for quiz grading.
"""

import pytest

from decimal import Decimal

from tariffsmart.services.quiz_scoring import grade_quiz, is_correct, summarize_progress


class TestIsCorrect:

    def test_single_choice(self):
        assert is_correct(3, [3])
        assert not is_correct(4, [3])

    def test_single_answer_in_multi_select(self):
        assert is_correct(3, [3, 5])

    def test_list_must_match_exactly(self):
        assert is_correct([5, 3], [3, 5])
        assert not is_correct([3], [3, 5])
        assert not is_correct([3, 5, 7], [3, 5])

    def test_duplicates_in_answer_list(self):
        assert not is_correct([3, 3], [3, 5])

    def test_booleans_are_not_option_ids(self):
        assert not is_correct(True, [1])

    def test_other_types(self):
        assert not is_correct("3", [3])
        assert not is_correct(None, [3])


class TestGradeQuiz:

    CORRECT = {1: [10], 2: [20], 3: [30, 31]}

    def test_all_correct(self):
        grade = grade_quiz(self.CORRECT, {"1": 10, "2": 20, "3": [31, 30]})

        assert grade.score == 100
        assert grade.passed is True
        assert grade.correct_count == 3
        assert grade.question_count == 3

    def test_rounds_half_up(self):
        # 2/3 = 66.67 -> 67
        grade = grade_quiz(self.CORRECT, {"1": 10, "2": 20})
        assert grade.score == 67
        assert grade.passed is False

    def test_one_of_eight_rounds_up(self):
        correct = {i: [i] for i in range(1, 9)}
        # 1/8 = 12.5 -> 13
        assert grade_quiz(correct, {1: 1}).score == 13

    def test_passing_score_is_inclusive(self):
        correct = {i: [i] for i in range(1, 11)}
        answers = {i: i for i in range(1, 8)}

        grade = grade_quiz(correct, answers, passing_score=70)
        assert grade.score == 70
        assert grade.passed is True

    def test_custom_passing_score(self):
        grade = grade_quiz(self.CORRECT, {"1": 10, "2": 20}, passing_score=60)
        assert grade.passed is True

    def test_unknown_question_ids_ignored(self):
        grade = grade_quiz(self.CORRECT, {"99": 1, "abc": 2, "1": 10})
        assert grade.correct_count == 1

    def test_no_questions(self):
        grade = grade_quiz({}, {"1": 1})

        assert grade.score == 0
        assert grade.question_count == 0
        assert grade.passed is False

    @pytest.mark.parametrize("answers", [{}, {"1": 11, "2": 21, "3": [30]}])
    def test_zero_score(self, answers):
        assert grade_quiz(self.CORRECT, answers).score == 0

    def test_as_dict_uses_string_keys(self):
        data = grade_quiz(self.CORRECT, {}).as_dict()

        assert data["correctAnswers"] == {"1": [10], "2": [20], "3": [30, 31]}
        assert set(data) == {"score", "passed", "correctCount", "questionCount", "correctAnswers"}


class TestSummarizeProgress:

    def test_no_attempts(self):
        summary = summarize_progress([], total_quizzes=3)

        assert summary.as_dict() == {
            "completedQuizzes": 0,
            "totalQuizzes": 3,
            "quizCompletionPercent": 0,
            "averageQuizScore": 0.0,
            "attempts": 0,
            "challengesCompleted": 0,
            "challengePoints": 0,
        }

    def test_no_quizzes_at_all(self):
        assert summarize_progress([], total_quizzes=0).completion_percent == 0

    def test_best_attempt_per_quiz_is_averaged(self):
        attempts = [(1, 50, False), (1, 100, True), (2, 75, True)]
        summary = summarize_progress(attempts, total_quizzes=4)

        assert summary.attempts == 3
        assert summary.completed_quizzes == 2
        assert summary.completion_percent == 50
        # (100 + 75) / 2
        assert summary.average_quiz_score == Decimal("87.50")

    def test_failed_quiz_is_not_completed(self):
        summary = summarize_progress([(1, 40, False)], total_quizzes=3)

        assert summary.completed_quizzes == 0
        assert summary.average_quiz_score == Decimal("40.00")

    def test_average_rounds_half_up(self):
        summary = summarize_progress([(1, 33, False), (2, 34, False), (3, 34, False)], total_quizzes=3)
        # 101 / 3 = 33.666...
        assert summary.average_quiz_score == Decimal("33.67")

    def test_challenge_points(self):
        summary = summarize_progress([], total_quizzes=1, challenge_points=[10, 25])

        assert summary.challenges_completed == 2
        assert summary.challenge_points == 35
