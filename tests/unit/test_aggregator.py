"""
Unit tests for score aggregation.
"""

import pytest

from quizengine.grading.base import EvaluationResult, ResultStatus
from quizengine.models import QuestionType
from quizengine.scoring import aggregate, percentage


def result(qid, correct, awarded, possible=1, status=ResultStatus.GRADED):
    return EvaluationResult(
        question_id=qid,
        question_type=QuestionType.SINGLE_CHOICE,
        is_correct=correct,
        points_awarded=awarded,
        points_possible=possible,
        status=status,
    )


class TestPercentage:

    @pytest.mark.parametrize(
        "earned, possible, expected",
        [
            (0, 10, 0),
            (10, 10, 100),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds half up
            (0, 0, 0),
        ],
    )
    def test_rounding(self, earned, possible, expected):
        assert percentage(earned, possible) == expected

    def test_capped_at_100(self):
        assert percentage(12, 10) == 100


class TestAggregate:
    """Test the score report."""

    def test_basic_counts(self):
        report = aggregate([result("a", True, 1), result("b", False, 0), result("c", True, 2, 2)])
        assert report.total_questions == 3
        assert report.correct_count == 2
        assert report.points_earned == 3
        assert report.points_possible == 4
        assert report.percentage == 75
        assert report.has_ungraded is False

    def test_ungraded_excluded_from_denominator(self):
        report = aggregate([
            result("a", True, 1),
            result("b", False, 0, 5, status=ResultStatus.UNGRADED),
        ])
        assert report.points_possible == 1
        assert report.percentage == 100
        assert report.ungraded_count == 1
        assert report.ungraded_question_ids == ["b"]
        assert report.total_questions == 2

    def test_partial_credit_not_counted_correct(self):
        report = aggregate([result("a", False, 2, 4)])
        assert report.correct_count == 0
        assert report.points_earned == 2
        assert report.percentage == 50

    def test_question_without_result_counts_as_wrong(self):
        report = aggregate([result("a", True, 1)], {"a": 1, "b": 3})
        assert report.total_questions == 2
        assert report.points_possible == 4
        assert report.percentage == 25

    def test_points_per_question_override(self):
        report = aggregate([result("a", True, 1, 1)], {"a": 2})
        assert report.points_possible == 2

    def test_awarded_clamped_to_points(self):
        report = aggregate([result("a", True, 9, 2)])
        assert report.points_earned == 2
        assert report.percentage == 100

    def test_fully_ungraded(self):
        report = aggregate([result("a", False, 0, 1, status=ResultStatus.UNGRADED)])
        assert report.fully_ungraded is True
        assert report.percentage == 0

    def test_empty(self):
        report = aggregate([])
        assert report.total_questions == 0
        assert report.percentage == 0

    def test_error_and_unanswered_count_as_wrong(self):
        report = aggregate([
            result("a", False, 0, 2, status=ResultStatus.ERROR),
            result("b", False, 0, 2, status=ResultStatus.UNANSWERED),
            result("c", True, 2, 2),
        ])
        assert report.points_possible == 6
        assert report.percentage == 33

    def test_to_dict(self):
        data = aggregate([result("a", True, 1)]).to_dict()
        assert data["percentage"] == 100
        assert data["has_ungraded"] is False


class TestPassed:
    """Test the pass/fail verdict."""

    def test_reaches_pass_mark(self):
        report = aggregate([result("a", True, 1), result("b", False, 0)], passing_score=50)
        assert report.passed is True

    def test_below_pass_mark(self):
        report = aggregate([result("a", True, 1), result("b", False, 0)], passing_score=51)
        assert report.passed is False
        assert report.to_dict()["passing_score"] == 51

    def test_without_pass_mark_always_passes(self):
        assert aggregate([result("a", False, 0)]).passed is True

    def test_zero_pass_mark_always_passes(self):
        assert aggregate([result("a", False, 0)], passing_score=0).passed is True
