"""
Score aggregation.

Combines per-question EvaluationResults into a ScoreReport:
- Ungraded questions are reported separately and excluded from the
  denominator.
- Questions with no result at all (unanswered and never evaluated) still
  count, as incorrect with zero points.
- The percentage is rounded half up and clamped to [0, 100].
- An attempt passes when its percentage reaches the quiz's passing score;
  a quiz without one is always passed.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..grading.base import EvaluationResult


@dataclass
class ScoreReport:
    """Outcome of one attempt."""
    total_questions: int
    correct_count: int
    points_earned: int
    points_possible: int
    percentage: int
    ungraded_count: int = 0
    ungraded_question_ids: list[str] = field(default_factory=list)
    fully_ungraded: bool = False
    passing_score: int | None = None
    passed: bool = True

    @property
    def has_ungraded(self) -> bool:
        return self.ungraded_count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_questions": self.total_questions,
            "correct_count": self.correct_count,
            "points_earned": self.points_earned,
            "points_possible": self.points_possible,
            "percentage": self.percentage,
            "ungraded_count": self.ungraded_count,
            "ungraded_question_ids": list(self.ungraded_question_ids),
            "fully_ungraded": self.fully_ungraded,
            "has_ungraded": self.has_ungraded,
            "passing_score": self.passing_score,
            "passed": self.passed,
        }


def percentage(earned: int, possible: int) -> int:
    """Whole-number percentage, rounded half up and clamped to [0, 100]."""
    if possible <= 0:
        return 0
    value = math.floor(earned / possible * 100 + 0.5)
    return max(0, min(100, value))


def aggregate(
    results: Iterable[EvaluationResult],
    points_per_question: Mapping[str, int] | None = None,
    passing_score: int | None = None,
) -> ScoreReport:
    """
    Aggregate evaluation results into a score report.

    Args:
        results: One result per evaluated question
        points_per_question: Points for every question of the quiz, keyed by
            question id. Ids without a result count as incorrect. Defaults to
            each result's own points_possible.
        passing_score: Minimum percentage to pass. Unset or 0 always passes.

    Returns:
        ScoreReport
    """
    results = list(results)
    points_per_question = dict(points_per_question or {})
    seen: set[str] = set()

    correct_count = 0
    points_earned = 0
    points_possible = 0
    ungraded: list[str] = []

    for result in results:
        seen.add(result.question_id)
        if not result.is_gradeable:
            ungraded.append(result.question_id)
            continue

        points = points_per_question.get(result.question_id, result.points_possible)
        points_possible += points
        points_earned += max(0, min(points, result.points_awarded))
        if result.is_correct:
            correct_count += 1

    missing = [qid for qid in points_per_question if qid not in seen]
    for qid in missing:
        points_possible += points_per_question[qid]

    score = percentage(points_earned, points_possible)
    return ScoreReport(
        total_questions=len(results) + len(missing),
        correct_count=correct_count,
        points_earned=points_earned,
        points_possible=points_possible,
        percentage=score,
        ungraded_count=len(ungraded),
        ungraded_question_ids=ungraded,
        fully_ungraded=points_possible == 0,
        passing_score=passing_score,
        passed=score >= passing_score if passing_score else True,
    )
