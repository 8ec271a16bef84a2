"""
Base protocol and result types for question evaluators.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from ..models import (
    CanonicalAnswer,
    ChoiceAnswer,
    MatchingAnswer,
    OrderingAnswer,
    Question,
    QuestionType,
    TextAnswer,
)

if TYPE_CHECKING:
    from config import Settings


class ResultStatus(str, Enum):
    """How a question's result was reached."""
    GRADED = "graded"
    UNGRADED = "ungraded"      # excluded from the score denominator
    UNANSWERED = "unanswered"  # counted as incorrect
    ERROR = "error"            # stale/corrupt submission, counted as incorrect


@dataclass
class Evaluation:
    """Outcome of one evaluator call, before it is wrapped with attempt context."""
    is_correct: bool
    points_awarded: int
    feedback: str = ""
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class EvaluationResult:
    """Result of evaluating one question of an attempt."""
    question_id: str
    question_type: QuestionType | None
    is_correct: bool
    points_awarded: int
    points_possible: int
    status: ResultStatus = ResultStatus.GRADED
    answered_display: Any = None
    answered_canonical: CanonicalAnswer | None = None
    feedback: str = ""
    error: str | None = None
    correct_answer_display: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_gradeable(self) -> bool:
        return self.status is not ResultStatus.UNGRADED

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the persistence layer."""
        canonical = self.answered_canonical
        return {
            "question_id": self.question_id,
            "question_type": self.question_type.value if self.question_type else None,
            "is_correct": self.is_correct,
            "points_awarded": self.points_awarded,
            "points_possible": self.points_possible,
            "status": self.status.value,
            "answered_display": self.answered_display,
            "answered_canonical": _canonical_to_json(canonical),
            "feedback": self.feedback,
            "error": self.error,
            "correct_answer_display": self.correct_answer_display,
            "details": self.details,
        }


def _canonical_to_json(answer: CanonicalAnswer | None) -> Any:
    if answer is None:
        return None
    if isinstance(answer, ChoiceAnswer):
        if answer.multi:
            return list(answer.selected)
        return answer.selected[0] if answer.selected else None
    if isinstance(answer, TextAnswer):
        return answer.text
    if isinstance(answer, MatchingAnswer):
        return {str(left): right for left, right in answer.pairs.items()}
    if isinstance(answer, OrderingAnswer):
        return {str(index): position for index, position in answer.positions.items()}
    raise TypeError(f"Unknown answer variant: {type(answer).__name__}")


def prorate(points: int, correct: int, total: int) -> int:
    """``points * correct / total`` rounded half up, never above ``points``."""
    if total <= 0:
        return 0
    awarded = math.floor(points * correct / total + 0.5)
    return max(0, min(points, awarded))


class QuestionEvaluator(Protocol):
    """Protocol for per-type evaluators."""

    def answer_key(self, question: Question, settings: Settings) -> Any:
        """Normalized answer key. Raises UngradedQuestionError if there is none."""
        ...

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        """Score a canonical answer. Must not depend on the display order."""
        ...

    def describe(self, question: Question, settings: Settings) -> str | None:
        """Human-readable correct answer for the results page."""
        ...
