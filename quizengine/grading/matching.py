"""
Matching evaluator.

Compares a canonical {left original: right original} map against the
stored correct_answer_json. All-or-nothing unless partial credit is on,
in which case points are prorated by correctly matched pairs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..exceptions import InvalidInputError, UngradedQuestionError
from ..models import CanonicalAnswer, MatchingAnswer, Question, QuestionType
from . import register
from .base import Evaluation, prorate

if TYPE_CHECKING:
    from config import Settings


@register(QuestionType.MATCHING)
class MatchingEvaluator:
    """Evaluator for matching questions."""

    def answer_key(self, question: Question, settings: Settings) -> dict[int, int]:
        key = question.correct_answer_json
        if not question.pairs:
            raise UngradedQuestionError(question.id, "no pairs to match")
        if not key:
            raise UngradedQuestionError(question.id, "no correct_answer_json stored")
        if not isinstance(key, dict):
            raise UngradedQuestionError(question.id, "correct_answer_json is not a left-to-right map")
        return dict(key)

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        if not isinstance(answer, MatchingAnswer):
            raise InvalidInputError(f"matching expects a matching answer, got {type(answer).__name__}")

        key = self.answer_key(question, settings)
        submitted = answer.pairs
        total = len(key)
        correct_pairs = sum(1 for left, right in key.items() if submitted.get(left) == right)

        if question.partial_credit_enabled(settings):
            is_correct = correct_pairs == total
            points = prorate(question.points, correct_pairs, total)
        else:
            is_correct = submitted.keys() == key.keys() and correct_pairs == total
            points = question.points if is_correct else 0

        logger.debug(f"Matching {question.id}: {correct_pairs}/{total} pairs, {points} pts")
        return Evaluation(
            is_correct=is_correct,
            points_awarded=points,
            feedback="Correct!" if is_correct else f"{correct_pairs}/{total} pairs matched correctly",
            details={"correct_pairs": correct_pairs, "total_pairs": total},
        )

    def describe(self, question: Question, settings: Settings) -> str | None:
        key = question.correct_answer_json
        if not isinstance(key, dict) or not key:
            return None
        pairs = question.pairs

        def side(index: int, attr: str) -> str:
            return getattr(pairs[index], attr) if 0 <= index < len(pairs) else str(index)

        return "; ".join(f"{side(left, 'left')} -> {side(right, 'right')}" for left, right in sorted(key.items()))
