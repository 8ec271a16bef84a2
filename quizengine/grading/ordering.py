"""
Ordering evaluator.

Compares a canonical {original index: position} map against the stored
answer key. The key may be stored as a position map or as the item
contents in correct order; without a stored key the canonical option
order is the correct order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..exceptions import InvalidInputError, UngradedQuestionError
from ..models import CanonicalAnswer, OrderingAnswer, Question, QuestionType
from . import register
from .base import Evaluation, prorate

if TYPE_CHECKING:
    from config import Settings


@register(QuestionType.ORDERING)
class OrderingEvaluator:
    """Evaluator for ordering questions."""

    def answer_key(self, question: Question, settings: Settings) -> dict[int, int]:
        key = question.correct_answer_json
        items = question.items
        if not items:
            raise UngradedQuestionError(question.id, "no items to order")

        if isinstance(key, dict) and key:
            return dict(key)

        if isinstance(key, list) and key:
            # Convert ["first", "second", ...] to {original index: position}
            positions: dict[int, int] = {}
            for position, content in enumerate(key, start=1):
                index = next(
                    (i for i, item in enumerate(items) if item == content and i not in positions),
                    None,
                )
                if index is None:
                    raise UngradedQuestionError(question.id, f"answer key item {content!r} is not an option")
                positions[index] = position
            return positions

        return {index: index + 1 for index in range(len(items))}

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        if not isinstance(answer, OrderingAnswer):
            raise InvalidInputError(f"ordering expects an ordering answer, got {type(answer).__name__}")

        key = self.answer_key(question, settings)
        submitted = answer.positions
        total = len(key)
        in_place = sum(1 for index, position in key.items() if submitted.get(index) == position)

        if question.partial_credit_enabled(settings):
            is_correct = in_place == total
            points = prorate(question.points, in_place, total)
        else:
            is_correct = submitted == key
            points = question.points if is_correct else 0

        logger.debug(f"Ordering {question.id}: {in_place}/{total} in place, {points} pts")
        return Evaluation(
            is_correct=is_correct,
            points_awarded=points,
            feedback="Correct order!" if is_correct else f"{in_place}/{total} items in correct position",
            details={"items_in_place": in_place, "total_items": total},
        )

    def describe(self, question: Question, settings: Settings) -> str | None:
        try:
            key = self.answer_key(question, settings)
        except UngradedQuestionError:
            return None
        items = question.items
        ordered = sorted(key.items(), key=lambda kv: kv[1])
        return " -> ".join(items[i] if 0 <= i < len(items) else str(i) for i, _ in ordered)
