"""
Choice evaluator.

Covers multiple_choice, single_choice and true_false. Choice questions are
never shuffled, so submitted indices are already canonical.

- A single stored index is compared for equality.
- A stored index list (multi-select) is compared as a set: order and
  duplicates in the submission do not matter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import InvalidInputError, UngradedQuestionError
from ..models import CanonicalAnswer, ChoiceAnswer, Question, QuestionType
from . import register
from .base import Evaluation

if TYPE_CHECKING:
    from config import Settings


@register(QuestionType.MULTIPLE_CHOICE, QuestionType.SINGLE_CHOICE, QuestionType.TRUE_FALSE)
class ChoiceEvaluator:
    """Evaluator for index-selection questions."""

    def answer_key(self, question: Question, settings: Settings) -> frozenset[int]:
        correct = question.correct_answer
        if correct is None or correct == []:
            raise UngradedQuestionError(question.id, "no correct_answer stored")
        if isinstance(correct, list):
            return frozenset(correct)
        return frozenset((correct,))

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        if not isinstance(answer, ChoiceAnswer):
            raise InvalidInputError(f"{question.type.value} expects a choice answer, got {type(answer).__name__}")

        expected = self.answer_key(question, settings)
        submitted = frozenset(answer.selected)
        is_correct = submitted == expected

        if is_correct:
            feedback = "Correct!"
        elif isinstance(question.correct_answer, list) and submitted and submitted < expected:
            feedback = f"Partially selected: {len(submitted)} of {len(expected)} correct options"
        else:
            feedback = "Incorrect."

        return Evaluation(
            is_correct=is_correct,
            points_awarded=question.points if is_correct else 0,
            feedback=feedback,
        )

    def describe(self, question: Question, settings: Settings) -> str | None:
        correct = question.correct_answer
        if correct is None:
            return None
        indices = correct if isinstance(correct, list) else [correct]
        options = question.items
        return ", ".join(options[i] if 0 <= i < len(options) else str(i) for i in indices)
