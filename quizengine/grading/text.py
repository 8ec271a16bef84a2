"""
Free-text evaluators: fill_blank and essay.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import InvalidInputError, UngradedQuestionError
from ..models import CanonicalAnswer, Question, QuestionType, TextAnswer
from . import register
from .base import Evaluation

if TYPE_CHECKING:
    from config import Settings


def normalize_text(text: str) -> str:
    """Trim surrounding whitespace and case-fold."""
    return text.strip().casefold()


def _require_text(question: Question, answer: CanonicalAnswer) -> str:
    if not isinstance(answer, TextAnswer):
        raise InvalidInputError(f"{question.type.value} expects a text answer, got {type(answer).__name__}")
    return answer.text


@register(QuestionType.FILL_BLANK)
class FillBlankEvaluator:
    """Exact match after trim + case-fold against one or more accepted forms."""

    def accepted_forms(self, question: Question, settings: Settings) -> list[str]:
        stored = question.correct_answer_text
        if stored is None:
            return []
        if isinstance(stored, str):
            stored = stored.split(settings.fill_blank_answer_delimiter)
        return [form for form in stored if form.strip()]

    def answer_key(self, question: Question, settings: Settings) -> frozenset[str]:
        forms = self.accepted_forms(question, settings)
        if not forms:
            raise UngradedQuestionError(question.id, "no correct_answer_text stored")
        return frozenset(normalize_text(form) for form in forms)

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        submitted = normalize_text(_require_text(question, answer))
        is_correct = submitted in self.answer_key(question, settings)
        return Evaluation(
            is_correct=is_correct,
            points_awarded=question.points if is_correct else 0,
            feedback="Correct!" if is_correct else "Incorrect.",
        )

    def describe(self, question: Question, settings: Settings) -> str | None:
        forms = self.accepted_forms(question, settings)
        return " / ".join(form.strip() for form in forms) if forms else None


@register(QuestionType.ESSAY)
class EssayEvaluator:
    """
    Placeholder essay grading: any non-empty answer earns full points.

    Real grading happens outside the engine. With essay_auto_accept off,
    essays are reported as ungraded instead.
    """

    def answer_key(self, question: Question, settings: Settings) -> None:
        if not settings.essay_auto_accept:
            raise UngradedQuestionError(question.id, "essays require manual review")
        return None

    def evaluate(self, question: Question, answer: CanonicalAnswer, settings: Settings) -> Evaluation:
        self.answer_key(question, settings)
        has_content = bool(_require_text(question, answer).strip())
        return Evaluation(
            is_correct=has_content,
            points_awarded=question.points if has_content else 0,
            feedback="Submitted for review" if has_content else "No answer written",
        )

    def describe(self, question: Question, settings: Settings) -> str | None:
        stored = question.correct_answer_text
        if isinstance(stored, list):
            return " / ".join(stored) or None
        return stored or None
