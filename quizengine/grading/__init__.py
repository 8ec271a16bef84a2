"""
Question evaluators for quiz attempts.

Each question type has an evaluator registered against it, exposing:
- answer_key(): Normalized answer key (or UngradedQuestionError)
- evaluate(): Score a canonical answer
- describe(): Correct answer text for the results page
"""

from typing import TYPE_CHECKING

from ..models import QuestionType

if TYPE_CHECKING:
    from .base import QuestionEvaluator


# Evaluator registry - populated by @register decorator
EVALUATORS: dict[QuestionType, "QuestionEvaluator"] = {}


def register(*question_types: QuestionType):
    """Decorator to register an evaluator for one or more question types."""
    def decorator(cls):
        instance = cls()
        for question_type in question_types:
            EVALUATORS[question_type] = instance
        return cls
    return decorator


def get_evaluator(question_type: str | QuestionType) -> "QuestionEvaluator | None":
    """Get the evaluator for a question type."""
    if isinstance(question_type, str):
        try:
            question_type = QuestionType(question_type.lower())
        except ValueError:
            return None
    return EVALUATORS.get(question_type)


# Import evaluators to trigger registration
from . import choice
from . import text
from . import matching
from . import ordering

__all__ = [
    "EVALUATORS",
    "get_evaluator",
    "register",
]
