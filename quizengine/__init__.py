"""
Quiz randomization and answer-evaluation engine.

Components:
- randomization: seeded per-attempt display orders (matching, ordering)
- grading.translator: display-space <-> canonical-space answers
- grading: per-type evaluators and the attempt grading engine
- scoring: score aggregation
- concurrency: per-attempt submission locking for async callers

Typical use:
    from quizengine import GradingEngine, display_mapping

    layout = display_mapping(question, attempt_id)   # render
    grade = GradingEngine().grade_attempt(questions, attempt)  # submit
"""

from .exceptions import (
    AttemptStructureError,
    InsufficientDataError,
    InvalidInputError,
    MappingError,
    QuizEngineError,
    UngradedQuestionError,
)
from .grading import get_evaluator
from .grading.base import EvaluationResult, ResultStatus
from .grading.engine import AttemptGrade, GradingEngine, grade_attempt
from .grading.translator import answer_progress, to_canonical, to_display
from .models import Attempt, MatchingPair, Question, QuestionType
from .randomization import (
    display_mapping,
    generate,
    randomize_matching,
    randomize_ordering,
)
from .scoring import ScoreReport, aggregate

__version__ = "1.0.0"

__all__ = [
    # Errors
    "AttemptStructureError",
    "InsufficientDataError",
    "InvalidInputError",
    "MappingError",
    "QuizEngineError",
    "UngradedQuestionError",
    # Models
    "Attempt",
    "MatchingPair",
    "Question",
    "QuestionType",
    # Randomization
    "display_mapping",
    "generate",
    "randomize_matching",
    "randomize_ordering",
    # Translation
    "answer_progress",
    "to_canonical",
    "to_display",
    # Grading
    "AttemptGrade",
    "EvaluationResult",
    "GradingEngine",
    "ResultStatus",
    "get_evaluator",
    "grade_attempt",
    # Scoring
    "ScoreReport",
    "aggregate",
]
