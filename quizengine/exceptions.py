"""
Error taxonomy for the quiz engine.

Per-question errors (InvalidInputError, MappingError, UngradedQuestionError)
are contained by the grading engine. AttemptStructureError is the only
error that aborts a whole evaluation call.
"""


class QuizEngineError(Exception):
    """Base class for quiz engine errors."""
    pass


class InvalidInputError(QuizEngineError, ValueError):
    """Raised for malformed shapes: negative sizes, wrong answer shape for a type."""
    pass


class InsufficientDataError(InvalidInputError):
    """Raised when a question has too few items to randomize."""
    pass


class AttemptStructureError(InvalidInputError):
    """Raised when the attempt itself is unusable (e.g. answers is not a mapping)."""
    pass


class MappingError(QuizEngineError, LookupError):
    """Raised when a submitted display index has no entry in the display mapping."""

    def __init__(self, message: str, *, index: object = None):
        super().__init__(message)
        self.index = index


class UngradedQuestionError(QuizEngineError):
    """Raised when a question cannot be scored automatically."""

    def __init__(self, question_id: str, reason: str):
        super().__init__(f"Question {question_id} cannot be graded: {reason}")
        self.question_id = question_id
        self.reason = reason
