"""
Quiz Engine Data Models.

Question and Attempt records arrive as loosely-typed JSON from the data
access layer; they are validated into pydantic models at the boundary.
Submitted answers are re-expressed as a tagged union of frozen dataclasses,
one variant per answer shape, so evaluators never sniff raw JSON.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import AttemptStructureError, InvalidInputError

if TYPE_CHECKING:
    from config import Settings


# =============================================================================
# Question Types
# =============================================================================


class QuestionType(str, Enum):
    """Supported question types."""
    MULTIPLE_CHOICE = "multiple_choice"
    SINGLE_CHOICE = "single_choice"
    TRUE_FALSE = "true_false"
    FILL_BLANK = "fill_blank"
    ESSAY = "essay"
    MATCHING = "matching"
    ORDERING = "ordering"

    @property
    def is_randomized(self) -> bool:
        """Only structured types get a per-attempt display order."""
        return self in (QuestionType.MATCHING, QuestionType.ORDERING)

    @property
    def is_choice(self) -> bool:
        return self in (
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.SINGLE_CHOICE,
            QuestionType.TRUE_FALSE,
        )


def _maybe_json(value: Any) -> Any:
    """Legacy rows store JSON columns as text."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


# =============================================================================
# Records
# =============================================================================


class MatchingPair(BaseModel):
    """One left/right pair of a matching question, in canonical order."""

    model_config = ConfigDict(frozen=True)

    left: str
    right: str


class Question(BaseModel):
    """A stored quiz question with its answer key."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: QuestionType = Field(validation_alias=AliasChoices("type", "question_type"))
    options: list[MatchingPair] | list[str] = Field(default_factory=list)
    correct_answer: int | list[int] | None = None
    correct_answer_text: str | list[str] | None = None
    correct_answer_json: dict[int, int] | list[str] | None = None
    points: int = Field(default=1, ge=1)
    allow_partial_credit: bool | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, value: Any) -> Any:
        if value is None:
            return []
        return _maybe_json(value)

    @field_validator("correct_answer_json", mode="before")
    @classmethod
    def _decode_answer_key(cls, value: Any) -> Any:
        if value is None:
            return value
        return _maybe_json(value)

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _reject_bool_index(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("correct_answer must be an option index, not a boolean")
        return value

    @model_validator(mode="after")
    def _check_shape(self) -> Question:
        options = self.options
        if self.type is QuestionType.MATCHING:
            if options and not all(isinstance(o, MatchingPair) for o in options):
                raise ValueError("matching options must be {left, right} pairs")
            if self.correct_answer_json is not None and not isinstance(self.correct_answer_json, dict):
                raise ValueError("matching correct_answer_json must map left index to right index")
        elif options and not all(isinstance(o, str) for o in options):
            raise ValueError(f"{self.type.value} options must be a list of strings")

        if self.type is QuestionType.TRUE_FALSE and not options:
            self.options = ["True", "False"]
        return self

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | Question) -> Question:
        """Validate a raw question record, raising InvalidInputError on bad shapes."""
        if isinstance(record, Question):
            return record
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            qid = record.get("id", "?") if isinstance(record, Mapping) else "?"
            raise InvalidInputError(f"Invalid question record {qid}: {e}") from e

    @property
    def pairs(self) -> list[MatchingPair]:
        return [o for o in self.options if isinstance(o, MatchingPair)]

    @property
    def items(self) -> list[str]:
        return [o for o in self.options if isinstance(o, str)]

    def partial_credit_enabled(self, settings: Settings) -> bool:
        """An explicit flag on the question wins over the per-type default."""
        if self.allow_partial_credit is not None:
            return self.allow_partial_credit
        if self.type is QuestionType.MATCHING:
            return settings.matching_partial_credit_default
        if self.type is QuestionType.ORDERING:
            return settings.ordering_partial_credit_default
        return False


class Attempt(BaseModel):
    """One student's submission for a quiz session."""

    model_config = ConfigDict(populate_by_name=True)

    attempt_id: str = Field(validation_alias=AliasChoices("attempt_id", "attemptId", "id"))
    answers: dict[str, Any] = Field(default_factory=dict)

    @field_validator("answers", mode="before")
    @classmethod
    def _stringify_keys(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): v for k, v in value.items()}
        return value

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | Attempt) -> Attempt:
        """Validate a raw attempt record; a non-mapping answers field is fatal."""
        if isinstance(record, Attempt):
            return record
        if not isinstance(record, Mapping):
            raise AttemptStructureError("Attempt record must be a mapping")
        answers = record.get("answers", {})
        if answers is None:
            answers = {}
        if not isinstance(answers, Mapping):
            raise AttemptStructureError(
                f"Attempt answers must be a mapping of question id to answer, got {type(answers).__name__}"
            )
        try:
            return cls.model_validate({**record, "answers": answers})
        except ValidationError as e:
            raise AttemptStructureError(f"Invalid attempt record: {e}") from e


# =============================================================================
# Canonical Answers (tagged union)
# =============================================================================


@dataclass(frozen=True)
class ChoiceAnswer:
    """Selected option indices for choice questions."""
    selected: tuple[int, ...]
    multi: bool = False


@dataclass(frozen=True)
class TextAnswer:
    """Free text for fill_blank and essay questions."""
    text: str


@dataclass(frozen=True)
class MatchingAnswer:
    """Canonical {left original index: right original index}."""
    pairs: dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderingAnswer:
    """Canonical {original index: 1-based position}."""
    positions: dict[int, int] = field(default_factory=dict)


CanonicalAnswer = Union[ChoiceAnswer, TextAnswer, MatchingAnswer, OrderingAnswer]


# Raw ordering submissions come in two shapes; they are told apart by type.


@dataclass(frozen=True)
class PositionMapInput:
    """Ordering answer already keyed by original index."""
    positions: dict[Any, Any]


@dataclass(frozen=True)
class ContentSequenceInput:
    """Ordering answer as option contents in the student's chosen order."""
    contents: tuple[Any, ...]


OrderingInput = Union[PositionMapInput, ContentSequenceInput]


def classify_ordering_input(raw: Any) -> OrderingInput:
    """Tell the two ordering answer shapes apart at the boundary."""
    if isinstance(raw, Mapping):
        return PositionMapInput(dict(raw))
    if isinstance(raw, (list, tuple)):
        return ContentSequenceInput(tuple(raw))
    raise InvalidInputError(
        f"Ordering answer must be a position map or a list of items, got {type(raw).__name__}"
    )
