"""
Answer translator.

Converts a student's answer from display space (what was on screen) into
canonical space (indices as stored with the question), and back.

Round-trip law: to_canonical(to_display(answer, m, t), m, t) == answer for
every canonical answer and every mapping m.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from ..exceptions import InvalidInputError, MappingError
from ..models import (
    CanonicalAnswer,
    ChoiceAnswer,
    ContentSequenceInput,
    MatchingAnswer,
    OrderingAnswer,
    PositionMapInput,
    Question,
    QuestionType,
    TextAnswer,
    classify_ordering_input,
)
from ..randomization.randomizer import DisplayMapping, MatchingDisplay, OrderingDisplay


def as_index(value: Any, what: str = "index") -> int:
    """Parse an index from an int or a numeric JSON key."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{what} must be an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    raise InvalidInputError(f"{what} must be an integer, got {value!r}")


def _check_range(index: int, size: int, what: str) -> int:
    if not 0 <= index < size:
        raise MappingError(f"{what} {index} is outside the displayed range 0..{size - 1}", index=index)
    return index


# =============================================================================
# Display -> Canonical
# =============================================================================


def _choice_to_canonical(raw: Any, question_type: QuestionType) -> ChoiceAnswer:
    if question_type is QuestionType.TRUE_FALSE and isinstance(raw, bool):
        # Option 0 is "True", option 1 is "False"
        return ChoiceAnswer(selected=(0 if raw else 1,))
    if isinstance(raw, (list, tuple)):
        return ChoiceAnswer(selected=tuple(as_index(v, "option index") for v in raw), multi=True)
    return ChoiceAnswer(selected=(as_index(raw, "option index"),))


def _text_to_canonical(raw: Any) -> TextAnswer:
    if isinstance(raw, str):
        return TextAnswer(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return TextAnswer(str(raw))
    raise InvalidInputError(f"Text answer must be a string, got {type(raw).__name__}")


def _matching_to_canonical(raw: Any, mapping: DisplayMapping | None) -> MatchingAnswer:
    if not isinstance(mapping, MatchingDisplay):
        raise InvalidInputError("Matching answers need a matching display mapping")
    if not isinstance(raw, Mapping):
        raise InvalidInputError(
            f"Matching answer must map left display index to right display index, got {type(raw).__name__}"
        )

    size = mapping.size
    pairs: dict[int, int] = {}
    for left_key, right_value in raw.items():
        left_display = _check_range(as_index(left_key, "left index"), size, "Left display index")
        right_display = _check_range(as_index(right_value, "right index"), size, "Right display index")
        pairs[mapping.left_mapping[left_display]] = mapping.right_mapping[right_display]
    return MatchingAnswer(pairs=pairs)


def _canonical_items(mapping: DisplayMapping | None, options: Sequence[str] | None) -> list[str]:
    if options is not None:
        return list(options)
    if isinstance(mapping, OrderingDisplay):
        return [item.content for item in sorted(mapping.display_items, key=lambda i: i.original_index)]
    raise InvalidInputError("Ordering answers need the canonical options or an ordering display mapping")


def _ordering_to_canonical(
    raw: Any,
    mapping: DisplayMapping | None,
    options: Sequence[str] | None,
) -> OrderingAnswer:
    items = _canonical_items(mapping, options)
    size = len(items)
    submitted = classify_ordering_input(raw)

    if isinstance(submitted, PositionMapInput):
        positions = {
            _check_range(as_index(k, "item index"), size, "Item index"): as_index(v, "position")
            for k, v in submitted.positions.items()
        }
    elif isinstance(submitted, ContentSequenceInput):
        if len(submitted.contents) != size:
            raise InvalidInputError(f"Ordering answer lists {len(submitted.contents)} items, expected {size}")
        used: set[int] = set()
        positions = {}
        for position, content in enumerate(submitted.contents, start=1):
            # Duplicate contents resolve to the first unused occurrence
            index = next(
                (i for i, item in enumerate(items) if item == content and i not in used),
                None,
            )
            if index is None:
                raise MappingError(f"Ordering item {content!r} is not one of the question's items", index=content)
            used.add(index)
            positions[index] = position
    else:  # pragma: no cover - classify_ordering_input is exhaustive
        raise InvalidInputError(f"Unsupported ordering input {submitted!r}")

    if set(positions) != set(range(size)) or sorted(positions.values()) != list(range(1, size + 1)):
        raise InvalidInputError(f"Ordering answer must place each of the {size} items exactly once")
    return OrderingAnswer(positions=positions)


def to_canonical(
    raw_answer: Any,
    mapping: DisplayMapping | None,
    question_type: QuestionType | str,
    *,
    options: Sequence[str] | None = None,
) -> CanonicalAnswer:
    """
    Translate a raw display-space answer into canonical space.

    Args:
        raw_answer: Answer as submitted by the client
        mapping: Display mapping for matching/ordering, None otherwise
        question_type: Question type of the answered question
        options: Canonical ordering items (derived from mapping if omitted)

    Returns:
        Canonical answer variant for the question type

    Raises:
        InvalidInputError: Answer has the wrong shape for the type
        MappingError: A display index or item has no counterpart in the mapping
    """
    qtype = QuestionType(question_type)

    if qtype.is_choice:
        return _choice_to_canonical(raw_answer, qtype)
    if qtype in (QuestionType.FILL_BLANK, QuestionType.ESSAY):
        return _text_to_canonical(raw_answer)
    if qtype is QuestionType.MATCHING:
        return _matching_to_canonical(raw_answer, mapping)
    if qtype is QuestionType.ORDERING:
        return _ordering_to_canonical(raw_answer, mapping, options)

    raise InvalidInputError(f"No translation for question type {qtype.value}")  # pragma: no cover


# =============================================================================
# Canonical -> Display
# =============================================================================


def to_display(
    answer: CanonicalAnswer,
    mapping: DisplayMapping | None,
    question_type: QuestionType | str,
    *,
    options: Sequence[str] | None = None,
) -> Any:
    """
    Re-express a canonical answer in the student's display space.

    Used to restore a saved answer when the question is rendered again.
    Ordering answers come back as the item contents in the student's order.
    """
    qtype = QuestionType(question_type)

    if isinstance(answer, ChoiceAnswer):
        return list(answer.selected) if answer.multi else answer.selected[0]
    if isinstance(answer, TextAnswer):
        return answer.text
    if isinstance(answer, MatchingAnswer):
        if not isinstance(mapping, MatchingDisplay):
            raise InvalidInputError("Matching answers need a matching display mapping")
        left_inverse = {original: display for display, original in enumerate(mapping.left_mapping)}
        right_inverse = {original: display for display, original in enumerate(mapping.right_mapping)}
        try:
            return {left_inverse[left]: right_inverse[right] for left, right in answer.pairs.items()}
        except KeyError as e:
            raise MappingError(f"Canonical index {e.args[0]} is not in the display mapping", index=e.args[0]) from e
    if isinstance(answer, OrderingAnswer):
        items = _canonical_items(mapping, options)
        ordered = sorted(answer.positions.items(), key=lambda kv: kv[1])
        return [items[index] for index, _ in ordered]

    logger.warning(f"Unknown canonical answer {answer!r} for {qtype.value}")
    raise InvalidInputError(f"Cannot display answer of type {type(answer).__name__}")


# =============================================================================
# Progress
# =============================================================================


def answer_progress(question: Question, raw_answer: Any) -> tuple[int, int]:
    """
    How much of a question the student has filled in, as (placed, total).

    Matching counts matched left items, ordering counts positioned items,
    other types are 0 or 1 of 1.
    """
    if question.type is QuestionType.MATCHING:
        total = len(question.pairs)
        if not isinstance(raw_answer, Mapping):
            return 0, total
        return min(len(raw_answer), total), total
    if question.type is QuestionType.ORDERING:
        total = len(question.items)
        if not isinstance(raw_answer, (Mapping, list, tuple)):
            return 0, total
        return min(len(raw_answer), total), total

    if raw_answer is None or raw_answer == [] or (isinstance(raw_answer, str) and not raw_answer.strip()):
        return 0, 1
    return 1, 1
