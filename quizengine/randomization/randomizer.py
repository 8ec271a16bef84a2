"""
Question randomizer.

Builds the per-attempt display order for matching and ordering questions.
Both entry points are pure functions of (items, attempt_id, question_id):
a student who reloads mid-attempt sees exactly the same layout.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from loguru import logger

from ..exceptions import InsufficientDataError, InvalidInputError
from ..models import MatchingPair, Question, QuestionType
from .permutation import Permutation, build_seed, generate, invert


@dataclass(frozen=True)
class DisplayItem:
    """One item as placed on screen."""
    content: str
    original_index: int
    display_index: int
    correct_position: int | None = None  # ordering only (1-based canonical rank)


@dataclass(frozen=True)
class MatchingDisplay:
    """Two independent bijections, one per column."""
    left_items: tuple[DisplayItem, ...]
    right_items: tuple[DisplayItem, ...]
    left_mapping: tuple[int, ...]   # left_mapping[display_index] = original_index
    right_mapping: tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.left_mapping)

    def left_display_index(self, original_index: int) -> int:
        return invert(self.left_mapping)[original_index]

    def right_display_index(self, original_index: int) -> int:
        return invert(self.right_mapping)[original_index]


@dataclass(frozen=True)
class OrderingDisplay:
    """Shuffled ordering items; correctness is defined by canonical order."""
    display_items: tuple[DisplayItem, ...]

    @property
    def mapping(self) -> tuple[int, ...]:
        return tuple(item.original_index for item in self.display_items)

    @property
    def size(self) -> int:
        return len(self.display_items)


DisplayMapping = Union[MatchingDisplay, OrderingDisplay]


def _pair_side(pair: MatchingPair | dict[str, Any], side: str) -> str:
    if isinstance(pair, MatchingPair):
        return getattr(pair, side)
    if isinstance(pair, dict) and side in pair:
        return str(pair[side])
    raise InvalidInputError(f"Matching pair must have '{side}': {pair!r}")


def _place(contents: Sequence[str], permutation: Permutation, with_rank: bool = False) -> tuple[DisplayItem, ...]:
    return tuple(
        DisplayItem(
            content=contents[original],
            original_index=original,
            display_index=display,
            correct_position=original + 1 if with_rank else None,
        )
        for display, original in enumerate(permutation)
    )


def randomize_matching(
    pairs: Sequence[MatchingPair | dict[str, Any]],
    attempt_id: str,
    question_id: str,
) -> MatchingDisplay:
    """
    Shuffle the left and right columns of a matching question independently.

    Args:
        pairs: Canonical {left, right} pairs
        attempt_id: Attempt identifier
        question_id: Question identifier

    Returns:
        MatchingDisplay with reordered items and both mappings

    Raises:
        InsufficientDataError: No pairs to match
    """
    if len(pairs) < 1:
        raise InsufficientDataError(f"Matching question {question_id} has no pairs")

    lefts = [_pair_side(p, "left") for p in pairs]
    rights = [_pair_side(p, "right") for p in pairs]

    left_perm = generate(build_seed(attempt_id, question_id, ":left"), len(pairs))
    right_perm = generate(build_seed(attempt_id, question_id, ":right"), len(pairs))

    return MatchingDisplay(
        left_items=_place(lefts, left_perm),
        right_items=_place(rights, right_perm),
        left_mapping=tuple(left_perm),
        right_mapping=tuple(right_perm),
    )


def randomize_ordering(
    items: Sequence[str],
    attempt_id: str,
    question_id: str,
) -> OrderingDisplay:
    """
    Shuffle the items of an ordering question.

    Zero or one item is a degenerate but valid question: the single fixed
    order is returned.
    """
    permutation = generate(build_seed(attempt_id, question_id), len(items))
    return OrderingDisplay(display_items=_place(list(items), permutation, with_rank=True))


def display_mapping(question: Question, attempt_id: str) -> DisplayMapping | None:
    """Display mapping for any question; None for types that are never shuffled."""
    if question.type is QuestionType.MATCHING:
        return randomize_matching(question.pairs, attempt_id, question.id)
    if question.type is QuestionType.ORDERING:
        return randomize_ordering(question.items, attempt_id, question.id)
    logger.debug(f"Question {question.id} ({question.type.value}) is shown in stored order")
    return None
