"""
Seeded permutation generator.

Display orders are never stored. They are recomputed from the attempt and
question identifiers on every render, so the whole pipeline must be a pure
function of its inputs:

    seed string --FNV-1a--> 32-bit int --Park-Miller LCG--> Fisher-Yates

The generator is deliberately non-cryptographic; only determinism matters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from loguru import logger

from ..exceptions import InvalidInputError

T = TypeVar("T")

# FNV-1a (32-bit) parameters
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

# Park-Miller "minimal standard" LCG
LCG_MODULUS = 2147483647  # 2**31 - 1
LCG_MULTIPLIER = 16807

# Unit separator: not expected in attempt or question ids
SEED_SEPARATOR = "\x1f"

Permutation = list[int]


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 encoding of ``text``."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & 0xFFFFFFFF
    return h


def build_seed(attempt_id: str, question_id: str, suffix: str = "") -> str:
    """
    Build the seed string for one question of one attempt.

    Args:
        attempt_id: Opaque attempt identifier
        question_id: Opaque question identifier
        suffix: Distinguishes independent shuffles of the same question
            (e.g. ":left" / ":right" for matching)
    """
    return f"{attempt_id}{SEED_SEPARATOR}{question_id}{suffix}"


class SeededRandom:
    """
    Park-Miller linear congruential generator.

    State stays in [1, 2**31 - 2]. Instances are created per call and never
    shared, so no RNG state outlives a single permutation.
    """

    def __init__(self, seed: int):
        state = seed % LCG_MODULUS
        if state <= 0:
            state += LCG_MODULUS - 1
        self.state = state

    def next_state(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER) % LCG_MODULUS
        return self.state

    def next_int(self, low: int, high: int) -> int:
        """Integer in [low, high), using integer arithmetic only."""
        if high <= low:
            raise InvalidInputError(f"Empty range [{low}, {high})")
        return low + ((self.next_state() - 1) * (high - low)) // (LCG_MODULUS - 1)


def shuffle(items: Sequence[T], rng: SeededRandom) -> list[T]:
    """Fisher-Yates shuffle returning a new list; ``items`` is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.next_int(0, i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate(seed: str, n: int) -> Permutation:
    """
    Deterministic permutation of ``range(n)`` derived from ``seed``.

    Args:
        seed: Seed string, normally from build_seed()
        n: Number of elements

    Returns:
        List containing each of 0..n-1 exactly once

    Raises:
        InvalidInputError: n is negative
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInputError(f"Permutation size must be an integer, got {n!r}")
    if n < 0:
        raise InvalidInputError(f"Permutation size must be non-negative, got {n}")
    if n <= 1:
        return list(range(n))

    hashed = fnv1a_32(seed)
    logger.debug(f"Permutation seed {seed!r} -> {hashed:#010x} (n={n})")
    return shuffle(range(n), SeededRandom(hashed))


def invert(permutation: Sequence[int]) -> Permutation:
    """Inverse permutation: ``invert(p)[p[i]] == i``."""
    inverse = [0] * len(permutation)
    for display_index, original_index in enumerate(permutation):
        inverse[original_index] = display_index
    return inverse


def is_permutation(values: Sequence[int], n: int | None = None) -> bool:
    """True if ``values`` holds each of 0..n-1 exactly once."""
    size = len(values) if n is None else n
    return len(values) == size and sorted(values) == list(range(size))
