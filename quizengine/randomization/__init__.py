"""
Per-attempt randomization of question layouts.

- permutation: seeded, stateless permutation generator
- randomizer: display orders for matching and ordering questions
"""

from .permutation import (
    SEED_SEPARATOR,
    SeededRandom,
    build_seed,
    fnv1a_32,
    generate,
    invert,
    is_permutation,
    shuffle,
)
from .randomizer import (
    DisplayItem,
    DisplayMapping,
    MatchingDisplay,
    OrderingDisplay,
    display_mapping,
    randomize_matching,
    randomize_ordering,
)

__all__ = [
    "SEED_SEPARATOR",
    "SeededRandom",
    "build_seed",
    "fnv1a_32",
    "generate",
    "invert",
    "is_permutation",
    "shuffle",
    "DisplayItem",
    "DisplayMapping",
    "MatchingDisplay",
    "OrderingDisplay",
    "display_mapping",
    "randomize_matching",
    "randomize_ordering",
]
