"""
Unit tests for the question randomizer.

Tests matching and ordering layouts, reproducibility across reloads,
and degenerate inputs.
"""

import pytest

from quizengine.exceptions import InsufficientDataError
from quizengine.models import Question
from quizengine.randomization import (
    MatchingDisplay,
    OrderingDisplay,
    build_seed,
    display_mapping,
    generate,
    is_permutation,
    randomize_matching,
    randomize_ordering,
)

PAIRS = [
    {"left": "HTTP", "right": "80"},
    {"left": "HTTPS", "right": "443"},
    {"left": "SSH", "right": "22"},
    {"left": "DNS", "right": "53"},
    {"left": "SMTP", "right": "25"},
]


class TestRandomizeMatching:
    """Test matching layouts."""

    def test_mappings_are_permutations(self):
        layout = randomize_matching(PAIRS, "att-1", "q-1")
        assert is_permutation(layout.left_mapping, len(PAIRS))
        assert is_permutation(layout.right_mapping, len(PAIRS))

    def test_items_follow_mappings(self):
        layout = randomize_matching(PAIRS, "att-1", "q-1")
        for display, item in enumerate(layout.left_items):
            assert item.display_index == display
            assert item.original_index == layout.left_mapping[display]
            assert item.content == PAIRS[item.original_index]["left"]
        for display, item in enumerate(layout.right_items):
            assert item.original_index == layout.right_mapping[display]
            assert item.content == PAIRS[item.original_index]["right"]

    def test_columns_use_independent_seeds(self):
        layout = randomize_matching(PAIRS, "att-1", "q-1")
        assert list(layout.left_mapping) == generate(build_seed("att-1", "q-1", ":left"), 5)
        assert list(layout.right_mapping) == generate(build_seed("att-1", "q-1", ":right"), 5)

    def test_reproducible_on_reload(self):
        assert randomize_matching(PAIRS, "att-7", "q-3") == randomize_matching(PAIRS, "att-7", "q-3")

    def test_varies_across_attempts(self):
        layouts = {randomize_matching(PAIRS, f"att-{i}", "q-1").left_mapping for i in range(20)}
        assert len(layouts) > 1

    def test_single_pair(self):
        layout = randomize_matching(PAIRS[:1], "att-1", "q-1")
        assert layout.left_mapping == (0,)
        assert layout.right_mapping == (0,)

    def test_no_pairs_rejected(self):
        with pytest.raises(InsufficientDataError):
            randomize_matching([], "att-1", "q-1")

    def test_display_index_lookup(self):
        layout = randomize_matching(PAIRS, "att-2", "q-1")
        for original in range(len(PAIRS)):
            assert layout.left_mapping[layout.left_display_index(original)] == original
            assert layout.right_mapping[layout.right_display_index(original)] == original


class TestRandomizeOrdering:
    """Test ordering layouts."""

    def test_correct_position_is_canonical_rank(self):
        layout = randomize_ordering(["A", "B", "C", "D"], "att-1", "q-2")
        for item in layout.display_items:
            assert item.correct_position == item.original_index + 1
            assert item.content == "ABCD"[item.original_index]

    def test_mapping_is_permutation(self):
        layout = randomize_ordering(["A", "B", "C", "D"], "att-1", "q-2")
        assert is_permutation(layout.mapping, 4)
        assert list(layout.mapping) == generate(build_seed("att-1", "q-2"), 4)

    def test_reproducible_on_reload(self):
        items = ["boot", "POST", "load kernel", "init"]
        assert randomize_ordering(items, "att-9", "q-2") == randomize_ordering(items, "att-9", "q-2")

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_degenerate_lists_are_valid(self, items):
        layout = randomize_ordering(items, "att-1", "q-2")
        assert [item.content for item in layout.display_items] == items
        assert layout.size == len(items)


class TestDisplayMapping:
    """Test the per-question dispatcher."""

    def test_matching(self, matching_question):
        question = Question.from_record(matching_question)
        assert isinstance(display_mapping(question, "att-1"), MatchingDisplay)

    def test_ordering(self, ordering_question):
        question = Question.from_record(ordering_question)
        layout = display_mapping(question, "att-1")
        assert isinstance(layout, OrderingDisplay)
        assert layout == randomize_ordering(["A", "B", "C"], "att-1", "q-order")

    @pytest.mark.parametrize("fixture", ["mcq_question", "true_false_question", "fill_blank_question", "essay_question"])
    def test_unshuffled_types(self, fixture, request):
        question = Question.from_record(request.getfixturevalue(fixture))
        assert display_mapping(question, "att-1") is None
