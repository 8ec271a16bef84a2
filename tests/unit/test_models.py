"""
Unit tests for question and attempt records.
"""

import pytest

from config import Settings
from quizengine.exceptions import AttemptStructureError, InvalidInputError
from quizengine.models import (
    Attempt,
    ContentSequenceInput,
    MatchingPair,
    PositionMapInput,
    Question,
    QuestionType,
    classify_ordering_input,
)


class TestQuestionType:

    def test_randomized_types(self):
        assert {t for t in QuestionType if t.is_randomized} == {QuestionType.MATCHING, QuestionType.ORDERING}

    def test_choice_types(self):
        assert QuestionType.TRUE_FALSE.is_choice
        assert not QuestionType.ESSAY.is_choice


class TestQuestion:
    """Test question record validation."""

    def test_matching_record(self, matching_question):
        question = Question.from_record(matching_question)
        assert question.type is QuestionType.MATCHING
        assert question.pairs[0] == MatchingPair(left="HTTP", right="80")
        assert question.correct_answer_json == {0: 0, 1: 1, 2: 2, 3: 3}

    def test_json_text_columns(self):
        question = Question.from_record({
            "id": "q",
            "question_type": "ordering",
            "options": '["x", "y"]',
            "correct_answer_json": '["y", "x"]',
        })
        assert question.items == ["x", "y"]
        assert question.correct_answer_json == ["y", "x"]

    def test_integer_id(self):
        assert Question.from_record({"id": 12, "type": "essay"}).id == "12"

    def test_true_false_default_options(self, true_false_question):
        assert Question.from_record(true_false_question).options == ["True", "False"]

    def test_null_options(self):
        assert Question.from_record({"id": "q", "type": "essay", "options": None}).options == []

    def test_unknown_type(self):
        with pytest.raises(InvalidInputError, match="bad"):
            Question.from_record({"id": "bad", "type": "nonsense"})

    def test_matching_options_must_be_pairs(self):
        with pytest.raises(InvalidInputError):
            Question.from_record({"id": "q", "type": "matching", "options": ["a", "b"]})

    def test_matching_key_must_be_mapping(self):
        with pytest.raises(InvalidInputError):
            Question.from_record({
                "id": "q",
                "type": "matching",
                "options": [{"left": "a", "right": "b"}],
                "correct_answer_json": ["b"],
            })

    def test_boolean_answer_index_rejected(self):
        with pytest.raises(InvalidInputError):
            Question.from_record({"id": "q", "type": "true_false", "correct_answer": True})

    def test_points_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            Question.from_record({"id": "q", "type": "essay", "points": 0})

    def test_partial_credit_defaults(self, matching_question, mcq_question):
        settings = Settings(_env_file=None, matching_partial_credit_default=True)
        assert Question.from_record(matching_question).partial_credit_enabled(settings)
        assert not Question.from_record(mcq_question).partial_credit_enabled(settings)


class TestAttempt:
    """Test attempt record validation."""

    def test_keys_stringified(self):
        attempt = Attempt.from_record({"attempt_id": "a", "answers": {1: "x"}})
        assert attempt.answers == {"1": "x"}

    def test_null_answers(self):
        assert Attempt.from_record({"attempt_id": "a", "answers": None}).answers == {}

    def test_answers_must_be_mapping(self):
        with pytest.raises(AttemptStructureError, match="list"):
            Attempt.from_record({"attempt_id": "a", "answers": ["x"]})

    def test_record_must_be_mapping(self):
        with pytest.raises(AttemptStructureError):
            Attempt.from_record(["a"])

    def test_missing_id(self):
        with pytest.raises(AttemptStructureError):
            Attempt.from_record({"answers": {}})

    def test_structure_error_is_invalid_input(self):
        assert issubclass(AttemptStructureError, InvalidInputError)


class TestOrderingInput:

    def test_mapping(self):
        assert classify_ordering_input({"0": 1}) == PositionMapInput({"0": 1})

    def test_sequence(self):
        assert classify_ordering_input(["A", "B"]) == ContentSequenceInput(("A", "B"))

    def test_scalar(self):
        with pytest.raises(InvalidInputError):
            classify_ordering_input(3)
