"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Default settings, independent of the developer's .env."""
    return Settings(_env_file=None)


@pytest.fixture
def mcq_question():
    """Multi-select question: options 0 and 2 are correct."""
    return {
        "id": "q-mcq",
        "type": "multiple_choice",
        "options": ["Router", "Hub", "Layer 3 switch", "Repeater"],
        "correct_answer": [0, 2],
        "points": 2,
    }


@pytest.fixture
def single_choice_question():
    return {
        "id": "q-single",
        "type": "single_choice",
        "options": ["255.0.0.0", "255.255.0.0", "255.255.255.0"],
        "correct_answer": 2,
    }


@pytest.fixture
def true_false_question():
    return {
        "id": "q-tf",
        "type": "true_false",
        "correct_answer": 0,
    }


@pytest.fixture
def fill_blank_question():
    return {
        "id": "q-fill",
        "type": "fill_blank",
        "correct_answer_text": "Paris",
    }


@pytest.fixture
def essay_question():
    return {
        "id": "q-essay",
        "type": "essay",
        "points": 5,
    }


@pytest.fixture
def matching_question():
    """Four pairs; the answer key pairs each left with its own right."""
    return {
        "id": "q-match",
        "type": "matching",
        "options": [
            {"left": "HTTP", "right": "80"},
            {"left": "HTTPS", "right": "443"},
            {"left": "SSH", "right": "22"},
            {"left": "DNS", "right": "53"},
        ],
        "correct_answer_json": {"0": 0, "1": 1, "2": 2, "3": 3},
        "points": 4,
    }


@pytest.fixture
def ordering_question():
    return {
        "id": "q-order",
        "type": "ordering",
        "options": ["A", "B", "C"],
        "correct_answer_json": ["A", "B", "C"],
        "points": 3,
    }
