"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formcraft.config import get_settings  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so env overrides from one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_cloze_question():
    """Provide a scored two-blank cloze question."""
    return {
        "id": "q-cloze",
        "type": "cloze",
        "title": "Capitals",
        "required": True,
        "config": {
            "text": "The {{capital}} of France is {{city}}.",
            "blanks": [
                {"id": "b1", "correctAnswers": ["capital"], "caseSensitive": False, "position": 0},
                {"id": "b2", "correctAnswers": ["Paris"], "caseSensitive": True, "position": 1},
            ],
        },
        "scoring": {"enabled": True, "points": 10},
    }


@pytest.fixture
def sample_categorize_question():
    """Provide a scored categorize question with four keyed items."""
    return {
        "id": "q-cat",
        "type": "categorize",
        "title": "Animals",
        "required": True,
        "config": {
            "categories": [
                {"id": "mammals", "label": "Mammals", "color": "#3B82F6"},
                {"id": "birds", "label": "Birds", "color": "#10B981"},
            ],
            "items": [
                {"id": "dog", "text": "Dog", "correctCategory": "mammals"},
                {"id": "cat", "text": "Cat", "correctCategory": "mammals"},
                {"id": "eagle", "text": "Eagle", "correctCategory": "birds"},
                {"id": "owl", "text": "Owl", "correctCategory": "birds"},
            ],
        },
        "scoring": {"enabled": True, "points": 10},
    }


@pytest.fixture
def sample_mcq_question():
    """Provide an optional single-select question."""
    return {
        "id": "q-mcq",
        "type": "mcq",
        "title": "Favourite colour",
        "required": False,
        "config": {
            "options": [
                {"id": "red", "text": "Red", "isCorrect": True},
                {"id": "blue", "text": "Blue", "isCorrect": False},
            ],
        },
    }


@pytest.fixture
def sample_form(sample_cloze_question, sample_categorize_question, sample_mcq_question):
    """Provide a form document mixing required and optional questions."""
    return {
        "id": "form-1",
        "title": "Geography and Animals",
        "questions": [sample_cloze_question, sample_categorize_question, sample_mcq_question],
        "settings": {"isPublished": False},
    }
