"""
Base protocol and shared helpers for question handlers.
"""

import math
from typing import Any, Protocol

from formcraft.models import CamelModel, QuestionBase


class QuestionHandler(Protocol):
    """Protocol for question type handlers."""

    config_model: type[CamelModel]

    def default_config(self) -> dict:
        """Seed configuration for a new question of this type."""
        ...

    def check_config(self, config: Any) -> str | None:
        """Return a reason code if the parsed config cannot be saved, else None."""
        ...

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        """Check that a required question's answer covers every part."""
        ...

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        """Check that the answer has the runtime shape this type expects."""
        ...

    def score(self, question: QuestionBase, answer: Any, max_score: float) -> float:
        """Grade the answer against the config's answer key, 0..max_score."""
        ...


def has_text(value: Any) -> bool:
    """True for a string with non-whitespace content."""
    return isinstance(value, str) and value.strip() != ""


def has_value(value: Any) -> bool:
    """Generic presence check for answers without a type-specific rule."""
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return str(value).strip() != ""


def is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (scores are non-negative)."""
    return math.floor(value + 0.5)


def proportional_score(correct: int, total: int, max_score: float) -> float:
    """Points for ``correct`` out of ``total`` parts, rounded and capped at max_score."""
    if total <= 0:
        return 0
    return min(round_half_up(correct / total * max_score), max_score)


def text_matches(given: Any, accepted: list[str], case_sensitive: bool = False) -> bool:
    """Exact string match against any accepted answer, ignoring outer whitespace."""
    if not isinstance(given, str) or not given.strip():
        return False
    candidate = given.strip()
    for expected in accepted:
        if not isinstance(expected, str):
            continue
        if case_sensitive:
            if candidate == expected.strip():
                return True
        elif candidate.casefold() == expected.strip().casefold():
            return True
    return False
