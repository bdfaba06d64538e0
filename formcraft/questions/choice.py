"""
Multiple choice handlers.

- mcq: single select, the answer is the selected option id.
- mca: multi select, the answer is a list of selected option ids.

Options carry an isCorrect flag but the engine does not grade choice
questions yet; they score 0 when scoring is enabled.
"""

from typing import Any

from loguru import logger

from formcraft.models import ChoiceConfig, QuestionBase

from . import QuestionType, register
from .base import has_text, is_string_list


def _default_options() -> list[dict]:
    return [
        {"id": "1", "text": "Option 1", "isCorrect": False},
        {"id": "2", "text": "Option 2", "isCorrect": False},
    ]


def _check_options(config: ChoiceConfig) -> str | None:
    if not config.options:
        return "no_options"
    if not all(has_text(option.text) for option in config.options):
        return "empty_option_text"
    ids = [option.id for option in config.options]
    if len(set(ids)) != len(ids):
        return "duplicate_option_id"
    return None


def _option_ids(question: QuestionBase) -> set[str]:
    return {option.id for option in question.config.options}


@register(QuestionType.MCQ)
class MCQHandler:
    """Handler for single-select questions."""

    config_model = ChoiceConfig

    def default_config(self) -> dict:
        return {"options": _default_options()}

    def check_config(self, config: ChoiceConfig) -> str | None:
        return _check_options(config)

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        return has_text(answer)

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        """A string naming one of the options (empty when skipped)."""
        if not isinstance(answer, str):
            return False
        return answer == "" or answer in _option_ids(question)

    def score(self, question: QuestionBase, answer: Any, max_score: float) -> float:
        logger.debug(f"Question {question.id}: mcq scoring not implemented, scoring 0")
        return 0


@register(QuestionType.MCA)
class MCAHandler:
    """Handler for multi-select questions."""

    config_model = ChoiceConfig

    def default_config(self) -> dict:
        return {"options": _default_options()}

    def check_config(self, config: ChoiceConfig) -> str | None:
        return _check_options(config)

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        return isinstance(answer, list) and len(answer) > 0

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        """A list of option ids."""
        if not is_string_list(answer):
            return False
        return set(answer) <= _option_ids(question)

    def score(self, question: QuestionBase, answer: Any, max_score: float) -> float:
        logger.debug(f"Question {question.id}: mca scoring not implemented, scoring 0")
        return 0
