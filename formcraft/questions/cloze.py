"""
Cloze handler.

Fill-in-the-blank questions. The config text contains {{blanks}}; the
answer maps blank keys to the respondent's text:

    {"blank-0": "Paris", "blank-1": "Eiffel Tower"}

A list aligned to blank order is accepted as a legacy form and normalized
to the keyed object.
"""

from typing import Any

from formcraft.cloze_text import blank_key, count_blanks, has_unbalanced_braces, parse_blanks
from formcraft.config import get_settings
from formcraft.models import ClozeConfig, QuestionBase

from . import QuestionType, register
from .base import has_text, proportional_score, text_matches

DEFAULT_TEXT = "The capital of France is {{Paris}} and it is known for the {{Eiffel Tower}}."


def normalize_answer(answer: Any) -> Any:
    """Convert a legacy list answer to the keyed object form; other values pass through."""
    if isinstance(answer, list):
        return {blank_key(i): value for i, value in enumerate(answer)}
    return answer


@register(QuestionType.CLOZE)
class ClozeHandler:
    """Handler for cloze (fill in the blanks) questions."""

    config_model = ClozeConfig

    def default_config(self) -> dict:
        return {
            "text": DEFAULT_TEXT,
            "blanks": [
                {
                    "id": f"blank-{blank.index + 1}",
                    "correctAnswers": [blank.placeholder],
                    "caseSensitive": False,
                    "position": blank.index,
                    "blankText": blank.placeholder,
                }
                for blank in parse_blanks(DEFAULT_TEXT)
            ],
        }

    def check_config(self, config: ClozeConfig) -> str | None:
        text = config.text
        if not text or not text.strip():
            return "no_text"

        if get_settings().legacy_cloze_validation:
            return None if "{{" in text and "}}" in text else "no_blanks"

        placeholders = count_blanks(text)
        if placeholders == 0:
            return "no_blanks"
        if has_unbalanced_braces(text):
            return "unbalanced_braces"
        if config.blanks and len(config.blanks) != placeholders:
            return "blank_count_mismatch"
        return None

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        """Every blank in the text must hold non-empty text."""
        answer = normalize_answer(answer)
        if not isinstance(answer, dict):
            return False
        expected = count_blanks(question.config.text)
        return all(has_text(answer.get(blank_key(i))) for i in range(expected))

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        answer = normalize_answer(answer)
        if not isinstance(answer, dict):
            return False
        return all(isinstance(key, str) and isinstance(value, str) for key, value in answer.items())

    def score(self, question: QuestionBase, answer: Any, max_score: float) -> float:
        """Share of blanks matching one of their accepted answers."""
        answer = normalize_answer(answer)
        blanks = question.config.blanks
        correct = 0
        for i, blank in enumerate(blanks):
            given = answer.get(blank_key(i)) if isinstance(answer, dict) else None
            if text_matches(given, blank.correct_answers, blank.case_sensitive):
                correct += 1
        return proportional_score(correct, len(blanks), max_score)
