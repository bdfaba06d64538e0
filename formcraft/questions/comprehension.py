"""
Comprehension handler.

A reading passage followed by sub-questions. Sub-questions are their own
closed set of types, each with its own answer shape and answer key:

- mcq: option id, graded against the option marked isCorrect
- mca: list of option ids, graded by set equality with the isCorrect options
- true-false: boolean (or "true"/"false"), graded against correctAnswer
- short-answer: text, graded against any of correctAnswers

The answer maps sub-question ids to those values.
"""

from typing import Any

from formcraft.models import (
    ComprehensionConfig,
    McaSubQuestion,
    McqSubQuestion,
    QuestionBase,
    ShortAnswerSubQuestion,
    TrueFalseSubQuestion,
)

from . import QuestionType, register
from .base import has_text, is_string_list, proportional_score, text_matches

_BOOLEAN_TEXT = {"true": True, "false": False}


def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _BOOLEAN_TEXT.get(value.strip().lower())
    return None


def _sub_is_answered(sub, value: Any) -> bool:
    if isinstance(sub, McaSubQuestion):
        return isinstance(value, list) and len(value) > 0
    if isinstance(sub, TrueFalseSubQuestion):
        return isinstance(value, bool) or has_text(value)
    return has_text(value)


def _sub_is_well_formed(sub, value: Any) -> bool:
    if isinstance(sub, McqSubQuestion):
        return isinstance(value, str) and (value == "" or value in {o.id for o in sub.options})
    if isinstance(sub, McaSubQuestion):
        return is_string_list(value) and set(value) <= {o.id for o in sub.options}
    if isinstance(sub, TrueFalseSubQuestion):
        return _as_bool(value) is not None or value == ""
    if isinstance(sub, ShortAnswerSubQuestion):
        if not isinstance(value, str):
            return False
        return sub.max_length is None or len(value) <= sub.max_length
    return False


def _sub_is_correct(sub, value: Any) -> bool | None:
    """Grade one sub-question; None when it has no answer key."""
    if isinstance(sub, McqSubQuestion):
        correct_ids = {o.id for o in sub.options if o.is_correct}
        if not correct_ids and sub.correct_answer:
            correct_ids = {sub.correct_answer}
        if not correct_ids:
            return None
        return isinstance(value, str) and value in correct_ids

    if isinstance(sub, McaSubQuestion):
        correct_ids = {o.id for o in sub.options if o.is_correct}
        if not correct_ids:
            return None
        return is_string_list(value) and set(value) == correct_ids

    if isinstance(sub, TrueFalseSubQuestion):
        if sub.correct_answer is None:
            return None
        return _as_bool(value) == sub.correct_answer

    if isinstance(sub, ShortAnswerSubQuestion):
        accepted = [a for a in sub.correct_answers if has_text(a)]
        if not accepted and has_text(sub.correct_answer):
            accepted = [sub.correct_answer]
        if not accepted:
            return None
        return text_matches(value, accepted, sub.case_sensitive)

    return None


@register(QuestionType.COMPREHENSION)
class ComprehensionHandler:
    """Handler for reading comprehension questions."""

    config_model = ComprehensionConfig

    def default_config(self) -> dict:
        return {
            "passage": "Enter your reading passage here...",
            "subQuestions": [
                {
                    "id": "1",
                    "type": "mcq",
                    "question": "Question about the passage",
                    "points": 1,
                    "options": [
                        {"id": "1", "text": "Option 1", "isCorrect": False},
                        {"id": "2", "text": "Option 2", "isCorrect": False},
                    ],
                }
            ],
        }

    def check_config(self, config: ComprehensionConfig) -> str | None:
        if not has_text(config.passage):
            return "no_passage"
        if not config.sub_questions:
            return "no_sub_questions"
        for sub in config.sub_questions:
            if isinstance(sub, (McqSubQuestion, McaSubQuestion)) and not sub.options:
                return "sub_question_without_options"
        return None

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        """Every sub-question needs a non-empty answer."""
        if not isinstance(answer, dict):
            return False
        return all(
            _sub_is_answered(sub, answer.get(sub.id))
            for sub in question.config.sub_questions
        )

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        if not isinstance(answer, dict):
            return False
        subs = {sub.id: sub for sub in question.config.sub_questions}
        for sub_id, value in answer.items():
            sub = subs.get(sub_id)
            if sub is None or not _sub_is_well_formed(sub, value):
                return False
        return True

    def score(self, question: QuestionBase, answer: dict, max_score: float) -> float:
        """Share of keyed sub-questions answered correctly."""
        results = [
            _sub_is_correct(sub, answer.get(sub.id))
            for sub in question.config.sub_questions
        ]
        graded = [r for r in results if r is not None]
        if not graded:
            return max_score
        return proportional_score(sum(graded), len(graded), max_score)
