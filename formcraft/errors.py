"""
Error taxonomy for the question engine.

Validation failures are expected outcomes and are returned as typed results
so callers can report every failing question at once. Exceptions are kept
for programming errors only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes surfaced to callers."""
    INVALID_QUESTION_CONFIG = "INVALID_QUESTION_CONFIG"
    REQUIRED_QUESTION_MISSING = "REQUIRED_QUESTION_MISSING"
    INVALID_ANSWER_FORMAT = "INVALID_ANSWER_FORMAT"
    EMPTY_FORM = "EMPTY_FORM"


# Human-readable text for config reason codes
CONFIG_REASONS: dict[str, str] = {
    "unknown_type": "question type is not supported",
    "malformed": "configuration does not match the question type",
    "no_options": "at least one option is required",
    "empty_option_text": "every option needs text",
    "duplicate_option_id": "option ids must be unique",
    "no_categories": "at least one category is required",
    "no_items": "at least one item is required",
    "unknown_category": "an item points at a category that does not exist",
    "no_text": "cloze text is required",
    "no_blanks": "cloze text has no {{blank}} placeholders",
    "unbalanced_braces": "cloze text has unmatched '{{' or '}}'",
    "blank_count_mismatch": "number of blanks does not match the placeholders in the text",
    "no_passage": "a reading passage is required",
    "no_sub_questions": "at least one sub-question is required",
    "sub_question_without_options": "choice sub-questions need at least one option",
    "no_image_or_prompt": "an image or a question prompt is required",
    "duplicate_question_id": "question ids must be unique within a form",
    "no_questions": "a form needs at least one question",
}


class UnknownQuestionTypeError(ValueError):
    """Raised when an operation needs a handler for a type tag that has none."""

    def __init__(self, question_type: Any):
        self.question_type = question_type
        super().__init__(f"Unknown question type: {question_type!r}")


@dataclass(frozen=True)
class ConfigError:
    """A question configuration that cannot be saved or published."""
    reason: str
    question_type: str
    question_index: int | None = None  # 1-based position in the form
    question_id: str | None = None
    code: ErrorCode = ErrorCode.INVALID_QUESTION_CONFIG

    @property
    def message(self) -> str:
        detail = CONFIG_REASONS.get(self.reason, self.reason)
        if self.code is ErrorCode.EMPTY_FORM:
            return "Cannot publish form without questions"
        if self.question_index is None:
            return f"Invalid configuration for question of type {self.question_type}: {detail}"
        return (
            f"Invalid configuration for question {self.question_index} "
            f"of type {self.question_type}: {detail}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "reason": self.reason,
            "message": self.message,
            "questionIndex": self.question_index,
            "questionId": self.question_id,
            "questionType": self.question_type,
        }


@dataclass(frozen=True)
class AnswerError:
    """A submitted answer that blocks acceptance of a response."""
    code: ErrorCode
    question_id: str
    question_title: str

    @property
    def message(self) -> str:
        if self.code is ErrorCode.REQUIRED_QUESTION_MISSING:
            return f"Answer required for question: {self.question_title}"
        return f"Invalid answer format for question: {self.question_title}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "questionId": self.question_id,
        }
