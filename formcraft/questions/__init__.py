"""
Question type handlers.

Each question type (mcq, cloze, categorize, etc.) has its own module with:
- default_config(): Seed configuration for a freshly added question
- check_config(): Minimum-shape rules gating save and publish
- is_answered(): Completeness of an answer to a required question
- is_well_formed(): Structural type check of a submitted answer
- score(): Points earned against the answer key in the config
"""

from typing import TYPE_CHECKING

from formcraft.models import QuestionType

if TYPE_CHECKING:
    from .base import QuestionHandler


# Handler registry - populated by @register decorator
HANDLERS: dict[QuestionType, "QuestionHandler"] = {}


def register(question_type: QuestionType):
    """Decorator to register a question handler."""
    def decorator(cls):
        HANDLERS[question_type] = cls()
        return cls
    return decorator


def get_handler(question_type: "str | QuestionType") -> "QuestionHandler | None":
    """
    Look up the handler for a type tag.

    Tags match exactly, the same way form documents are parsed into
    question variants: "MCQ" is not "mcq" and has no handler.
    """
    try:
        return HANDLERS.get(QuestionType(question_type))
    except ValueError:
        return None


def is_known_type(question_type: "str | QuestionType") -> bool:
    return get_handler(question_type) is not None


# Import handlers to trigger registration
from . import choice
from . import categorize
from . import cloze
from . import comprehension
from . import image

_unhandled = set(QuestionType) - set(HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler registered for: {sorted(t.value for t in _unhandled)}")

__all__ = [
    "QuestionType",
    "HANDLERS",
    "get_handler",
    "is_known_type",
    "register",
]
