"""
formcraft: question type engine for a multi-type form builder.

Components:
- questions: Per-type handlers (mcq, mca, categorize, cloze, comprehension, image)
- cloze_text: {{blank}} placeholder parser shared by builder, validation and scoring
- engine: Config validation, answer validation, scoring and submission gating
- builder: Pure edit operations over question configs
"""

from .engine import (
    ScoreReport,
    SubmissionOutcome,
    check_publishable,
    evaluate_submission,
    get_default_config,
    is_required_answer_present,
    is_well_formed_answer,
    score_question,
    score_response,
    validate_config,
    validate_form,
)
from .cloze_text import parse_blanks
from .errors import AnswerError, ConfigError, ErrorCode, UnknownQuestionTypeError
from .models import Answer, Form, QuestionType, Response, parse_question
from .questions import HANDLERS, get_handler, is_known_type

# Supported types derived from registered handlers
SUPPORTED_TYPES = list(HANDLERS.keys())

__version__ = "1.0.0"

__all__ = [
    "Answer",
    "AnswerError",
    "ConfigError",
    "ErrorCode",
    "Form",
    "HANDLERS",
    "QuestionType",
    "Response",
    "SUPPORTED_TYPES",
    "ScoreReport",
    "SubmissionOutcome",
    "UnknownQuestionTypeError",
    "check_publishable",
    "evaluate_submission",
    "get_default_config",
    "get_handler",
    "is_known_type",
    "is_required_answer_present",
    "is_well_formed_answer",
    "parse_blanks",
    "parse_question",
    "score_question",
    "score_response",
    "validate_config",
    "validate_form",
]
