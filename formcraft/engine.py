"""
Question Engine: the operations callers use.

- Builder:    get_default_config, validate_config, validate_form, check_publishable
- Submission: is_required_answer_present, is_well_formed_answer, evaluate_submission
- Grading:    score_question, score_response

Everything here is pure: a fully materialized form and answer set in, results
out. Validation failures come back as ConfigError/AnswerError values so a
caller can report every failing question at once.
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable

from loguru import logger
from pydantic import ValidationError

from formcraft.errors import AnswerError, ConfigError, ErrorCode, UnknownQuestionTypeError
from formcraft.models import Answer, CamelModel, Form, QuestionBase, Response, UnknownQuestion, parse_question
from formcraft.questions import get_handler
from formcraft.questions.base import has_value, round_half_up


# =============================================================================
# Results
# =============================================================================


@dataclass
class QuestionScore:
    """Score of one answered question."""
    question_id: str
    question_type: str
    score: float | None
    max_score: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "questionId": self.question_id,
            "questionType": self.question_type,
            "score": self.score,
            "maxScore": self.max_score,
        }


@dataclass
class ScoreReport:
    """Aggregate score of a response."""
    total_score: float | None = None
    max_total_score: float | None = None
    score_percentage: int | None = None
    per_question: list[QuestionScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalScore": self.total_score,
            "maxTotalScore": self.max_total_score,
            "scorePercentage": self.score_percentage,
            "perQuestion": [q.to_dict() for q in self.per_question],
        }


@dataclass
class SubmissionOutcome:
    """Result of evaluating a submission: every error, or the graded response."""
    errors: list[AnswerError] = field(default_factory=list)
    response: Response | None = None

    @property
    def accepted(self) -> bool:
        return not self.errors

    @property
    def error(self) -> AnswerError | None:
        """The first error, used when only one can be shown."""
        return self.errors[0] if self.errors else None


# =============================================================================
# Config
# =============================================================================


def _type_name(question_type: Any) -> str:
    return getattr(question_type, "value", None) or str(question_type)


def get_default_config(question_type: Any) -> dict:
    """Seed configuration for a new question. Raises UnknownQuestionTypeError."""
    handler = get_handler(question_type)
    if handler is None:
        raise UnknownQuestionTypeError(question_type)
    return copy.deepcopy(handler.default_config())


def validate_config(question_type: Any, config: Any) -> ConfigError | None:
    """Check that ``config`` is complete enough to save; None when it is."""
    type_name = _type_name(question_type)
    handler = get_handler(question_type)
    if handler is None:
        logger.warning(f"Config check for unknown question type {type_name!r}")
        return ConfigError(reason="unknown_type", question_type=type_name)

    if isinstance(config, handler.config_model):
        parsed = config
    else:
        if isinstance(config, CamelModel):
            config = config.model_dump(by_alias=True)
        if not isinstance(config, dict):
            return ConfigError(reason="malformed", question_type=type_name)
        try:
            parsed = handler.config_model.model_validate(config)
        except ValidationError as e:
            logger.debug(f"{type_name} config failed to parse: {e}")
            return ConfigError(reason="malformed", question_type=type_name)

    reason = handler.check_config(parsed)
    if reason is None:
        return None
    return ConfigError(reason=reason, question_type=type_name)


def _raw_questions(document: dict | Form) -> list[Any]:
    if isinstance(document, Form):
        return [q.model_dump(by_alias=True) for q in document.questions]
    questions = document.get("questions") or []
    return questions if isinstance(questions, list) else []


def validate_form(document: dict | Form) -> list[ConfigError]:
    """Validate every question of a form document; one error per failing question."""
    errors: list[ConfigError] = []
    seen_ids: set[str] = set()

    for index, raw in enumerate(_raw_questions(document), start=1):
        if not isinstance(raw, dict):
            errors.append(ConfigError(reason="malformed", question_type="unknown", question_index=index))
            continue

        question_id = raw.get("id")
        error = validate_config(raw.get("type"), raw.get("config"))
        if error is None and question_id is not None and question_id in seen_ids:
            error = ConfigError(reason="duplicate_question_id", question_type=_type_name(raw.get("type")))
        if question_id is not None:
            seen_ids.add(question_id)

        if error is not None:
            errors.append(dataclasses.replace(error, question_index=index, question_id=question_id))

    if errors:
        logger.info(f"Form has {len(errors)} invalid question(s)")
    return errors


def check_publishable(document: dict | Form) -> list[ConfigError]:
    """Validate a form for publishing: it needs questions and every config must pass."""
    if not _raw_questions(document):
        return [ConfigError(reason="no_questions", question_type="form", code=ErrorCode.EMPTY_FORM)]
    return validate_form(document)


# =============================================================================
# Answers
# =============================================================================


def _handler_for(question: QuestionBase):
    # Only typed variants carry a parsed config a handler can read
    if isinstance(question, UnknownQuestion):
        return None
    return get_handler(question.type)


def is_required_answer_present(question: dict | QuestionBase, answer: Any) -> bool:
    """Check that an answer to a required question covers every part of it."""
    question = parse_question(question)
    handler = _handler_for(question)
    if handler is None:
        return has_value(answer)
    return handler.is_answered(question, answer)


def is_well_formed_answer(question: dict | QuestionBase, answer: Any) -> bool:
    """Check that an answer has the shape its question type expects."""
    question = parse_question(question)
    handler = _handler_for(question)
    if handler is None:
        logger.warning(f"Question {question.id} has unknown type {question.type!r}")
        return False
    return handler.is_well_formed(question, answer)


# =============================================================================
# Scoring
# =============================================================================


def score_question(question: dict | QuestionBase, answer: Any) -> float:
    """Points earned by ``answer``, between 0 and the question's points."""
    question = parse_question(question)
    max_score = question.scoring.points
    handler = _handler_for(question)
    if handler is None:
        logger.warning(f"Cannot score question {question.id}: unknown type {question.type!r}")
        return 0
    if not handler.is_well_formed(question, answer):
        logger.warning(f"Cannot score question {question.id}: malformed answer")
        return 0

    score = handler.score(question, answer, max_score)
    logger.debug(f"Question {question.id} ({question.type}): {score}/{max_score}")
    return score


def _as_form(form: dict | Form) -> Form:
    return form if isinstance(form, Form) else Form.model_validate(form)


def _as_answers(answers: Iterable[dict | Answer]) -> list[Answer]:
    return [a if isinstance(a, Answer) else Answer.model_validate(a) for a in answers]


def _summarize(scores: list[QuestionScore]) -> ScoreReport:
    scored = [s for s in scores if s.score is not None]
    report = ScoreReport(per_question=scores)
    if scored:
        report.total_score = sum(s.score for s in scored)
        report.max_total_score = sum(s.max_score or 0 for s in scored)
        if report.max_total_score > 0:
            report.score_percentage = round_half_up(report.total_score / report.max_total_score * 100)
    return report


def _grade(question: QuestionBase, answer: Answer) -> QuestionScore:
    if not question.scoring.enabled:
        return QuestionScore(question.id, question.type, None, None)
    return QuestionScore(
        question.id,
        question.type,
        score_question(question, answer.answer),
        question.scoring.points,
    )


def score_response(form: dict | Form, answers: Iterable[dict | Answer]) -> ScoreReport:
    """
    Score every answer to a scoring-enabled question and total them.

    A question answered more than once is scored on its last answer.
    """
    form = _as_form(form)
    by_question = {a.question_id: a for a in _as_answers(answers)}
    scores = []
    for answer in by_question.values():
        question = form.get_question(answer.question_id)
        if question is None:
            logger.warning(f"Answer for unknown question {answer.question_id} ignored")
            continue
        scores.append(_grade(question, answer))
    return _summarize(scores)


# =============================================================================
# Submission
# =============================================================================


def evaluate_submission(
    form: dict | Form,
    answers: Iterable[dict | Answer],
    total_time_spent: float | None = None,
) -> SubmissionOutcome:
    """
    Gate and grade a submission.

    The submission is accepted only if every required question has a complete
    answer and every submitted answer is well formed. Required-missing errors
    come first, in form order, followed by malformed answers in submission
    order. Accepted submissions carry a scored Response.
    """
    form = _as_form(form)
    answers = _as_answers(answers)
    by_question = {a.question_id: a for a in answers}
    errors: list[AnswerError] = []

    for question in form.questions:
        if not question.required:
            continue
        submitted = by_question.get(question.id)
        value = submitted.answer if submitted is not None else None
        if not is_required_answer_present(question, value):
            errors.append(AnswerError(ErrorCode.REQUIRED_QUESTION_MISSING, question.id, question.title))

    graded: list[tuple[Answer, QuestionScore]] = []
    for answer in by_question.values():
        question = form.get_question(answer.question_id)
        if question is None:
            logger.warning(f"Answer for unknown question {answer.question_id} ignored")
            continue
        if answer.answer is None:
            continue
        if not is_well_formed_answer(question, answer.answer):
            errors.append(AnswerError(ErrorCode.INVALID_ANSWER_FORMAT, question.id, question.title))
            continue
        graded.append((answer, _grade(question, answer)))

    if errors:
        logger.info(f"Submission for form {form.id} rejected: {errors[0].message}")
        return SubmissionOutcome(errors=errors)

    processed = [
        answer.model_copy(update={
            "question_type": score.question_type,
            "score": score.score,
            "max_score": score.max_score,
        })
        for answer, score in graded
    ]
    report = _summarize([score for _, score in graded])

    if form.questions:
        completion = round_half_up(len(processed) / len(form.questions) * 100)
    else:
        completion = 100
    if total_time_spent is None:
        total_time_spent = sum(a.time_spent for a in processed)

    response = Response(
        form_id=form.id,
        answers=processed,
        total_time_spent=total_time_spent,
        total_score=report.total_score,
        max_total_score=report.max_total_score,
        score_percentage=report.score_percentage,
        completion_percentage=min(completion, 100),
        is_complete=completion >= 100,
    )
    logger.info(f"Submission for form {form.id} accepted ({len(processed)} answers)")
    return SubmissionOutcome(response=response)
