"""
Form builder operations.

Pure functions over question configs: each returns a new config and leaves
its input untouched. New questions, options, categories, items and
sub-questions get fresh ids; ids are never reused.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from loguru import logger

from formcraft.cloze_text import parse_blanks
from formcraft.config import get_settings
from formcraft.errors import UnknownQuestionTypeError
from formcraft.models import (
    Blank,
    CamelModel,
    CategorizeConfig,
    ChoiceConfig,
    ClozeConfig,
    ComprehensionConfig,
    McaSubQuestion,
    McqSubQuestion,
    QuestionBase,
    QuestionType,
    ShortAnswerSubQuestion,
    SubQuestionType,
    TrueFalseSubQuestion,
    parse_question,
)
from formcraft.questions import get_handler

CATEGORY_COLORS = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6",
    "#06B6D4", "#84CC16", "#F97316", "#EC4899", "#6B7280",
]

# Choice sub-questions keep at least this many options
MIN_SUB_OPTIONS = 2


def generate_id(prefix: str = "") -> str:
    """Unique id for questions and their parts."""
    token = uuid4().hex[:12]
    return f"{prefix}_{token}" if prefix else token


def _updated(model: CamelModel, changes: dict[str, Any]) -> CamelModel:
    """Copy of ``model`` with ``changes`` applied and re-validated."""
    return type(model).model_validate({**model.model_dump(), **changes})


def _replace(models: list, target_id: str, changes: dict[str, Any]) -> list:
    return [_updated(m, changes) if m.id == target_id else m for m in models]


# =============================================================================
# Questions
# =============================================================================


def new_question(question_type: QuestionType | str, order: int = 0, title: str | None = None) -> QuestionBase:
    """A required question seeded with the type's default config."""
    handler = get_handler(question_type)
    if handler is None:
        raise UnknownQuestionTypeError(question_type)

    return parse_question({
        "id": generate_id("q"),
        "type": QuestionType(question_type).value,
        "title": title or f"Question {order + 1}",
        "description": "",
        "image": None,
        "required": True,
        "order": order,
        "config": handler.default_config(),
        "scoring": {"enabled": False, "points": get_settings().default_points},
    })


def duplicate_question(question: QuestionBase, order: int | None = None) -> QuestionBase:
    """Copy a question under a fresh id."""
    duplicate = question.model_copy(deep=True, update={
        "id": generate_id("q"),
        "title": f"{question.title} (Copy)",
    })
    if order is not None:
        duplicate.order = order
    return duplicate


# =============================================================================
# Choice options
# =============================================================================


def add_option(config: ChoiceConfig, text: str | None = None) -> ChoiceConfig:
    option = {"id": generate_id("opt"), "text": text or f"Option {len(config.options) + 1}", "is_correct": False}
    return _updated(config, {"options": [*config.model_dump()["options"], option]})


def update_option(config: ChoiceConfig, option_id: str, **changes: Any) -> ChoiceConfig:
    return config.model_copy(update={"options": _replace(config.options, option_id, changes)})


def delete_option(config: ChoiceConfig, option_id: str) -> ChoiceConfig:
    return config.model_copy(update={"options": [o for o in config.options if o.id != option_id]})


# =============================================================================
# Categories and items
# =============================================================================


def add_category(config: CategorizeConfig, label: str | None = None) -> CategorizeConfig:
    count = len(config.categories)
    category = {
        "id": generate_id("cat"),
        "label": label or f"Category {count + 1}",
        "color": CATEGORY_COLORS[count % len(CATEGORY_COLORS)],
    }
    return _updated(config, {"categories": [*config.model_dump()["categories"], category]})


def update_category(config: CategorizeConfig, category_id: str, **changes: Any) -> CategorizeConfig:
    return config.model_copy(update={"categories": _replace(config.categories, category_id, changes)})


def delete_category(config: CategorizeConfig, category_id: str) -> CategorizeConfig:
    """Remove a category; items keyed to it move to the first remaining category."""
    categories = [c for c in config.categories if c.id != category_id]
    fallback = categories[0].id if categories else None
    items = [
        _updated(item, {"correct_category": fallback}) if item.correct_category == category_id else item
        for item in config.items
    ]
    return config.model_copy(update={"categories": categories, "items": items})


def add_item(config: CategorizeConfig, text: str | None = None) -> CategorizeConfig:
    item = {
        "id": generate_id("item"),
        "text": text or f"Item {len(config.items) + 1}",
        "correct_category": config.categories[0].id if config.categories else None,
    }
    return _updated(config, {"items": [*config.model_dump()["items"], item]})


def update_item(config: CategorizeConfig, item_id: str, **changes: Any) -> CategorizeConfig:
    return config.model_copy(update={"items": _replace(config.items, item_id, changes)})


def delete_item(config: CategorizeConfig, item_id: str) -> CategorizeConfig:
    return config.model_copy(update={"items": [i for i in config.items if i.id != item_id]})


# =============================================================================
# Cloze blanks
# =============================================================================


def sync_blanks(text: str, blanks: list[Blank]) -> list[Blank]:
    """
    Derive blank configs from the placeholders in ``text``.

    Positions that still exist keep their id, accepted answers and case
    setting; new positions are seeded with the placeholder text as the only
    accepted answer.
    """
    synced = []
    for parsed in parse_blanks(text):
        existing = blanks[parsed.index] if parsed.index < len(blanks) else None
        if existing is not None and existing.correct_answers:
            correct_answers = list(existing.correct_answers)
        else:
            correct_answers = [parsed.placeholder]
        synced.append(Blank(
            id=existing.id if existing is not None and existing.id else generate_id("blank"),
            correct_answers=correct_answers,
            case_sensitive=existing.case_sensitive if existing is not None else False,
            position=parsed.index,
            blank_text=parsed.placeholder,
        ))
    return synced


def set_cloze_text(config: ClozeConfig, text: str) -> ClozeConfig:
    """Replace the cloze text and realign the blanks with it."""
    blanks = sync_blanks(text, config.blanks)
    logger.debug(f"Cloze text now has {len(blanks)} blank(s)")
    return config.model_copy(update={"text": text, "blanks": blanks})


def update_blank(config: ClozeConfig, blank_id: str, **changes: Any) -> ClozeConfig:
    """Edit one blank's answer key (correct_answers, case_sensitive)."""
    return config.model_copy(update={"blanks": _replace(config.blanks, blank_id, changes)})


# =============================================================================
# Comprehension sub-questions
# =============================================================================


def _sub_options(count: int) -> list[dict]:
    return [
        {"id": generate_id("opt"), "text": f"Option {i + 1}", "is_correct": False}
        for i in range(count)
    ]


def new_sub_question(sub_type: SubQuestionType | str = SubQuestionType.MCQ):
    """A sub-question seeded the way the builder adds them."""
    try:
        sub_type = SubQuestionType(getattr(sub_type, "value", sub_type))
    except ValueError:
        raise UnknownQuestionTypeError(sub_type) from None

    base = {"id": generate_id("subq"), "question": "Question about the passage", "points": 1}
    if sub_type is SubQuestionType.MCQ:
        return McqSubQuestion(**base, options=_sub_options(4))
    if sub_type is SubQuestionType.MCA:
        return McaSubQuestion(**base, options=_sub_options(4))
    if sub_type is SubQuestionType.TRUE_FALSE:
        return TrueFalseSubQuestion(**base, correct_answer=True)
    return ShortAnswerSubQuestion(**base, correct_answers=["Sample answer"], case_sensitive=False, max_length=200)


def add_sub_question(
    config: ComprehensionConfig,
    sub_type: SubQuestionType | str = SubQuestionType.MCQ,
) -> ComprehensionConfig:
    return config.model_copy(update={"sub_questions": [*config.sub_questions, new_sub_question(sub_type)]})


def update_sub_question(config: ComprehensionConfig, sub_id: str, **changes: Any) -> ComprehensionConfig:
    return config.model_copy(update={"sub_questions": _replace(config.sub_questions, sub_id, changes)})


def delete_sub_question(config: ComprehensionConfig, sub_id: str) -> ComprehensionConfig:
    return config.model_copy(update={
        "sub_questions": [s for s in config.sub_questions if s.id != sub_id],
    })


def add_sub_option(config: ComprehensionConfig, sub_id: str) -> ComprehensionConfig:
    """Append an option to a choice sub-question; other sub-questions are left alone."""
    subs = []
    for sub in config.sub_questions:
        if sub.id == sub_id and isinstance(sub, (McqSubQuestion, McaSubQuestion)):
            option = {"id": generate_id("opt"), "text": f"Option {len(sub.options) + 1}", "is_correct": False}
            sub = _updated(sub, {"options": [*sub.model_dump()["options"], option]})
        subs.append(sub)
    return config.model_copy(update={"sub_questions": subs})


def delete_sub_option(config: ComprehensionConfig, sub_id: str, option_id: str) -> ComprehensionConfig:
    """Remove an option from a choice sub-question, keeping at least MIN_SUB_OPTIONS."""
    subs = []
    for sub in config.sub_questions:
        if (
            sub.id == sub_id
            and isinstance(sub, (McqSubQuestion, McaSubQuestion))
            and len(sub.options) > MIN_SUB_OPTIONS
        ):
            sub = sub.model_copy(update={"options": [o for o in sub.options if o.id != option_id]})
        subs.append(sub)
    return config.model_copy(update={"sub_questions": subs})
