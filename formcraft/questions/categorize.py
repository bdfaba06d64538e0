"""
Categorize handler.

Bucket sorting where respondents assign items to categories.
The answer maps item ids to category ids: {"item-1": "cat-2", ...}.
"""

from typing import Any

from formcraft.models import CategorizeConfig, QuestionBase

from . import QuestionType, register
from .base import has_value, proportional_score


@register(QuestionType.CATEGORIZE)
class CategorizeHandler:
    """Handler for categorize questions - bucket sorting."""

    config_model = CategorizeConfig

    def default_config(self) -> dict:
        return {
            "categories": [
                {"id": "1", "label": "Category 1", "color": "#3B82F6"},
                {"id": "2", "label": "Category 2", "color": "#10B981"},
            ],
            "items": [
                {"id": "1", "text": "Item 1", "correctCategory": "1"},
                {"id": "2", "text": "Item 2", "correctCategory": "2"},
            ],
        }

    def check_config(self, config: CategorizeConfig) -> str | None:
        if not config.categories:
            return "no_categories"
        if not config.items:
            return "no_items"
        category_ids = {category.id for category in config.categories}
        for item in config.items:
            if item.correct_category is not None and item.correct_category not in category_ids:
                return "unknown_category"
        return None

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        """Every item must be placed in some category, right or wrong."""
        if not isinstance(answer, dict):
            return False
        return all(has_value(answer.get(item.id)) for item in question.config.items)

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        if not isinstance(answer, dict):
            return False
        item_ids = {item.id for item in question.config.items}
        category_ids = {category.id for category in question.config.categories}
        return all(
            item_id in item_ids and isinstance(category_id, str) and category_id in category_ids
            for item_id, category_id in answer.items()
        )

    def score(self, question: QuestionBase, answer: dict, max_score: float) -> float:
        """Share of keyed items placed in their correct category."""
        scored = [item for item in question.config.items if item.correct_category is not None]
        if not scored:
            # No answer key: ungraded content gets full credit
            return max_score

        correct = sum(1 for item in scored if answer.get(item.id) == item.correct_category)
        return proportional_score(correct, len(scored), max_score)
