"""
Image question handler.

The respondent answers with a reference to an uploaded image: a URL string
or the upload descriptor object. Questions allowing several images take a
list of references.
"""

from typing import Any

from formcraft.models import ImageConfig, QuestionBase

from . import QuestionType, register
from .base import has_text, has_value


def _is_image_ref(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip() != ""
    return isinstance(value, dict) and len(value) > 0


@register(QuestionType.IMAGE)
class ImageHandler:
    """Handler for image upload questions."""

    config_model = ImageConfig

    def default_config(self) -> dict:
        return {
            "questionImage": None,
            "question": "Upload an image that answers the question.",
            "allowMultipleImages": False,
            "maxImages": 1,
            "requiresTextAnswer": False,
            "textPlaceholder": "Describe what you see...",
        }

    def check_config(self, config: ImageConfig) -> str | None:
        if config.question_image or config.image_url or has_text(config.question):
            return None
        return "no_image_or_prompt"

    def is_answered(self, question: QuestionBase, answer: Any) -> bool:
        return has_value(answer)

    def is_well_formed(self, question: QuestionBase, answer: Any) -> bool:
        config = question.config
        if isinstance(answer, list):
            if not config.allow_multiple_images:
                return False
            return 0 < len(answer) <= config.max_images and all(_is_image_ref(a) for a in answer)
        return _is_image_ref(answer)

    def score(self, question: QuestionBase, answer: Any, max_score: float) -> float:
        # Uploaded images need a human grader
        return 0
