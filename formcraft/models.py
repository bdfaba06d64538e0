"""
Form Document Models.

Questions are a tagged union keyed on ``type``: every variant carries its own
strongly-typed config. Models read the camelCase keys used by stored form
documents (``isCorrect``, ``subQuestions``) as well as snake_case names, and
keep unknown keys so builder-only fields survive a load/dump round trip.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel


class QuestionType(str, Enum):
    """Supported question types."""
    MCQ = "mcq"
    MCA = "mca"
    CATEGORIZE = "categorize"
    CLOZE = "cloze"
    COMPREHENSION = "comprehension"
    IMAGE = "image"


class SubQuestionType(str, Enum):
    """Question types allowed inside a comprehension passage."""
    MCQ = "mcq"
    MCA = "mca"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"


# Uploaded image: a URL string or the storage provider's descriptor object
ImageRef = Union[str, dict[str, Any]]


class CamelModel(BaseModel):
    """Base model accepting camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by stored documents."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Type-Specific Configs
# =============================================================================


class Option(CamelModel):
    id: str
    text: str = ""
    is_correct: bool = False


class ChoiceConfig(CamelModel):
    """Config shared by single-select (mcq) and multi-select (mca)."""
    options: list[Option] = Field(default_factory=list)


class Category(CamelModel):
    id: str
    label: str = ""
    color: str | None = None


class CategorizeItem(CamelModel):
    id: str
    text: str = ""
    correct_category: str | None = None

    @field_validator("correct_category", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        # The builder stores "" for an item without an answer key
        return None if value == "" else value


class CategorizeConfig(CamelModel):
    categories: list[Category] = Field(default_factory=list)
    items: list[CategorizeItem] = Field(default_factory=list)


class Blank(CamelModel):
    id: str | None = None
    correct_answers: list[str] = Field(default_factory=list)
    case_sensitive: bool = False
    position: int | None = None
    blank_text: str | None = None


class ClozeConfig(CamelModel):
    text: str = ""
    blanks: list[Blank] = Field(default_factory=list)


class SubQuestionBase(CamelModel):
    id: str
    question: str = ""
    points: float = Field(default=1, ge=0)


class McqSubQuestion(SubQuestionBase):
    type: Literal["mcq", "multiple-choice"] = "mcq"
    options: list[Option] = Field(default_factory=list)
    correct_answer: str | None = None  # legacy: id of the correct option


class McaSubQuestion(SubQuestionBase):
    type: Literal["mca"] = "mca"
    options: list[Option] = Field(default_factory=list)


class TrueFalseSubQuestion(SubQuestionBase):
    type: Literal["true-false"] = "true-false"
    correct_answer: bool | None = None


class ShortAnswerSubQuestion(SubQuestionBase):
    type: Literal["short-answer"] = "short-answer"
    correct_answers: list[str] = Field(default_factory=list)
    correct_answer: str | None = None  # legacy single answer
    case_sensitive: bool = False
    max_length: int | None = Field(default=200, ge=1)


SubQuestion = Annotated[
    Union[McqSubQuestion, McaSubQuestion, TrueFalseSubQuestion, ShortAnswerSubQuestion],
    Field(discriminator="type"),
]


class ComprehensionConfig(CamelModel):
    passage: str = ""
    sub_questions: list[SubQuestion] = Field(default_factory=list)


class ImageConfig(CamelModel):
    question_image: ImageRef | None = None
    image_url: str | None = None  # legacy name for question_image
    question: str | None = None
    allow_multiple_images: bool = False
    max_images: int = Field(default=1, ge=1)
    requires_text_answer: bool = False
    text_placeholder: str = "Describe what you see..."


CONFIG_MODELS: dict[QuestionType, type[CamelModel]] = {
    QuestionType.MCQ: ChoiceConfig,
    QuestionType.MCA: ChoiceConfig,
    QuestionType.CATEGORIZE: CategorizeConfig,
    QuestionType.CLOZE: ClozeConfig,
    QuestionType.COMPREHENSION: ComprehensionConfig,
    QuestionType.IMAGE: ImageConfig,
}


# =============================================================================
# Questions
# =============================================================================


class Scoring(CamelModel):
    enabled: bool = False
    points: float = Field(default=1, ge=0)


class QuestionBase(CamelModel):
    id: str
    title: str = ""
    description: str | None = None
    image: ImageRef | None = None
    required: bool = True
    order: int = 0
    scoring: Scoring = Field(default_factory=Scoring)


class McqQuestion(QuestionBase):
    type: Literal["mcq"] = "mcq"
    config: ChoiceConfig


class McaQuestion(QuestionBase):
    type: Literal["mca"] = "mca"
    config: ChoiceConfig


class CategorizeQuestion(QuestionBase):
    type: Literal["categorize"] = "categorize"
    config: CategorizeConfig


class ClozeQuestion(QuestionBase):
    type: Literal["cloze"] = "cloze"
    config: ClozeConfig


class ComprehensionQuestion(QuestionBase):
    type: Literal["comprehension"] = "comprehension"
    config: ComprehensionConfig


class ImageQuestion(QuestionBase):
    type: Literal["image"] = "image"
    config: ImageConfig


class UnknownQuestion(QuestionBase):
    """A question whose type tag is outside the supported set."""
    type: str
    config: dict[str, Any] = Field(default_factory=dict)


_KNOWN_TAGS = {t.value for t in QuestionType}


def _question_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, QuestionType):
        kind = kind.value
    return kind if kind in _KNOWN_TAGS else "unknown"


Question = Annotated[
    Union[
        Annotated[McqQuestion, Tag("mcq")],
        Annotated[McaQuestion, Tag("mca")],
        Annotated[CategorizeQuestion, Tag("categorize")],
        Annotated[ClozeQuestion, Tag("cloze")],
        Annotated[ComprehensionQuestion, Tag("comprehension")],
        Annotated[ImageQuestion, Tag("image")],
        Annotated[UnknownQuestion, Tag("unknown")],
    ],
    Discriminator(_question_tag),
]

_question_adapter: TypeAdapter[Any] = TypeAdapter(Question)


def parse_question(data: dict[str, Any] | QuestionBase) -> QuestionBase:
    """Parse a raw question document into its typed variant."""
    if isinstance(data, QuestionBase):
        return data
    return _question_adapter.validate_python(data)


# =============================================================================
# Forms and Responses
# =============================================================================


class FormSettings(CamelModel):
    is_published: bool = False
    allow_anonymous: bool = True
    collect_email: bool = False
    show_progress_bar: bool = True
    allow_multiple_submissions: bool = False
    submission_message: str = "Thank you for your submission!"


class Form(CamelModel):
    id: str | None = None
    title: str = ""
    description: str | None = None
    header_image: ImageRef | None = None
    questions: list[Question] = Field(default_factory=list)
    settings: FormSettings = Field(default_factory=FormSettings)

    def get_question(self, question_id: str) -> QuestionBase | None:
        """Find a question by id."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


class Answer(CamelModel):
    """One submitted answer, plus its score once graded."""
    question_id: str
    question_type: str | None = None
    answer: Any = None
    time_spent: float = Field(default=0, ge=0)
    score: float | None = None
    max_score: float | None = None


class Response(CamelModel):
    form_id: str | None = None
    answers: list[Answer] = Field(default_factory=list)
    total_time_spent: float = Field(default=0, ge=0)
    total_score: float | None = None
    max_total_score: float | None = None
    score_percentage: int | None = None
    completion_percentage: int = Field(default=100, ge=0, le=100)
    is_complete: bool = True
