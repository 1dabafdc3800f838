from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

CORRECT_COUNT_MESSAGE = "correctAnswers must not be larger than promptCount"


def _utc_now():
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class QuizPrompt(BaseModel):
    """A single prompt presented in a quiz, with the answer it expects."""
    prompt: str
    answer: str


class Quiz(BaseModel):
    """
    An issued quiz.

    The prompts may contain duplicates, depending upon the group configuration.
    created_at is kept server side for duration calculation and is not rendered.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    created_at: Optional[datetime] = Field(default_factory=_utc_now, exclude=True)
    prompts: Optional[List[Optional[QuizPrompt]]] = None

    def to_dict(self):
        """Convert model to a JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=True)


class CompletedQuiz(BaseModel):
    """A quiz submitted back for grading. Every answer must be filled in."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    answers: List[str] = Field(min_length=1)
    inline_grading: bool = False

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("answers")
    @classmethod
    def _answers_not_blank(cls, value: List[str]) -> List[str]:
        blank = [index for index, answer in enumerate(value) if not answer.strip()]
        if blank:
            raise ValueError(f"entries at positions {blank} must not be blank")
        return value


class _GradedCounts(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    prompt_count: int = Field(0, ge=0)
    correct_answers: int = Field(0, ge=0)
    percentage: int = Field(0, ge=0, le=100)
    time_minutes: int = Field(0, ge=0)
    time_seconds: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _correct_within_prompt_count(self):
        if self.correct_answers > self.prompt_count:
            raise ValueError(CORRECT_COUNT_MESSAGE)
        return self

    def to_dict(self):
        """Convert model to a JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=True)


class QuizResult(_GradedCounts):
    """The graded result returned to the quiz taker."""


class CompletedPrompt(BaseModel):
    """One graded prompt, suitable for internal storage."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: str
    expected_answer: str
    answer_provided: Optional[str] = None
    correct_answer: bool = False


class InternalQuizResult(_GradedCounts):
    """The graded result kept by the server, including each prompt's outcome."""
    id: UUID
    created_at: datetime
    completed_prompts: List[CompletedPrompt] = Field(default_factory=list)

    def to_quiz_result(self) -> QuizResult:
        """The counts returned to the quiz taker, without the per-prompt detail."""
        return QuizResult.model_validate(self.model_dump(include=set(QuizResult.model_fields)))
