"""Question-related Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

QUESTION_COUNT = 40  # questions per exam
OPTION_COUNT = 4  # options per question


class Question(BaseModel):
    """A single multiple-choice question as produced by the model."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "question": "What is the capital of France?",
                "options": ["London", "Berlin", "Paris", "Rome"],
                "answer": "Paris",
            }
        },
    )

    question: StrictStr = Field(min_length=1, description="Question text")
    options: list[StrictStr] = Field(
        min_length=OPTION_COUNT,
        max_length=OPTION_COUNT,
        description="Exactly four answer options, in display order",
    )
    answer: StrictStr = Field(description="Must equal one of the options exactly")

    @model_validator(mode="after")
    def answer_in_options(self) -> "Question":
        if self.answer not in self.options:
            raise ValueError(f"answer {self.answer!r} is not one of the options")
        return self

    def is_correct(self, picked: str | None) -> bool:
        """Check a picked option against the answer (exact string match)."""
        return picked == self.answer


QuestionSet = list[Question]
