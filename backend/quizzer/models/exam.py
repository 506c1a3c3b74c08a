"""Exam session models.

An exam session pairs a generated question set with the answers picked so
far. Nothing here is persisted; a session lives as long as the caller holds it.
"""

from pydantic import BaseModel, Field, model_validator

from .question import Question


class QuestionResult(BaseModel):
    """Outcome for one question after submission."""

    index: int
    question: str
    picked: str | None
    answer: str
    is_correct: bool


class ExamResult(BaseModel):
    """Score plus per-question breakdown."""

    score: int
    total: int
    results: list[QuestionResult]

    @property
    def incorrect(self) -> list[QuestionResult]:
        return [r for r in self.results if not r.is_correct]


class ExamSession(BaseModel):
    """Answers picked for a question set, indexed parallel to it."""

    questions: list[Question]
    answers: list[str | None] = Field(
        default_factory=list, description="Picked option per question, None if unanswered"
    )

    @model_validator(mode="after")
    def align_answers(self) -> "ExamSession":
        if not self.answers:
            self.answers = [None] * len(self.questions)
        elif len(self.answers) != len(self.questions):
            raise ValueError(
                f"{len(self.answers)} answers for {len(self.questions)} questions"
            )
        return self

    def pick(self, index: int, option: str) -> None:
        """Record the picked option for the question at ``index``."""
        if not 0 <= index < len(self.questions):
            raise IndexError(f"No question at index {index}")
        if option not in self.questions[index].options:
            raise ValueError(f"{option!r} is not an option for question {index + 1}")
        self.answers[index] = option

    @property
    def unanswered_count(self) -> int:
        return sum(1 for a in self.answers if a is None)

    @property
    def is_complete(self) -> bool:
        return self.unanswered_count == 0

    @property
    def score(self) -> int:
        return sum(1 for q, a in zip(self.questions, self.answers) if q.is_correct(a))

    def results(self) -> ExamResult:
        """Grade every question, answered or not."""
        results = [
            QuestionResult(
                index=i,
                question=q.question,
                picked=a,
                answer=q.answer,
                is_correct=q.is_correct(a),
            )
            for i, (q, a) in enumerate(zip(self.questions, self.answers))
        ]
        return ExamResult(
            score=sum(1 for r in results if r.is_correct),
            total=len(self.questions),
            results=results,
        )

    def reset(self) -> None:
        """Discard every picked answer."""
        self.answers = [None] * len(self.questions)
