"""Pydantic models for the Lesson Quizzer application."""

from .exam import ExamResult, ExamSession, QuestionResult
from .question import OPTION_COUNT, QUESTION_COUNT, Question, QuestionSet
from .relay import ErrorResponse, GenerateRequest, GenerateResponse

__all__ = [
    "OPTION_COUNT",
    "QUESTION_COUNT",
    "Question",
    "QuestionSet",
    "ExamSession",
    "ExamResult",
    "QuestionResult",
    "GenerateRequest",
    "GenerateResponse",
    "ErrorResponse",
]
