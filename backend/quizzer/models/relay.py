"""Request/response bodies for the question relay."""

from pydantic import BaseModel

from .question import Question


class GenerateRequest(BaseModel):
    """Extracted handout text sent by the client."""

    text: str = ""


class GenerateResponse(BaseModel):
    """A validated question set."""

    questions: list[Question]


class ErrorResponse(BaseModel):
    """Human-readable failure reason."""

    error: str
