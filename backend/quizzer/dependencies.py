from fastapi import Request

from quizzer.config import Settings
from quizzer.errors import TransportError
from quizzer.services.quiz_generator import QuizGenerator


def get_app_settings(request: Request) -> Settings:
    result: Settings = request.app.state.settings
    return result


def get_quiz_generator(request: Request) -> QuizGenerator:
    """Generator built once at startup, backed by the relay-held credential."""
    generator: QuizGenerator | None = getattr(request.app.state, "quiz_generator", None)
    if generator is None:
        raise TransportError("No model credential configured for the relay")
    return generator
