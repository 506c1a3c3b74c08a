"""Question relay endpoint."""

import logging

from fastapi import APIRouter, Depends

from quizzer.config import Settings
from quizzer.dependencies import get_app_settings, get_quiz_generator
from quizzer.errors import InputTooShortError
from quizzer.models.relay import ErrorResponse, GenerateRequest, GenerateResponse
from quizzer.services.quiz_generator import QuizGenerator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generator"])


def source_text(
    req: GenerateRequest, settings: Settings = Depends(get_app_settings)
) -> str:
    """Reject short text before a generator (and its credential) is touched."""
    if len(req.text) < settings.min_text_length:
        logger.info(f"Rejected text of length {len(req.text)}")
        raise InputTooShortError("PDF text is too short to generate meaningful questions")
    return req.text


@router.post(
    "/generate-questions",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_questions(
    text: str = Depends(source_text),
    generator: QuizGenerator = Depends(get_quiz_generator),
):
    """
    Generates a 40-question multiple-choice exam from extracted handout text.
    """
    questions = await generator.generate(text)
    return GenerateResponse(questions=questions)
