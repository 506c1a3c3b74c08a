"""Handout to question set, end to end."""

import asyncio
import logging
import warnings

from quizzer.config import Settings, get_settings
from quizzer.errors import ShortInputWarning
from quizzer.models.question import Question
from quizzer.services.pdf_text import extract_text
from quizzer.services.quiz_generator import QuizGenerator
from quizzer.services.relay_client import RelayClient

logger = logging.getLogger(__name__)


async def extract_handout_text(file_bytes: bytes, settings: Settings | None = None) -> str:
    """Extract text off the event loop and flag suspiciously short results."""
    settings = settings or get_settings()
    text = await asyncio.to_thread(extract_text, file_bytes)
    if len(text) < settings.short_text_warning_length:
        logger.warning(f"PDF text seems very short ({len(text)} characters)")
        warnings.warn(
            "PDF text seems very short. Results may be limited.",
            ShortInputWarning,
            stacklevel=2,
        )
    return text


async def quiz_from_pdf(
    file_bytes: bytes,
    generator: QuizGenerator | RelayClient,
    settings: Settings | None = None,
) -> list[Question]:
    """Extract the handout, then generate from it. Strictly sequential."""
    text = await extract_handout_text(file_bytes, settings)
    return await generator.generate(text)
