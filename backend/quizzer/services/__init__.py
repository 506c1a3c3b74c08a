"""Business logic services."""

from .pdf_text import extract_text
from .quiz_generator import QuizGenerator, generate_questions
from .relay_client import RelayClient
from .response_parser import extract_candidate, parse_question_set, validate_question_set

__all__ = [
    "extract_text",
    "QuizGenerator",
    "generate_questions",
    "RelayClient",
    "extract_candidate",
    "parse_question_set",
    "validate_question_set",
]
