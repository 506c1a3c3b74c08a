"""Pull a question set out of raw model output.

Two pure steps, kept apart from any HTTP code:

1. ``extract_candidate`` narrows noisy text to the substring that should hold
   the JSON array: fenced block first, then the outermost brackets, then the
   raw text.
2. ``validate_question_set`` checks the parsed value against the exam schema
   and reports the first problem instead of coercing anything.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from quizzer.errors import GenerationError
from quizzer.models.question import OPTION_COUNT, QUESTION_COUNT, Question

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


class ValidationFailure(str, Enum):
    """Why a parsed payload was rejected."""

    INVALID_JSON = "invalid_json"
    WRONG_COUNT = "wrong_question_count"
    MALFORMED = "malformed_question"
    ANSWER_MISMATCH = "answer_options_mismatch"


@dataclass
class ValidationResult:
    """Outcome of validating a parsed payload."""

    questions: list[Question] | None = None
    failure: ValidationFailure | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


def _fenced_block(text: str) -> str | None:
    match = FENCE_PATTERN.search(text)
    return match.group(1) if match else None


def _bracketed_span(text: str) -> str | None:
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1]
    return None


def extract_candidate(raw: str) -> str:
    """Return the substring of ``raw`` most likely to be the JSON array."""
    for step in (_fenced_block, _bracketed_span):
        candidate = step(raw)
        if candidate is not None:
            return candidate
    return raw


def _malformed_reason(item: Any) -> str | None:
    if not isinstance(item, dict):
        return f"expected an object, got {type(item).__name__}"
    question = item.get("question")
    if not isinstance(question, str) or not question:
        return "missing or empty 'question'"
    options = item.get("options")
    if not isinstance(options, list) or len(options) != OPTION_COUNT:
        return f"'options' must be a list of exactly {OPTION_COUNT} strings"
    if not all(isinstance(opt, str) for opt in options):
        return "'options' contains a non-string value"
    if not isinstance(item.get("answer"), str):
        return "missing or non-string 'answer'"
    return None


def validate_question_set(data: Any) -> ValidationResult:
    """Check a parsed payload against the exam schema.

    Checks run in order: array length, then every element's shape, then every
    element's answer against its own options. The first failing check wins.
    """
    if not isinstance(data, list) or len(data) != QUESTION_COUNT:
        found = len(data) if isinstance(data, list) else type(data).__name__
        return ValidationResult(
            failure=ValidationFailure.WRONG_COUNT,
            message=f"Wrong question count: expected {QUESTION_COUNT}, got {found}",
        )

    for i, item in enumerate(data, 1):
        reason = _malformed_reason(item)
        if reason:
            return ValidationResult(
                failure=ValidationFailure.MALFORMED,
                message=f"Malformed question {i}: {reason}",
            )

    for i, item in enumerate(data, 1):
        if item["answer"] not in item["options"]:
            return ValidationResult(
                failure=ValidationFailure.ANSWER_MISMATCH,
                message=(
                    f"Answer/options mismatch in question {i}: "
                    f"{item['answer']!r} is not one of {item['options']!r}"
                ),
            )

    questions = [
        Question(question=item["question"], options=item["options"], answer=item["answer"])
        for item in data
    ]
    return ValidationResult(questions=questions)


def parse_question_set(raw: str) -> list[Question]:
    """Extract, parse and validate a question set from raw model output.

    Raises:
        GenerationError: The output is not JSON or fails validation. The raw
            text is attached for diagnosis.
    """
    candidate = extract_candidate(raw)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse questions JSON: {e}")
        raise GenerationError(
            f"Model output is not valid JSON: {e}",
            raw=raw,
            kind=ValidationFailure.INVALID_JSON.value,
        ) from e

    result = validate_question_set(data)
    if not result.ok:
        logger.error(result.message)
        raise GenerationError(result.message, raw=raw, kind=result.failure.value)

    return result.questions
