import logging
import warnings

from quizzer.config import Settings, get_settings
from quizzer.errors import ShortInputWarning
from quizzer.models.question import OPTION_COUNT, QUESTION_COUNT, Question
from quizzer.services.response_parser import parse_question_set
from quizzer.services.transports import CompletionTransport, build_transport

logger = logging.getLogger(__name__)

OPTIONS_SCHEMA = "[" + ", ".join(['"string"'] * OPTION_COUNT) + "]"

SYSTEM_PROMPT = (
    "You are an expert exam generator. You always return valid JSON arrays when asked. "
    "Never include markdown formatting or explanations."
)


def build_prompt(source_text: str) -> str:
    """Build the user prompt asking for the full question set."""

    return f"""You are an exam generator. Create exactly {QUESTION_COUNT} high-quality multiple-choice questions (MCQs) from the provided study material. Return ONLY a valid JSON array with {QUESTION_COUNT} objects, NO commentary or markdown formatting. Each object must have exactly this structure:

{{
  "question": "string",
  "options": {OPTIONS_SCHEMA},
  "answer": "string"
}}

Important requirements:
- The "answer" field must exactly match one of the {OPTION_COUNT} options
- Questions should cover diverse concepts from the material
- Keep questions clear and objective
- Avoid ambiguous phrasing
- Each question should have exactly {OPTION_COUNT} options
- Do not wrap the output in ``` code fences
- Return only the JSON array, no other text

Study material:
{source_text}"""


class QuizGenerator:
    """Turns study material into a validated question set."""

    def __init__(self, transport: CompletionTransport, settings: Settings | None = None):
        self.transport = transport
        self.settings = settings or get_settings()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def generate(self, source_text: str) -> list[Question]:
        """Generate exactly ``QUESTION_COUNT`` questions from ``source_text``.

        One outbound call, no retries. Transport failures surface as
        ``TransportError``, bad model output as ``GenerationError``.
        """
        if len(source_text) < self.settings.min_text_length:
            logger.warning(f"Source text is only {len(source_text)} characters")
            warnings.warn(
                f"Source text is only {len(source_text)} characters; "
                "questions may be limited or repetitive",
                ShortInputWarning,
                stacklevel=2,
            )

        logger.info(f"Generating questions from text of length: {len(source_text)}")
        raw = await self.transport.complete(
            SYSTEM_PROMPT,
            build_prompt(source_text),
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        logger.debug(f"Raw model response: {raw}")

        questions = parse_question_set(raw)
        logger.info(f"Successfully generated {len(questions)} questions")
        return questions


async def generate_questions(
    api_key: str | None, source_text: str, settings: Settings | None = None
) -> list[Question]:
    """Generate a question set with a client-held key, or the configured one if ``None``."""
    settings = settings or get_settings()
    generator = QuizGenerator(build_transport(api_key, settings), settings)
    return await generator.generate(source_text)
