"""Client for the question relay.

Lets a caller generate an exam without holding a model credential: the
extracted text goes to the relay, which answers with a question set.
"""

import logging

import httpx

from quizzer.errors import GenerationError, TransportError
from quizzer.models.question import Question
from quizzer.services.response_parser import validate_question_set

logger = logging.getLogger(__name__)


class RelayClient:
    """POSTs ``{"text": ...}`` to a relay and validates what comes back."""

    TIMEOUT = 120.0

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout or self.TIMEOUT
        self._transport = transport

    async def generate(self, text: str) -> list[Question]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json={"text": text})
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling relay: {self.url}")
            raise TransportError(f"Relay timed out: {self.url}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling relay {self.url}: {e}")
            raise TransportError(f"Could not reach relay: {e}") from e

        if response.is_error:
            raise TransportError(
                self._error_message(response),
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("Relay returned invalid JSON", raw=response.text) from e

        questions = data.get("questions") if isinstance(data, dict) else None
        result = validate_question_set(questions)
        if not result.ok:
            raise GenerationError(result.message, raw=response.text, kind=result.failure.value)
        return result.questions

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return "Failed to generate questions"
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return "Failed to generate questions"
