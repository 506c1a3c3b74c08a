"""Completion transports.

The quiz generator only needs "send a system and a user prompt, get text
back". Each provider hides its SDK behind that interface and turns every SDK
failure into ``TransportError``. Transports never retry.
"""

import logging
from abc import ABC, abstractmethod

import anthropic
import httpx
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from quizzer.config import Settings, get_settings
from quizzer.errors import TransportError

logger = logging.getLogger(__name__)


# --- Transport Interface ---
class CompletionTransport(ABC):
    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        pass

    async def aclose(self) -> None:
        """Release the underlying HTTP client."""


# --- Concrete Transports ---
class OpenAITransport(CompletionTransport):
    """Chat completion call with a bearer credential."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.model = model
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def aclose(self) -> None:
        await self.client.close()

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: {e.status_code} {e.response.text}")
            raise TransportError(
                "OpenAI API error", status_code=e.status_code, body=e.response.text
            ) from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI connection failed: {e}")
            raise TransportError(f"Could not reach OpenAI: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class AnthropicTransport(CompletionTransport):
    """Messages API call; the system prompt travels outside the message list."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-haiku-20240307",
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.model = model
        self.client = AsyncAnthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def aclose(self) -> None:
        await self.client.close()

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error: {e.status_code} {e.response.text}")
            raise TransportError(
                "Anthropic API error", status_code=e.status_code, body=e.response.text
            ) from e
        except anthropic.APIConnectionError as e:
            logger.error(f"Anthropic connection failed: {e}")
            raise TransportError(f"Could not reach Anthropic: {e}") from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


def build_transport(
    api_key: str | None = None, settings: Settings | None = None
) -> CompletionTransport:
    """Pick the configured provider.

    An explicit ``api_key`` (client-held credential) wins over the key in the
    settings (relay-held credential).

    Raises:
        TransportError: No credential is available for the provider
    """
    settings = settings or get_settings()

    if settings.llm_provider == "anthropic":
        key = api_key or settings.anthropic_api_key
        if not key:
            raise TransportError("No Anthropic API key configured")
        logger.info("Using Anthropic transport")
        return AnthropicTransport(
            key,
            model=settings.anthropic_model,
            timeout=settings.request_timeout_seconds,
        )

    key = api_key or settings.openai_api_key
    if not key:
        raise TransportError("No OpenAI API key configured")
    logger.info("Using OpenAI transport")
    return OpenAITransport(
        key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout_seconds,
    )
