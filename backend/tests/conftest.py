import json

import pytest

from quizzer.config import Settings
from quizzer.services.transports import CompletionTransport

SOURCE_TEXT = (
    "Photosynthesis is the process by which green plants use sunlight, water and "
    "carbon dioxide to produce glucose and oxygen. It takes place in the chloroplasts, "
    "which contain the pigment chlorophyll."
)


def make_question_dicts(n: int = 40) -> list[dict[str, object]]:
    return [
        {
            "question": f"Question {i + 1}?",
            "options": [f"Option {i}-A", f"Option {i}-B", f"Option {i}-C", f"Option {i}-D"],
            "answer": f"Option {i}-{'ABCD'[i % 4]}",
        }
        for i in range(n)
    ]


def make_question_json(n: int = 40) -> str:
    return json.dumps(make_question_dicts(n))


class FakeTransport(CompletionTransport):
    """Returns a canned completion and remembers what it was asked."""

    def __init__(self, response: str = "", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, object]] = []
        self.closed = False

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        anthropic_api_key=None,
        llm_provider="openai",
        temperature=0.2,
        max_tokens=4000,
    )
