"""Exceptions raised while turning a handout into a quiz."""


class QuizzerError(Exception):
    """Base class for every terminal failure in the quiz pipeline."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(QuizzerError):
    """The PDF bytes could not be decoded."""


class TransportError(QuizzerError):
    """The completion endpoint (or relay) could not be reached or answered non-2xx."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        detail = f"{self.message} (status {self.status_code})"
        if self.body:
            detail += f": {self.body}"
        return detail


class GenerationError(QuizzerError):
    """The model output was not a valid question set."""

    def __init__(self, message: str, raw: str = "", kind: str = "invalid_json") -> None:
        self.raw = raw
        self.kind = kind
        super().__init__(message)


class ShortInputWarning(UserWarning):
    """Source text is too short to expect a meaningful exam."""


class InputTooShortError(QuizzerError):
    """The relay refused text below the minimum length."""
