"""Error taxonomy for chat routing. The HTTP layer maps each kind to a status code."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class ChatError(Exception):
    """Base for failures returned by ChatRouter.route. `message` is safe to show to the caller."""

    kind: ErrorKind
    status_code: int = 400
    error_code: str = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ChatError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str = "Message cannot be empty"):
        super().__init__(message)


class UnsupportedProviderError(ChatError):
    kind = ErrorKind.UNSUPPORTED_PROVIDER

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unsupported LLM type: {value}")


class UpstreamUnavailableError(ChatError):
    """Provider call failed. The original exception stays on `cause` (and __cause__) for logs only."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    status_code = 503
    error_code = "AI_SERVICE_UNAVAILABLE"

    def __init__(self, cause: Optional[BaseException] = None, provider: Optional[str] = None):
        super().__init__("AI service is unavailable")
        self.cause = cause
        self.provider = provider


class ProviderConfigurationError(Exception):
    """Startup-time misconfiguration, e.g. a default provider that is not wired."""


class RequestConstraintError(Exception):
    """Query-parameter validation failed (GET endpoints)."""

    def __init__(self, violations: list[str]):
        super().__init__("; ".join(violations) or "Invalid request parameters")
        self.violations = violations
