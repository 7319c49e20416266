"""
Error taxonomy.

Errors are carried inside ``Result`` values rather than raised across
component boundaries. They remain ``Exception`` subclasses so the two
outer boundaries (webhook entry point, supervised turn runner) can still
raise or log them uniformly.
"""


class AppError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration


class ConfigError(AppError):
    """A required configuration value is missing."""
    pass


# Request authenticity


class VerificationError(AppError):
    """Signature missing, invalid, or outside the replay window."""
    pass


# Context assembly


class ContextError(AppError):
    """No retrievable conversation context."""
    pass


class EmptyContextError(ContextError):
    """The platform returned no messages with text."""
    pass


# Agent invocation


class AgentError(AppError):
    """Base class for agent invocation failures."""
    pass


class InvalidInputError(AgentError):
    """Blank input; rejected before any network call."""
    pass


class UpstreamError(AgentError):
    """Agent service returned a non-2xx status or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ParseError(AgentError):
    """Agent response body could not be decoded."""
    pass


class EmptyResponseError(AgentError):
    """Agent response decoded to an empty value."""
    pass


# Chat platform


class PlatformApiError(AppError):
    """A chat platform Web API call failed."""

    def __init__(self, message: str, method: str | None = None) -> None:
        self.method = method
        super().__init__(message)
