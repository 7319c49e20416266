"""Shared result type and error taxonomy used at every component boundary."""

from .errors import (
    AgentError,
    AppError,
    ConfigError,
    ContextError,
    EmptyContextError,
    EmptyResponseError,
    InvalidInputError,
    ParseError,
    PlatformApiError,
    UpstreamError,
    VerificationError,
)
from .result import Result

__all__ = [
    "Result",
    "AppError",
    "ConfigError",
    "VerificationError",
    "ContextError",
    "EmptyContextError",
    "AgentError",
    "InvalidInputError",
    "UpstreamError",
    "ParseError",
    "EmptyResponseError",
    "PlatformApiError",
]
