"""
Agent boundary layer.

This package provides a clean abstraction for the external conversational
agent, so orchestrators stay agnostic of the service behind it.

Supported backends:
- LangbaseAgentBackend: Langbase agent over HTTP (default)
- StubAgentBackend: Deterministic fake agent (CI/tests)

Example usage:
    from inference import StubAgentBackend

    backend = StubAgentBackend()
    result = await backend.run("Hello, world!")
    print(result.data.text)
"""

from .types import AgentRequest, AgentResponse
from .base import AgentBackend
from .stub import StubAgentBackend
from .langbase import LangbaseAgentBackend

__all__ = [
    "AgentRequest",
    "AgentResponse",
    "AgentBackend",
    "StubAgentBackend",
    "LangbaseAgentBackend",
]
