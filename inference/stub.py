from core import InvalidInputError, Result

from .base import AgentBackend
from .types import AgentResponse


class StubAgentBackend(AgentBackend):
    """
    Deterministic fake agent for local runs and CI.

    Echoes the last line of the context it was given.
    """

    def __init__(self, prefix: str = "Stub agent received: "):
        self.prefix = prefix

    async def run(self, content: str) -> Result[AgentResponse]:
        if not content or not content.strip():
            return Result.failure(InvalidInputError("Invalid input: Content cannot be empty"))

        last_line = content.strip().splitlines()[-1]
        return Result.success(AgentResponse(payload=f"{self.prefix}{last_line}"))
