from abc import ABC, abstractmethod

from core import Result

from .types import AgentResponse


class AgentBackend(ABC):
    """
    Abstract agent boundary.
    Orchestrators must depend ONLY on this interface.
    """

    @abstractmethod
    async def run(self, content: str) -> Result[AgentResponse]:
        """Send context to the agent; never raises."""
        raise NotImplementedError
