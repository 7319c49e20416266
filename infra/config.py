"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Read at call time so tests can patch the environment.
"""

import os
from typing import Literal
from dataclasses import dataclass

from inference import AgentBackend, LangbaseAgentBackend, StubAgentBackend
from transport.slack import SlackPlatformClient


AgentBackendType = Literal["langbase", "stub"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # Slack
    slack_bot_token: str
    slack_signing_secret: str

    # Agent
    agent_backend: AgentBackendType
    agent_api_base_url: str
    agent_timeout_s: float
    owner_login: str
    agent_name: str
    langbase_api_key: str

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Agent settings may be empty; the agent backend reports that per
        turn as a configuration error.
        """
        return cls(
            # Slack Configuration
            slack_bot_token=os.getenv("SLACK_BOT_TOKEN", ""),
            slack_signing_secret=os.getenv("SLACK_SIGNING_SECRET", ""),

            # Agent Configuration
            agent_backend=os.getenv("AGENT_BACKEND", "langbase"),  # type: ignore
            agent_api_base_url=os.getenv("AGENT_API_BASE_URL", "https://api.langbase.com"),
            agent_timeout_s=float(os.getenv("AGENT_TIMEOUT_S", "30")),
            owner_login=os.getenv("OWNER_LOGIN", ""),
            agent_name=os.getenv("AGENT_NAME", ""),
            langbase_api_key=os.getenv("LANGBASE_API_KEY", ""),
        )

    def create_agent_backend(self) -> AgentBackend:
        """Create agent backend instance based on configuration."""
        if self.agent_backend == "stub":
            return StubAgentBackend()
        # Default to langbase
        return LangbaseAgentBackend(
            owner_login=self.owner_login,
            agent_name=self.agent_name,
            api_key=self.langbase_api_key,
            base_url=self.agent_api_base_url,
            timeout_s=self.agent_timeout_s,
        )

    def create_slack_client(self) -> SlackPlatformClient:
        """Create the Slack Web API handle."""
        return SlackPlatformClient.from_token(self.slack_bot_token)


def get_config() -> InfraConfig:
    """Get infrastructure configuration from the current environment."""
    return InfraConfig.from_env()
