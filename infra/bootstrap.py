"""
Infrastructure initialization and bootstrap.

Builds the explicit service bundle handed to the webhook and to every
turn. One bundle per application instance, stored on ``app.state``.
"""

from dataclasses import dataclass
from typing import Optional

from inference import AgentBackend
from transport.slack import SlackPlatformClient

from .config import InfraConfig, get_config


@dataclass(frozen=True)
class Services:
    """Collaborators shared (read-only) by all turns."""

    slack: SlackPlatformClient
    agent: AgentBackend
    signing_secret: str

    def __repr__(self) -> str:
        return (
            f"Services(slack={type(self.slack).__name__}, "
            f"agent={type(self.agent).__name__})"
        )


def bootstrap_services(config: Optional[InfraConfig] = None) -> Services:
    """
    Create all backends from configuration.

    Args:
        config: Optional custom configuration

    Returns:
        Services bundle
    """
    config = config or get_config()
    return Services(
        slack=config.create_slack_client(),
        agent=config.create_agent_backend(),
        signing_secret=config.slack_signing_secret,
    )
