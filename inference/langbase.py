"""
Langbase agent backend.

POST {base_url}/{owner_login}/{agent_name} with {"input": content}.
No retries. Every failure path returns a typed AgentError result.
"""

import json
import logging
from typing import Optional

import httpx

from core import (
    ConfigError,
    EmptyResponseError,
    InvalidInputError,
    ParseError,
    Result,
    UpstreamError,
)

from .base import AgentBackend
from .types import AgentRequest, AgentResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.langbase.com"
GENERIC_FAILURE = "Something went wrong while running the agent"


class LangbaseAgentBackend(AgentBackend):
    """
    Langbase pipe/agent over HTTPS.

    Configuration is checked on every run so a missing value surfaces as
    ConfigError in the conversation instead of failing at start-up.
    """

    def __init__(
        self,
        owner_login: Optional[str],
        agent_name: Optional[str],
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            owner_login: Langbase account/org that owns the agent
            agent_name:  Agent (pipe) name
            api_key:     Langbase API key, sent as a Bearer token
            base_url:    API root
            timeout_s:   HTTP timeout for the whole call
            transport:   Optional httpx transport (tests inject MockTransport)
        """
        self.owner_login = owner_login
        self.agent_name = agent_name
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.owner_login}/{self.agent_name}"

    def _missing_config(self) -> list[str]:
        names = {
            "OWNER_LOGIN": self.owner_login,
            "AGENT_NAME": self.agent_name,
            "LANGBASE_API_KEY": self.api_key,
        }
        return [name for name, value in names.items() if not value]

    async def run(self, content: str) -> Result[AgentResponse]:
        missing = self._missing_config()
        if missing:
            logger.error(f"Missing required environment variables: {', '.join(missing)}")
            return Result.failure(
                ConfigError("Configuration error: Missing required environment variables")
            )

        if not content or not content.strip():
            return Result.failure(InvalidInputError("Invalid input: Content cannot be empty"))

        request = AgentRequest(input=content)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=request.to_payload(),
                    headers=headers,
                    timeout=self.timeout_s,
                )
        except httpx.HTTPError as e:
            logger.error(f"Agent request failed: {e}", exc_info=True)
            return Result.failure(UpstreamError(GENERIC_FAILURE))

        if not response.is_success:
            # Error bodies are not parsed
            logger.error(
                f"API request failed: {response.status_code} {response.reason_phrase}",
                extra={"status_code": response.status_code},
            )
            return Result.failure(
                UpstreamError(
                    f"{GENERIC_FAILURE}: {response.reason_phrase or response.status_code}",
                    status_code=response.status_code,
                )
            )

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Failed to parse API response: {e}")
            return Result.failure(ParseError("Failed to parse agent response"))

        if not payload:
            return Result.failure(EmptyResponseError("Empty response received"))

        logger.info(
            "Agent invoked successfully",
            extra={"agent": f"{self.owner_login}/{self.agent_name}"},
        )
        return Result.success(AgentResponse(payload=payload))
