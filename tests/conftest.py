"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core import Result  # noqa: E402
from inference import AgentBackend, AgentResponse  # noqa: E402
from infra import Services  # noqa: E402
from transport.slack import SlackPlatformClient  # noqa: E402

BOT_USER_ID = "UBOT001"
SIGNING_SECRET = "test_signing_secret"
STATUS_TS = "1700000000.000900"


@pytest.fixture
def web_client():
    """AsyncWebClient double with successful defaults."""
    client = MagicMock()
    client.auth_test = AsyncMock(return_value={"ok": True, "user_id": BOT_USER_ID})
    client.chat_postMessage = AsyncMock(return_value={"ok": True, "ts": STATUS_TS})
    client.chat_update = AsyncMock(return_value={"ok": True})
    client.conversations_replies = AsyncMock(return_value={"ok": True, "messages": []})
    client.conversations_history = AsyncMock(return_value={"ok": True, "messages": []})
    client.assistant_threads_setStatus = AsyncMock(return_value={"ok": True})
    return client


@pytest.fixture
def slack(web_client):
    return SlackPlatformClient(web_client)


@pytest.fixture
def agent():
    """Agent backend double returning a fixed reply."""
    backend = MagicMock(spec=AgentBackend)
    backend.run = AsyncMock(return_value=Result.success(AgentResponse(payload="Agent reply")))
    return backend


@pytest.fixture
def services(slack, agent):
    return Services(slack=slack, agent=agent, signing_secret=SIGNING_SECRET)
