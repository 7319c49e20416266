"""
Slack Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the inbound Events API payload and the conversation shapes
handed to the agent.
"""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# ============================================================================
# EVENTS API PAYLOAD (INPUT)
# ============================================================================

class AssistantThread(BaseModel):
    """Thread descriptor carried by assistant_thread_started."""

    channel_id: Optional[str] = None
    thread_ts: Optional[str] = None
    user_id: Optional[str] = None

    class Config:
        frozen = True
        extra = "allow"


class SlackEvent(BaseModel):
    """
    Inner event of an event_callback.

    ref: https://api.slack.com/events
    """

    type: str
    channel: Optional[str] = None
    user: Optional[str] = None
    text: Optional[str] = None
    ts: Optional[str] = None
    thread_ts: Optional[str] = Field(
        None,
        description="Thread anchor; absent for top-level messages"
    )
    bot_id: Optional[str] = None
    bot_profile: Optional[dict[str, Any]] = None
    channel_type: Optional[str] = None
    subtype: Optional[str] = None
    assistant_thread: Optional[AssistantThread] = None

    class Config:
        frozen = True  # Immutable once received
        extra = "allow"  # Slack adds fields freely

    @property
    def is_bot_authored(self) -> bool:
        """True if the sender carries any bot identifier."""
        return bool(self.bot_id or self.bot_profile)


class SlackEventPayload(BaseModel):
    """Outer Events API envelope."""

    type: str = Field(..., description="url_verification or event_callback")
    challenge: Optional[str] = None
    token: Optional[str] = None
    team_id: Optional[str] = None
    api_app_id: Optional[str] = None
    event: Optional[SlackEvent] = None
    event_id: Optional[str] = None
    event_time: Optional[int] = None

    class Config:
        frozen = True
        extra = "allow"


# ============================================================================
# CONVERSATION CONTEXT (OUTPUT TO AGENT)
# ============================================================================

class ConversationMessage(BaseModel):
    """One prior message, as the agent sees it."""

    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)

    class Config:
        frozen = True


def join_context(messages: list[ConversationMessage]) -> str:
    """Concatenate message contents, oldest first, one per line."""
    return "\n".join(message.content for message in messages)


# ============================================================================
# STATUS MESSAGE LIFECYCLE
# ============================================================================

class StatusLifecycle(str, Enum):
    IDLE = "idle"
    POSTED = "posted"
    UPDATED = "updated"
    CLEARED = "cleared"
    FAILED = "failed"
