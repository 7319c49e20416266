"""Slack Transport Layer - Module Exports"""

from .classify import ClassifiedEvent, EventKind, classify_event, is_handshake, is_self_or_bot
from .client import SlackPlatformClient
from .context import get_channel_context, get_thread_context, strip_self_mention
from .schemas import (
    AssistantThread,
    ConversationMessage,
    SlackEvent,
    SlackEventPayload,
    StatusLifecycle,
    join_context,
)
from .security import verify_request, verify_signature
from .status import StatusMessage, ThinkingIndicator

__all__ = [
    # Schemas
    "SlackEvent",
    "SlackEventPayload",
    "AssistantThread",
    "ConversationMessage",
    "StatusLifecycle",
    "join_context",
    # Security
    "verify_signature",
    "verify_request",
    # Classification
    "EventKind",
    "ClassifiedEvent",
    "classify_event",
    "is_handshake",
    "is_self_or_bot",
    # Platform
    "SlackPlatformClient",
    "get_thread_context",
    "get_channel_context",
    "strip_self_mention",
    "StatusMessage",
    "ThinkingIndicator",
]
