"""
Slack Event Classification

PURE FUNCTION - NO I/O

Maps a verified Events API payload onto exactly one conversational
variant. Precedence (first match wins):

    UrlVerification -> Mention -> ThreadStarted -> DirectMessage -> Ignored

Self-authored and bot-authored events are Ignored even when they match
Mention or DirectMessage structurally.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .schemas import SlackEvent, SlackEventPayload


class EventKind(str, Enum):
    URL_VERIFICATION = "url_verification"
    MENTION = "mention"
    THREAD_STARTED = "thread_started"
    DIRECT_MESSAGE = "direct_message"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ClassifiedEvent:
    kind: EventKind
    event: Optional[SlackEvent] = None
    challenge: Optional[str] = None
    reason: Optional[str] = None

    @property
    def needs_turn(self) -> bool:
        """True if a background turn must be scheduled."""
        return self.kind in (
            EventKind.MENTION,
            EventKind.THREAD_STARTED,
            EventKind.DIRECT_MESSAGE,
        )


def _ignored(reason: str, event: Optional[SlackEvent] = None) -> ClassifiedEvent:
    return ClassifiedEvent(kind=EventKind.IGNORED, event=event, reason=reason)


def is_self_or_bot(event: SlackEvent, bot_user_id: Optional[str]) -> bool:
    """True if the sender is this bot or carries a bot identifier."""
    if event.is_bot_authored:
        return True
    if bot_user_id and (event.user == bot_user_id or event.bot_id == bot_user_id):
        return True
    return False


def is_handshake(payload: dict) -> bool:
    """url_verification requests carry no signature and skip verification."""
    return payload.get("type") == EventKind.URL_VERIFICATION.value


def classify_event(
    payload: SlackEventPayload,
    bot_user_id: Optional[str],
) -> ClassifiedEvent:
    """
    Classify a parsed Events API payload.

    Args:
        payload: Parsed payload (signature already verified for event_callback)
        bot_user_id: This bot's own user ID (from auth.test)

    Returns:
        ClassifiedEvent with exactly one EventKind
    """
    if payload.type == EventKind.URL_VERIFICATION.value:
        return ClassifiedEvent(
            kind=EventKind.URL_VERIFICATION,
            challenge=payload.challenge or "",
        )

    if payload.type != "event_callback":
        return _ignored(f"unsupported payload type: {payload.type}")

    event = payload.event
    if event is None:
        return _ignored("event_callback without event")

    if event.type == "app_mention":
        if is_self_or_bot(event, bot_user_id):
            return _ignored("mention authored by a bot", event)
        return ClassifiedEvent(kind=EventKind.MENTION, event=event)

    if event.type == "assistant_thread_started":
        return ClassifiedEvent(kind=EventKind.THREAD_STARTED, event=event)

    if event.type == "message":
        if event.subtype:
            return _ignored(f"message subtype {event.subtype}", event)
        if event.channel_type != "im":
            return _ignored("message outside a direct conversation", event)
        if is_self_or_bot(event, bot_user_id):
            return _ignored("message authored by a bot", event)
        if not event.thread_ts:
            return _ignored("direct message outside any thread", event)
        return ClassifiedEvent(kind=EventKind.DIRECT_MESSAGE, event=event)

    return _ignored(f"unhandled event type: {event.type}", event)
