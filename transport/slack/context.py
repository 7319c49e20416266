"""
Conversation Context Assembly

Turns Slack thread replies or recent channel history into an ordered
list of ConversationMessage for the agent.

Rules:
- Platform delivery order is kept as-is; never reordered
- Messages without text are dropped, never represented as ""
- role is "assistant" iff the source message carries a bot_id
- The self-mention prefix is stripped once, from the triggering
  message only; historical messages are left untouched
- Never raises: transport failures come back as PlatformApiError,
  no usable messages as EmptyContextError
"""

import logging
from typing import Any, Optional

from core import EmptyContextError, Result

from .client import CHANNEL_HISTORY_LIMIT, THREAD_REPLIES_LIMIT, SlackPlatformClient
from .schemas import ConversationMessage

logger = logging.getLogger(__name__)


def mention_prefix(bot_user_id: str) -> str:
    return f"<@{bot_user_id}> "


def strip_self_mention(text: str, bot_user_id: str) -> str:
    """Remove exactly one occurrence of the ``<@bot> `` mention prefix."""
    return text.replace(mention_prefix(bot_user_id), "", 1)


def to_conversation_message(
    message: dict[str, Any],
    strip_for: Optional[str] = None,
) -> Optional[ConversationMessage]:
    """
    Map one raw Slack message.

    Args:
        message: Raw message dict from conversations.replies/history
        strip_for: Bot user ID whose mention prefix should be removed,
            or None to keep the text verbatim

    Returns:
        ConversationMessage, or None if the message has no text
    """
    text = message.get("text")
    if not text:
        return None

    is_bot = bool(message.get("bot_id"))
    if strip_for and not is_bot:
        text = strip_self_mention(text, strip_for)
        if not text:
            return None

    return ConversationMessage(role="assistant" if is_bot else "user", content=text)


async def get_thread_context(
    client: SlackPlatformClient,
    channel: str,
    thread_ts: str,
    bot_user_id: str,
    event_ts: Optional[str] = None,
) -> Result[list[ConversationMessage]]:
    """
    Assemble context from a thread (up to 50 replies).

    Args:
        client: Slack platform handle
        channel: Channel ID
        thread_ts: Thread anchor timestamp
        bot_user_id: This bot's user ID
        event_ts: Timestamp of the triggering message; only that message
            has its self-mention prefix stripped

    Returns:
        Result with a non-empty ordered list, or an error
    """
    replies = await client.fetch_replies(channel, thread_ts, limit=THREAD_REPLIES_LIMIT)
    if not replies.ok:
        return Result.failure(replies.error)

    messages = []
    for raw in replies.data:
        strip_for = bot_user_id if event_ts and raw.get("ts") == event_ts else None
        converted = to_conversation_message(raw, strip_for=strip_for)
        if converted is not None:
            messages.append(converted)

    if not messages:
        logger.info(f"No messages with text in thread {thread_ts}")
        return Result.failure(EmptyContextError("No messages found in thread"))

    logger.debug(f"Assembled {len(messages)} thread messages", extra={"channel": channel})
    return Result.success(messages)


async def get_channel_context(
    client: SlackPlatformClient,
    channel: str,
) -> Result[list[ConversationMessage]]:
    """Assemble context from the most recent channel messages (up to 5)."""
    history = await client.fetch_history(channel, limit=CHANNEL_HISTORY_LIMIT)
    if not history.ok:
        return Result.failure(history.error)

    messages = [
        converted
        for converted in (to_conversation_message(raw) for raw in history.data)
        if converted is not None
    ]

    if not messages:
        logger.info(f"No messages with text in channel {channel}")
        return Result.failure(EmptyContextError("No context found"))

    return Result.success(messages)
