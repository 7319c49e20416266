"""
Conversation Orchestrator

One function per classified variant. Each runs a single turn strictly
in sequence:

    post status -> assemble context -> run agent -> update/clear status

run_turn() is the supervised boundary scheduled from the webhook as a
background task: it never raises, it logs and returns a failed Result.
"""

import logging
from typing import Optional

from core import AppError, EmptyContextError, Result
from infra import Services
from transport.slack import (
    ClassifiedEvent,
    EventKind,
    SlackEvent,
    StatusMessage,
    ThinkingIndicator,
    get_channel_context,
    get_thread_context,
    is_self_or_bot,
    join_context,
)

logger = logging.getLogger(__name__)

MENTION_STATUS = "Agent is thinking..."
THREAD_STATUS = "agent is thinking..."
WELCOME_MESSAGE = "Hello, I'm an Agent! I'm here to help you with your questions."
DM_AGENT_FAILURE = "Something went wrong while processing the message. Please try again."
UNKNOWN_AGENT_FAILURE = "Unknown error with agent processing"


def _context_failure_text(error: AppError, source: str) -> str:
    """User-facing text for a context failure."""
    if isinstance(error, EmptyContextError):
        return error.message
    return f"Something went wrong while processing {source} messages"


def reply_blocks(text: str) -> list[dict]:
    return [{"type": "section", "text": {"type": "mrkdwn", "text": text}}]


# ============================================================================
# MENTION
# ============================================================================

async def handle_app_mention(
    event: SlackEvent,
    bot_user_id: str,
    services: Services,
) -> Result[None]:
    """
    Answer an @-mention by overwriting an interim status message.

    With a thread anchor the whole thread is context; without one the
    last few channel messages are. Empty channel context is reported in
    the status message instead of calling the agent.
    """
    if is_self_or_bot(event, bot_user_id):
        logger.info("Skipping app mention from bot")
        return Result.success()

    status = StatusMessage(services.slack, event.channel, event.thread_ts or event.ts)
    posted = await status.post(MENTION_STATUS)
    if not posted.ok:
        return Result.failure(posted.error)

    if event.thread_ts:
        context = await get_thread_context(
            services.slack,
            event.channel,
            event.thread_ts,
            bot_user_id,
            event_ts=event.ts,
        )
        source = "thread"
    else:
        context = await get_channel_context(services.slack, event.channel)
        source = "channel"

    if not context.ok:
        logger.error(f"Error processing {source} messages: {context.error_message}")
        await status.update(_context_failure_text(context.error, source))
        return Result.failure(context.error)

    agent_result = await services.agent.run(join_context(context.data))

    if not agent_result.ok:
        await status.update(agent_result.error_message or UNKNOWN_AGENT_FAILURE)
        return Result.failure(agent_result.error)

    # A failed update is logged by StatusMessage; the agent outcome stands
    await status.update(agent_result.data.text)
    return Result.success()


# ============================================================================
# ASSISTANT THREAD STARTED
# ============================================================================

async def handle_thread_started(event: SlackEvent, services: Services) -> Result[None]:
    """Post the fixed welcome message into a new assistant thread."""
    thread = event.assistant_thread
    channel_id = thread.channel_id if thread else None
    thread_ts = thread.thread_ts if thread else None

    if not channel_id or not thread_ts:
        logger.error(
            "Missing required event data",
            extra={"channel_id": channel_id, "thread_ts": thread_ts},
        )
        return Result.failure(AppError("Missing required event data"))

    posted = await services.slack.post_message(channel_id, WELCOME_MESSAGE, thread_ts=thread_ts)
    if not posted.ok:
        return Result.failure(posted.error)
    return Result.success()


# ============================================================================
# DIRECT MESSAGE (assistant thread)
# ============================================================================

async def handle_direct_message(
    event: SlackEvent,
    bot_user_id: str,
    services: Services,
) -> Result[None]:
    """
    Reply inside an assistant thread.

    Uses the native thinking indicator, posts the reply as a new message
    and then clears the indicator. A failed clear fails the turn even
    though the reply was delivered.
    """
    if is_self_or_bot(event, bot_user_id) or not event.thread_ts:
        return Result.success()

    if not event.channel:
        return Result.failure(AppError("Missing channel or thread_ts information"))

    channel, thread_ts = event.channel, event.thread_ts
    slack = services.slack

    indicator = ThinkingIndicator(slack, channel, thread_ts)
    status_set = await indicator.post(THREAD_STATUS)
    if not status_set.ok:
        return Result.failure(status_set.error)

    context = await get_thread_context(slack, channel, thread_ts, bot_user_id, event_ts=event.ts)
    if not context.ok:
        logger.error(f"Error processing thread messages: {context.error_message}")
        return Result.failure(context.error)

    agent_result = await services.agent.run(join_context(context.data))

    if not agent_result.ok:
        logger.error(f"Agent processing error: {agent_result.error_message}")
        await slack.post_message(channel, DM_AGENT_FAILURE, thread_ts=thread_ts)
        return Result.failure(agent_result.error)

    text = agent_result.data.text
    reply = await slack.post_message(
        channel,
        text,
        thread_ts=thread_ts,
        blocks=reply_blocks(text),
        unfurl_links=False,
    )
    if not reply.ok:
        return Result.failure(reply.error)

    cleared = await indicator.clear()
    if not cleared.ok:
        return Result.failure(cleared.error)

    return Result.success()


# ============================================================================
# SUPERVISED BOUNDARY
# ============================================================================

async def dispatch(
    classified: ClassifiedEvent,
    bot_user_id: Optional[str],
    services: Services,
) -> Result[None]:
    """Route a classified event to its orchestrator."""
    kind = classified.kind
    event = classified.event

    if kind == EventKind.MENTION:
        return await handle_app_mention(event, bot_user_id, services)
    if kind == EventKind.THREAD_STARTED:
        return await handle_thread_started(event, services)
    if kind == EventKind.DIRECT_MESSAGE:
        return await handle_direct_message(event, bot_user_id, services)
    if kind in (EventKind.IGNORED, EventKind.URL_VERIFICATION):
        return Result.success()

    raise ValueError(f"Unhandled event kind: {kind}")


async def run_turn(
    classified: ClassifiedEvent,
    bot_user_id: Optional[str],
    services: Services,
) -> Result[None]:
    """
    Run one turn to completion; never raises.

    Scheduled via BackgroundTasks so the webhook acknowledgment does not
    wait on it.
    """
    try:
        result = await dispatch(classified, bot_user_id, services)
    except Exception as e:
        logger.error(f"Unhandled error in {classified.kind.value} turn: {e}", exc_info=True)
        return Result.failure(AppError(f"Error processing {classified.kind.value}"))

    if result.ok:
        logger.info(f"Turn completed: {classified.kind.value}")
    else:
        logger.warning(
            f"Turn failed: {classified.kind.value}: {result.error_message}",
            extra={"error_type": type(result.error).__name__},
        )
    return result
