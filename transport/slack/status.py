"""
Status Message Lifecycle

Per-turn interim status shown while the agent call is in flight.

    IDLE -> POSTED(ts) -> {UPDATED | CLEARED}
    any failed transition -> FAILED (absorbing)

Two flavours:
- StatusMessage: a real chat message, overwritten in place (mention flow)
- ThinkingIndicator: the native assistant-thread status, cleared after
  the reply is posted (direct-message flow)

Neither object issues update/clear before a successful post, and neither
is shared across turns.
"""

import logging
from typing import Optional

from core import PlatformApiError, Result

from .client import SlackPlatformClient
from .schemas import StatusLifecycle

logger = logging.getLogger(__name__)


class _StatusBase:
    def __init__(self, client: SlackPlatformClient, channel: str, anchor_ts: str) -> None:
        self._client = client
        self.channel = channel
        self.anchor_ts = anchor_ts
        self.lifecycle = StatusLifecycle.IDLE

    def _reject(self, operation: str) -> Result:
        if self.lifecycle == StatusLifecycle.FAILED:
            message = f"Cannot {operation}: status already failed"
        else:
            message = f"Cannot {operation}: status not posted"
        logger.warning(message, extra={"channel": self.channel, "lifecycle": self.lifecycle.value})
        return Result.failure(PlatformApiError(message))

    def _settle(self, result: Result, target: StatusLifecycle) -> Result:
        self.lifecycle = target if result.ok else StatusLifecycle.FAILED
        return result


class StatusMessage(_StatusBase):
    """Interim chat message posted into the conversation thread."""

    def __init__(self, client: SlackPlatformClient, channel: str, anchor_ts: str) -> None:
        super().__init__(client, channel, anchor_ts)
        self.ts: Optional[str] = None

    async def post(self, text: str) -> Result[str]:
        """Create the interim message; failure aborts the turn."""
        if self.lifecycle != StatusLifecycle.IDLE:
            return self._reject("post")

        result = await self._client.post_message(self.channel, text, thread_ts=self.anchor_ts)
        if result.ok:
            self.ts = result.data
        else:
            logger.error(f"Status message posting failed: {result.error_message}")
        return self._settle(result, StatusLifecycle.POSTED)

    async def update(self, text: str) -> Result[bool]:
        """Overwrite the posted message, using the exact ts returned by post."""
        if self.lifecycle not in (StatusLifecycle.POSTED, StatusLifecycle.UPDATED):
            return self._reject("update")

        result = await self._client.update_message(self.channel, self.ts, text)
        if not result.ok:
            logger.error(f"Failed to update status message: {result.error_message}")
        return self._settle(result, StatusLifecycle.UPDATED)


class ThinkingIndicator(_StatusBase):
    """Native assistant-thread status ("agent is thinking...")."""

    async def post(self, text: str) -> Result[bool]:
        if self.lifecycle != StatusLifecycle.IDLE:
            return self._reject("set status")

        result = await self._client.set_assistant_status(self.channel, self.anchor_ts, text)
        return self._settle(result, StatusLifecycle.POSTED)

    async def clear(self) -> Result[bool]:
        """Remove the indicator after the reply has been posted."""
        if self.lifecycle != StatusLifecycle.POSTED:
            return self._reject("clear status")

        result = await self._client.set_assistant_status(self.channel, self.anchor_ts, "")
        if not result.ok:
            logger.error(f"Failed to clear thread status: {result.error_message}")
        return self._settle(result, StatusLifecycle.CLEARED)
