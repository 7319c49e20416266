"""
Slack Web API Client

Thin async wrapper around slack_sdk.AsyncWebClient. Every call returns a
Result; SlackApiError and transport failures become PlatformApiError
values. No retries.
"""

import logging
from typing import Any, Optional

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from core import PlatformApiError, Result

logger = logging.getLogger(__name__)

THREAD_REPLIES_LIMIT = 50
CHANNEL_HISTORY_LIMIT = 5


class SlackPlatformClient:
    """
    Chat platform handle passed explicitly to every component.

    Pure I/O: no classification, no agent logic.
    """

    def __init__(self, web_client: AsyncWebClient) -> None:
        self._client = web_client
        self._bot_user_id: Optional[str] = None

    @classmethod
    def from_token(cls, token: str) -> "SlackPlatformClient":
        if not token:
            raise ValueError("SLACK_BOT_TOKEN not set in .env")
        return cls(AsyncWebClient(token=token))

    def _failure(self, method: str, exc: Exception) -> Result:
        if isinstance(exc, SlackApiError):
            detail = exc.response.get("error") if exc.response is not None else str(exc)
        else:
            detail = str(exc)
        logger.error(
            f"Slack {method} failed: {detail}",
            extra={"method": method, "error": detail},
        )
        return Result.failure(PlatformApiError(f"Slack {method} failed: {detail}", method=method))

    # ------------------------------------------------------------------
    async def get_bot_user_id(self) -> Result[str]:
        """Resolve this bot's own user ID via auth.test (memoised on success)."""
        if self._bot_user_id:
            return Result.success(self._bot_user_id)

        try:
            resp: Any = await self._client.auth_test()
        except Exception as e:
            return self._failure("auth.test", e)

        bot_user_id = resp.get("user_id")
        if not bot_user_id:
            logger.error("auth.test returned no user_id")
            return Result.failure(PlatformApiError("botUserId is undefined", method="auth.test"))

        self._bot_user_id = bot_user_id
        logger.info(f"Resolved bot user id {bot_user_id}")
        return Result.success(bot_user_id)

    # ------------------------------------------------------------------
    async def post_message(
        self,
        channel: str,
        text: str,
        thread_ts: Optional[str] = None,
        blocks: Optional[list[dict[str, Any]]] = None,
        unfurl_links: Optional[bool] = None,
    ) -> Result[str]:
        """Post a message; returns the new message timestamp."""
        kwargs: dict[str, Any] = {"channel": channel, "text": text}
        if thread_ts:
            kwargs["thread_ts"] = thread_ts
        if blocks is not None:
            kwargs["blocks"] = blocks
        if unfurl_links is not None:
            kwargs["unfurl_links"] = unfurl_links

        try:
            resp: Any = await self._client.chat_postMessage(**kwargs)
        except Exception as e:
            return self._failure("chat.postMessage", e)

        ts = resp.get("ts")
        if not resp.get("ok") or not ts:
            logger.error(f"chat.postMessage returned no timestamp: {resp.get('error')}")
            return Result.failure(
                PlatformApiError("Failed to post message", method="chat.postMessage")
            )
        return Result.success(ts)

    async def update_message(self, channel: str, ts: str, text: str) -> Result[bool]:
        """Replace the text of an existing message."""
        try:
            resp: Any = await self._client.chat_update(channel=channel, ts=ts, text=text)
        except Exception as e:
            return self._failure("chat.update", e)

        if not resp.get("ok"):
            logger.error(f"chat.update not ok: {resp.get('error')}")
            return Result.failure(PlatformApiError("Failed to update message", method="chat.update"))
        return Result.success(True)

    # ------------------------------------------------------------------
    async def fetch_replies(
        self,
        channel: str,
        thread_ts: str,
        limit: int = THREAD_REPLIES_LIMIT,
    ) -> Result[list[dict[str, Any]]]:
        """Fetch a thread's messages in delivery order (root first)."""
        try:
            resp: Any = await self._client.conversations_replies(
                channel=channel, ts=thread_ts, limit=limit
            )
        except Exception as e:
            return self._failure("conversations.replies", e)
        return Result.success(list(resp.get("messages") or []))

    async def fetch_history(
        self,
        channel: str,
        limit: int = CHANNEL_HISTORY_LIMIT,
    ) -> Result[list[dict[str, Any]]]:
        """Fetch the most recent channel messages."""
        try:
            resp: Any = await self._client.conversations_history(channel=channel, limit=limit)
        except Exception as e:
            return self._failure("conversations.history", e)
        return Result.success(list(resp.get("messages") or []))

    # ------------------------------------------------------------------
    async def set_assistant_status(
        self,
        channel: str,
        thread_ts: str,
        status: str,
    ) -> Result[bool]:
        """Set (or clear, with an empty status) the native assistant-thread indicator."""
        try:
            resp: Any = await self._client.assistant_threads_setStatus(
                channel_id=channel, thread_ts=thread_ts, status=status
            )
        except Exception as e:
            return self._failure("assistant.threads.setStatus", e)

        if not resp.get("ok"):
            logger.error(f"assistant.threads.setStatus not ok: {resp.get('error')}")
            return Result.failure(
                PlatformApiError("Failed to set thread status", method="assistant.threads.setStatus")
            )
        return Result.success(True)
