"""Per-variant conversation orchestrators."""

from .orchestrator import (
    dispatch,
    handle_app_mention,
    handle_direct_message,
    handle_thread_started,
    run_turn,
)

__all__ = [
    "dispatch",
    "run_turn",
    "handle_app_mention",
    "handle_thread_started",
    "handle_direct_message",
]
