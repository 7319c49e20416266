"""
Webhook module - FastAPI route handlers.

Includes:
- slack.py: Slack Events API handler
"""

from webhook.slack import router as slack_router

__all__ = ["slack_router"]
