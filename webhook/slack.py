"""
Slack Events API Webhook Handler

Receives Slack event callbacks, verifies them and hands conversational
turns to the orchestrator as background tasks.

Security:
  - url_verification handshakes are answered before verification
    (Slack does not sign them)
  - Every other request must carry a valid signature inside the
    5-minute replay window, else a bare 401

Update Flow:
  webhook -> verify -> classify -> ack 200 -> (background) orchestrator
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from agent.orchestrator import run_turn
from infra import Services, bootstrap_services
from transport.slack import SlackEventPayload, classify_event, is_handshake, verify_request

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["slack"])

ACK_TEXT = "Success!"
BOT_ID_ERROR_TEXT = "Error getting bot ID"
INTERNAL_ERROR_TEXT = "Error generating response"


def get_services(request: Request) -> Optional[Services]:
    """
    Per-application service bundle.

    Created in the app lifespan; built lazily if the lifespan did not run.
    Returns None (logged) if the Slack client cannot be configured, so
    handshakes still succeed.
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        try:
            services = bootstrap_services()
        except ValueError as e:
            logger.error(f"Service bootstrap failed: {e}")
            return None
        request.app.state.services = services
    return services


@router.post("/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    services: Optional[Services] = Depends(get_services),
) -> Response:
    """
    Receive Slack Events API requests.

    Expected payloads:
        {"type": "url_verification", "challenge": "..."}
        {"type": "event_callback", "event": {"type": "app_mention", ...}}

    Returns:
        200 challenge (plain text) for handshakes
        401 for missing/invalid/expired signatures
        200 "Success!" once the event is acknowledged
        500 if the bot identity cannot be resolved or on an internal fault
    """
    # Step 1: Raw body (signature covers the exact bytes)
    body = await request.body()
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return PlainTextResponse("Invalid JSON payload", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)

    if not isinstance(payload, dict):
        return PlainTextResponse("Invalid JSON payload", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)

    # Step 2: Handshake short-circuits everything else
    if is_handshake(payload):
        logger.info("Answering url_verification handshake")
        return PlainTextResponse(str(payload.get("challenge") or ""), status_code=status.HTTP_200_OK)

    # Step 3: Verify signature (security boundary)
    signing_secret = services.signing_secret if services else ""
    verified = verify_request(request.headers, body, signing_secret)
    if not verified.ok:
        logger.warning(f"Rejected Slack request: {verified.error_message}")
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    try:
        if services is None:
            raise RuntimeError("Services not configured")

        parsed = SlackEventPayload.model_validate(payload)

        # Step 4: Resolve the bot's own identity for self-message filtering
        bot = await services.slack.get_bot_user_id()
        if not bot.ok:
            logger.error(f"Error getting bot ID: {bot.error_message}")
            return PlainTextResponse(BOT_ID_ERROR_TEXT, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        # Step 5: Classify and schedule the turn
        classified = classify_event(parsed, bot.data)
        if classified.needs_turn:
            logger.info(
                f"Scheduling {classified.kind.value} turn",
                extra={"event_id": parsed.event_id, "kind": classified.kind.value},
            )
            background_tasks.add_task(run_turn, classified, bot.data, services)
        else:
            logger.debug(f"Ignoring event: {classified.reason}")

        return PlainTextResponse(ACK_TEXT, status_code=status.HTTP_200_OK)

    except ValidationError as e:
        logger.warning(f"Malformed event payload: {e}")
        return PlainTextResponse("Invalid event payload", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    except Exception as e:
        logger.error(f"Error generating response: {e}", exc_info=True)
        return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/slack/health")
async def slack_health(services: Optional[Services] = Depends(get_services)):
    """Slack integration health: can the bot resolve its own identity?"""
    if services is None:
        return {"status": "not_configured"}

    bot = await services.slack.get_bot_user_id()
    if not bot.ok:
        return {"status": "unhealthy", "reason": bot.error_message}
    return {"status": "healthy", "bot_user_id": bot.data}
