"""
Slack Request Signature Verification

SECURITY BOUNDARY - Verify Slack HMAC signature and replay window.
No agent imports. No retries. Fails closed.

ref: https://api.slack.com/authentication/verifying-requests-from-slack
"""

import hashlib
import hmac
import logging
import time
from typing import Mapping, Optional

from core import Result, VerificationError

logger = logging.getLogger(__name__)

TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_HEADER = "X-Slack-Signature"
SIGNATURE_VERSION = "v0"

# Requests older (or newer) than this are treated as replays
REPLAY_WINDOW_S = 60 * 5


def compute_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Return the ``v0=<hex>`` signature Slack would send for this body."""
    base = f"{SIGNATURE_VERSION}:{timestamp}:".encode("utf-8") + body
    digest = hmac.new(
        key=signing_secret.encode("utf-8"),
        msg=base,
        digestmod=hashlib.sha256
    ).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_signature(
    timestamp: Optional[str],
    signature: Optional[str],
    body: bytes,
    signing_secret: str,
    now: Optional[float] = None,
) -> bool:
    """
    Verify a Slack request signature.

    Accepts only if the HMAC matches AND the timestamp is within
    REPLAY_WINDOW_S of ``now``.

    Args:
        timestamp: X-Slack-Request-Timestamp header value
        signature: X-Slack-Signature header value
        body: Raw request body bytes
        signing_secret: App signing secret
        now: Current unix time (defaults to time.time())

    Returns:
        True if the request is authentic, False otherwise (never raises)
    """
    if not timestamp or not signature:
        logger.warning("Missing timestamp or signature")
        return False

    if not signing_secret:
        logger.error("Signing secret not configured; rejecting request")
        return False

    try:
        current = time.time() if now is None else now
        if abs(current - int(timestamp)) > REPLAY_WINDOW_S:
            logger.warning("Timestamp out of range", extra={"timestamp": timestamp})
            return False

        expected = compute_signature(signing_secret, timestamp, body)

        # Compare (constant-time to prevent timing attacks)
        return hmac.compare_digest(
            expected.encode("utf-8"),
            signature.encode("utf-8")
        )
    except Exception as e:
        logger.error(f"Signature verification error: {e}", exc_info=True)
        return False


def verify_request(
    headers: Mapping[str, str],
    body: bytes,
    signing_secret: str,
    now: Optional[float] = None,
) -> Result[bool]:
    """
    Verify using the Slack signature headers of an inbound request.

    Returns:
        Result with True, or a VerificationError (no detail; the caller
        answers with a bare 401)
    """
    verified = verify_signature(
        headers.get(TIMESTAMP_HEADER),
        headers.get(SIGNATURE_HEADER),
        body,
        signing_secret,
        now=now,
    )
    if not verified:
        return Result.failure(VerificationError("Invalid request signature"))
    return Result.success(True)
