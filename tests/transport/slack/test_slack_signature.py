"""
Slack Signature Verification Tests

Verify HMAC-SHA256 validation and the 5-minute replay window.
"""

import hashlib
import hmac
import json

import pytest

from core import VerificationError
from transport.slack.security import (
    REPLAY_WINDOW_S,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    compute_signature,
    verify_request,
    verify_signature,
)

SECRET = "8f742231b10e8888abcd99yyyzzz85a5"
NOW = 1_700_000_000
BODY = json.dumps({"type": "event_callback", "event": {"type": "app_mention"}}).encode()


def _sign(timestamp, body=BODY, secret=SECRET):
    base = f"v0:{timestamp}:".encode() + body
    return "v0=" + hmac.new(secret.encode(), base, hashlib.sha256).hexdigest()


class TestSignatureVerification:
    """Test HMAC signature verification."""

    def test_valid_signature(self):
        """Valid signature inside the window passes."""
        ts = str(NOW)
        assert verify_signature(ts, _sign(ts), BODY, SECRET, now=NOW)

    def test_compute_signature_matches_reference(self):
        ts = str(NOW)
        assert compute_signature(SECRET, ts, BODY) == _sign(ts)

    def test_invalid_signature_rejected(self):
        assert not verify_signature(str(NOW), "v0=deadbeef", BODY, SECRET, now=NOW)

    def test_wrong_secret_rejected(self):
        ts = str(NOW)
        assert not verify_signature(ts, _sign(ts, secret="other"), BODY, SECRET, now=NOW)

    def test_tampered_body_rejected(self):
        ts = str(NOW)
        assert not verify_signature(ts, _sign(ts), BODY + b" ", SECRET, now=NOW)

    @pytest.mark.parametrize("timestamp,signature", [(None, "v0=abc"), (str(NOW), None), ("", ""), (None, None)])
    def test_missing_headers_rejected(self, timestamp, signature):
        assert not verify_signature(timestamp, signature, BODY, SECRET, now=NOW)

    def test_missing_secret_rejected(self):
        ts = str(NOW)
        assert not verify_signature(ts, _sign(ts), BODY, "", now=NOW)

    def test_non_numeric_timestamp_fails_closed(self):
        assert not verify_signature("yesterday", _sign("yesterday"), BODY, SECRET, now=NOW)


class TestReplayWindow:
    """Correct HMAC is not enough outside the window."""

    @pytest.mark.parametrize("skew", [0, 1, REPLAY_WINDOW_S, -REPLAY_WINDOW_S])
    def test_within_window_accepted(self, skew):
        ts = str(NOW - skew)
        assert verify_signature(ts, _sign(ts), BODY, SECRET, now=NOW)

    @pytest.mark.parametrize("skew", [REPLAY_WINDOW_S + 1, -(REPLAY_WINDOW_S + 1), 86_400])
    def test_outside_window_rejected_with_valid_hmac(self, skew):
        ts = str(NOW - skew)
        assert not verify_signature(ts, _sign(ts), BODY, SECRET, now=NOW)


class TestVerifyRequest:
    def test_reads_slack_headers(self):
        ts = str(NOW)
        headers = {TIMESTAMP_HEADER: ts, SIGNATURE_HEADER: _sign(ts)}
        result = verify_request(headers, BODY, SECRET, now=NOW)

        assert result.ok
        assert result.data is True

    def test_empty_headers_rejected(self):
        result = verify_request({}, BODY, SECRET, now=NOW)

        assert isinstance(result.error, VerificationError)

    def test_stale_request_is_verification_error(self):
        ts = str(NOW - REPLAY_WINDOW_S - 1)
        headers = {TIMESTAMP_HEADER: ts, SIGNATURE_HEADER: _sign(ts)}

        result = verify_request(headers, BODY, SECRET, now=NOW)

        assert not result.ok
        assert isinstance(result.error, VerificationError)
