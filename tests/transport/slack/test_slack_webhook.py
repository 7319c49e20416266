"""
Slack Webhook Tests

Endpoint behaviour: handshake, signature gate, acknowledgment, and
background turn scheduling.
"""

import json
import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from slack_sdk.errors import SlackApiError

from main import app
from transport.slack.security import SIGNATURE_HEADER, TIMESTAMP_HEADER, compute_signature
from webhook.slack import get_services

from conftest import BOT_USER_ID, SIGNING_SECRET, STATUS_TS


def _signed(payload: dict, secret: str = SIGNING_SECRET, timestamp: int = None):
    body = json.dumps(payload).encode()
    ts = str(int(time.time()) if timestamp is None else timestamp)
    headers = {
        TIMESTAMP_HEADER: ts,
        SIGNATURE_HEADER: compute_signature(secret, ts, body),
        "Content-Type": "application/json",
    }
    return body, headers


def _callback(**event):
    return {"type": "event_callback", "event_id": "Ev123", "team_id": "T1", "event": event}


@pytest.fixture
def client(services):
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHandshake:
    def test_challenge_echoed_without_signature(self, client):
        response = client.post("/api/events", json={"type": "url_verification", "challenge": "3eZbrw1aBm2r"})

        assert response.status_code == 200
        assert response.text == "3eZbrw1aBm2r"

    def test_challenge_echoed_with_bad_signature(self, client):
        response = client.post(
            "/api/events",
            json={"type": "url_verification", "challenge": "abc"},
            headers={TIMESTAMP_HEADER: "1", SIGNATURE_HEADER: "v0=bad"},
        )

        assert response.status_code == 200
        assert response.text == "abc"

    def test_challenge_without_services(self):
        app.dependency_overrides[get_services] = lambda: None
        try:
            response = TestClient(app).post("/api/events", json={"type": "url_verification", "challenge": "abc"})
        finally:
            app.dependency_overrides.clear()

        assert response.text == "abc"


class TestSignatureGate:
    def test_missing_signature_401(self, client, web_client):
        response = client.post("/api/events", json=_callback(type="app_mention", channel="C1"))

        assert response.status_code == 401
        assert response.text == ""
        web_client.auth_test.assert_not_called()

    def test_wrong_secret_401(self, client):
        body, headers = _signed(_callback(type="app_mention"), secret="nope")

        assert client.post("/api/events", content=body, headers=headers).status_code == 401

    def test_stale_timestamp_401(self, client):
        body, headers = _signed(_callback(type="app_mention"), timestamp=int(time.time()) - 301)

        assert client.post("/api/events", content=body, headers=headers).status_code == 401

    def test_invalid_json_422(self, client):
        response = client.post("/api/events", content=b"not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 422


class TestAcknowledgment:
    def test_mention_acknowledged_and_turn_runs(self, client, web_client, agent):
        web_client.conversations_history.return_value = {"ok": True, "messages": [{"user": "U1", "text": "context"}]}
        body, headers = _signed(
            _callback(type="app_mention", channel="C1", user="U111", text=f"<@{BOT_USER_ID}> hi", ts="2.0")
        )

        response = client.post("/api/events", content=body, headers=headers)

        assert response.status_code == 200
        assert response.text == "Success!"
        # TestClient runs background tasks before returning
        agent.run.assert_awaited_once_with("context")
        web_client.chat_update.assert_awaited_once_with(channel="C1", ts=STATUS_TS, text="Agent reply")

    def test_dm_without_thread_is_ignored(self, client, web_client, agent):
        body, headers = _signed(
            _callback(type="message", channel="D1", channel_type="im", user="U111", text="hi", ts="2.0")
        )

        response = client.post("/api/events", content=body, headers=headers)

        assert response.status_code == 200
        web_client.chat_postMessage.assert_not_called()
        web_client.assistant_threads_setStatus.assert_not_called()
        web_client.conversations_replies.assert_not_called()
        agent.run.assert_not_called()

    def test_own_message_not_acted_upon(self, client, web_client, agent):
        body, headers = _signed(
            _callback(
                type="message", channel="D1", channel_type="im", user=BOT_USER_ID,
                bot_id=BOT_USER_ID, text="reply", ts="3.0", thread_ts="1.0",
            )
        )

        assert client.post("/api/events", content=body, headers=headers).status_code == 200
        web_client.chat_postMessage.assert_not_called()

    def test_bot_id_failure_500(self, client, web_client):
        web_client.auth_test.side_effect = SlackApiError("x", {"ok": False, "error": "invalid_auth"})
        body, headers = _signed(_callback(type="app_mention", channel="C1"))

        response = client.post("/api/events", content=body, headers=headers)

        assert response.status_code == 500
        assert response.text == "Error getting bot ID"

    def test_internal_fault_500(self, client):
        body, headers = _signed(_callback(type="app_mention", channel="C1"))

        with patch("webhook.slack.classify_event", side_effect=RuntimeError("boom")):
            response = client.post("/api/events", content=body, headers=headers)

        assert response.status_code == 500
        assert response.text == "Error generating response"

    def test_turn_failure_does_not_affect_ack(self, client, web_client, agent):
        web_client.conversations_history.return_value = {"ok": True, "messages": [{"user": "U1", "text": "a"}]}
        agent.run = AsyncMock(side_effect=RuntimeError("unexpected"))
        body, headers = _signed(_callback(type="app_mention", channel="C1", user="U111", ts="2.0"))

        response = client.post("/api/events", content=body, headers=headers)

        assert response.status_code == 200
        assert response.text == "Success!"


class TestHealthEndpoints:
    def test_live(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_slack_health(self, client):
        assert client.get("/api/slack/health").json() == {"status": "healthy", "bot_user_id": BOT_USER_ID}

    @patch("config.Config.SLACK_BOT_TOKEN", "")
    def test_ready_reports_missing(self, client):
        body = client.get("/health/ready").json()

        assert body["status"] == "not_ready"
        assert "SLACK_BOT_TOKEN" in body["reason"]
