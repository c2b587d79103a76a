from __future__ import annotations

import time
from urllib.parse import urlencode

import pytest

from foosbot.session import store
from foosbot.signing import compute_signature

SECRET = "8f742231b10e8888abcd99yyyzzz85a5"


@pytest.fixture(autouse=True)
def signing_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SECRET)
    monkeypatch.delenv("SLACK_MAX_REQUEST_AGE", raising=False)


@pytest.fixture(autouse=True)
def clear_session() -> None:
    """Isolate tests by resetting the process-wide session."""
    store.reset()
    yield
    store.reset()


def make_event(fields: dict[str, str], *, path: str = "/", secret: str = SECRET, timestamp: str | None = None) -> dict:
    body = urlencode(fields)
    ts = timestamp or str(int(time.time()))
    return {
        "rawPath": path,
        "requestContext": {"http": {"method": "POST"}},
        "headers": {
            "content-type": "application/x-www-form-urlencoded",
            "x-slack-request-timestamp": ts,
            "x-slack-signature": compute_signature(body.encode("utf-8"), ts, secret.encode("utf-8")),
        },
        "body": body,
        "isBase64Encoded": False,
    }


def command_fields(command: str, user_id: str, user_name: str | None = None) -> dict[str, str]:
    return {
        "command": command,
        "user_id": user_id,
        "user_name": user_name or user_id.lower(),
        "channel_id": "C0FOOS",
        "response_url": "https://hooks.slack.com/commands/T0/1/abc",
    }
