from __future__ import annotations

import base64
import json
import logging
from typing import Any

from foosbot.commands import CommandParseError, parse_form
from foosbot.config import get_log_level, get_max_request_age, get_signing_secret
from foosbot.messages import render
from foosbot.routes import handle_command
from foosbot.signing import AuthFailure, SignatureError, verify
from foosbot.teams import PreconditionError

logger = logging.getLogger(__name__)
logger.setLevel(get_log_level())

TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_HEADER = "X-Slack-Signature"
PING_PATH = "/ping"


def _get_method(event: dict) -> str:
    return event.get("httpMethod") or ((event.get("requestContext") or {}).get("http") or {}).get("method") or ""


def _get_path(event: dict) -> str:
    return event.get("rawPath") or event.get("path") or "/"


def _header(headers: dict[str, Any], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _get_body(event: dict) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except ValueError as exc:
            raise SignatureError(AuthFailure.BODY_READ_FAILED, "Could not decode request body") from exc
    if isinstance(body, bytes):
        return body
    try:
        return body.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SignatureError(AuthFailure.BODY_READ_FAILED, "Could not read request body") from exc


def _authenticate(event: dict) -> bytes:
    headers = event.get("headers") or {}
    body = _get_body(event)
    return verify(
        body,
        _header(headers, TIMESTAMP_HEADER),
        _header(headers, SIGNATURE_HEADER),
        get_signing_secret(),
        max_age=get_max_request_age(),
    )


def _response(payload: dict, status: int = 200) -> dict:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _text_response(text: str, status: int = 200) -> dict:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "text/plain"},
        "body": text,
    }


def lambda_handler(event: dict, context: Any) -> dict:
    path = _get_path(event)
    logger.info("%s [%s]", _get_method(event), path)

    try:
        body = _authenticate(event)
    except SignatureError as exc:
        logger.warning("Signature verification failed (%s): %s", exc.reason.value, exc)
        return _response({"error": "invalid signature"}, status=401)

    if path == PING_PATH:
        return _text_response("pong")

    try:
        command = parse_form(body)
    except CommandParseError as exc:
        logger.warning("Rejected command: %s", exc)
        return _response({"error": str(exc)}, status=400)

    try:
        reply = handle_command(command)
    except PreconditionError:
        logger.exception("Command %s from [%s] failed", command.text, command.user_name)
        return _response({"error": "internal error"}, status=500)

    return _response(render(reply))
