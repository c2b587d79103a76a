from __future__ import annotations

import hashlib
import hmac
import time
from enum import Enum

SIGNATURE_VERSION = "v0"


class AuthFailure(str, Enum):
    BAD_SIGNATURE = "bad_signature"
    MALFORMED_HEADERS = "malformed_headers"
    BODY_READ_FAILED = "body_read_failed"
    STALE_TIMESTAMP = "stale_timestamp"


class SignatureError(RuntimeError):
    def __init__(self, reason: AuthFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def compute_signature(raw_body: bytes, timestamp: str, secret: bytes) -> str:
    """Return the ``v0=<hex>`` signature Slack sends for ``raw_body``."""
    base = f"{SIGNATURE_VERSION}:{timestamp}:".encode("utf-8") + raw_body
    digest = hmac.new(secret, base, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def _check_freshness(timestamp: str, max_age: int, now: float | None) -> None:
    try:
        sent_at = int(timestamp)
    except ValueError as exc:
        raise SignatureError(AuthFailure.MALFORMED_HEADERS, "Timestamp is not an integer") from exc
    current = time.time() if now is None else now
    if abs(current - sent_at) > max_age:
        raise SignatureError(AuthFailure.STALE_TIMESTAMP, "Request timestamp outside the allowed window")


def verify(
    raw_body: bytes,
    timestamp: str | None,
    signature: str | None,
    secret: bytes,
    *,
    max_age: int = 0,
    now: float | None = None,
) -> bytes:
    """Check a signed Slack request and hand back the body it covers.

    The signature is an HMAC-SHA256 over ``v0:<timestamp>:<body>``. Freshness
    of ``timestamp`` is only enforced when ``max_age`` is positive.
    """
    if not timestamp or not signature:
        raise SignatureError(AuthFailure.MALFORMED_HEADERS, "Missing signature headers")
    prefix = f"{SIGNATURE_VERSION}="
    if not signature.startswith(prefix):
        raise SignatureError(AuthFailure.MALFORMED_HEADERS, "Unexpected signature version")
    if max_age > 0:
        _check_freshness(timestamp, max_age, now)

    expected = compute_signature(raw_body, timestamp, secret)
    if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        raise SignatureError(AuthFailure.BAD_SIGNATURE, "Bad signature")
    return raw_body
