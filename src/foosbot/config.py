import os


def require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required env var: {name}")
    return value


def optional_env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def get_signing_secret() -> bytes:
    return require_env("SLACK_SIGNING_SECRET").encode("utf-8")


def get_max_request_age() -> int:
    raw = optional_env("SLACK_MAX_REQUEST_AGE", "0") or "0"
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"SLACK_MAX_REQUEST_AGE must be an integer, got {raw!r}") from exc


def get_log_level() -> str:
    return optional_env("LOG_LEVEL", "INFO") or "INFO"
