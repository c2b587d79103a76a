from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs


class CommandName(str, Enum):
    EXPLAIN = "/explain"
    GIVE_UP = "/giveup"
    NEW = "/new"
    PLAY = "/play"
    RESET = "/reset"
    CURRENT = "/current"
    UNKNOWN = ""

    @classmethod
    def parse(cls, text: str) -> CommandName:
        for member in cls:
            if member is not cls.UNKNOWN and member.value == text:
                return member
        return cls.UNKNOWN


# Slash commands as registered with Slack, in the order they are listed.
COMMANDS: list[tuple[CommandName, str]] = [
    (CommandName.NEW, "Starts a new game"),
    (CommandName.PLAY, "Joins current game"),
    (CommandName.GIVE_UP, "Abandon current game"),
    (CommandName.RESET, "Hard reset"),
    (CommandName.CURRENT, "Show status"),
    (CommandName.EXPLAIN, "List available commands"),
]

REQUIRED_FIELDS = ("command", "user_id", "user_name")


class CommandParseError(ValueError):
    pass


@dataclass(frozen=True)
class SlashCommand:
    command: CommandName
    text: str
    user_id: str
    user_name: str
    channel_id: str | None = None
    response_url: str | None = None


def _first(values: dict[str, list[str]], name: str) -> str | None:
    items = values.get(name)
    if not items:
        return None
    return items[0]


def parse_form(raw_body: bytes) -> SlashCommand:
    try:
        decoded = raw_body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CommandParseError("Request body is not valid UTF-8") from exc

    values = parse_qs(decoded, keep_blank_values=True)
    missing = [name for name in REQUIRED_FIELDS if not _first(values, name)]
    if missing:
        raise CommandParseError(f"Missing form fields: {', '.join(missing)}")

    text = _first(values, "command") or ""
    return SlashCommand(
        command=CommandName.parse(text),
        text=text,
        user_id=_first(values, "user_id") or "",
        user_name=_first(values, "user_name") or "",
        channel_id=_first(values, "channel_id"),
        response_url=_first(values, "response_url"),
    )
