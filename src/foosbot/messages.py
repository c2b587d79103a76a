from __future__ import annotations

import random
from dataclasses import dataclass, field

from foosbot.commands import COMMANDS

HERE = "<!here>"
PLAYER_GLYPHS = (":man:", ":woman:")

_rng = random.Random()


@dataclass(frozen=True)
class Reply:
    headline: str
    details: tuple[str, ...] = field(default_factory=tuple)


def _explain_message() -> str:
    lines = ["Available commands:"]
    for command, description in COMMANDS:
        lines.append(f"\t*{command.value}*\t\t{description}")
    return "\n".join(lines) + "\n"


EXPLAIN_MESSAGE = _explain_message()


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def missing_players(count: int) -> str:
    glyphs = "".join(_rng.choice(PLAYER_GLYPHS) for _ in range(count))
    return f"{HERE} The game needs {glyphs} more players"


def explain() -> Reply:
    return Reply(EXPLAIN_MESSAGE)


def unrecognized() -> Reply:
    return Reply("Unrecognized command", ("Use */explain* for a list of all available commands",))


def no_open_game(user_id: str) -> Reply:
    return Reply(
        f"{mention(user_id)} There is no open game",
        ("Use the */new* command to start a new one",),
    )


def game_created(user_id: str) -> Reply:
    return Reply(f"{HERE} User {mention(user_id)} just started a new game", ("Use */play* to join",))


def game_already_created(missing: int) -> Reply:
    return Reply("Game already created", (missing_players(missing),))


def player_added(user_id: str, missing: int) -> Reply:
    return Reply(f"{mention(user_id)} you have been added to the current game", (missing_players(missing),))


def player_already_added(user_id: str, missing: int) -> Reply:
    return Reply(
        f"{mention(user_id)} you have already been added to the current game",
        (missing_players(missing),),
    )


def player_left(user_id: str, missing: int) -> Reply:
    return Reply(f"{HERE} {mention(user_id)} Just abandoned the game", (missing_players(missing),))


def last_player_left(user_id: str) -> Reply:
    return Reply(
        f"{HERE} {mention(user_id)} Just abandoned the game",
        ("No players left: game has been canceled!",),
    )


def player_not_in_game(user_id: str) -> Reply:
    return Reply(f"{mention(user_id)} you are not in the current game")


def game_canceled() -> Reply:
    return Reply(f"{HERE} Game has been canceled!")


def current_players(user_ids: list[str]) -> Reply:
    players = ", ".join(mention(uid) for uid in user_ids)
    return Reply(f"Current players: [{players}]", ("Use */play* to join",))


def game_on(team_a: tuple[str, str], team_b: tuple[str, str]) -> Reply:
    headline = (
        f"[{mention(team_a[0])} - {mention(team_a[1])}] vs. "
        f"[{mention(team_b[0])} - {mention(team_b[1])}]"
    )
    return Reply(headline, (f"{HERE} :bell::soccer: *Game is on!* :bell::soccer:",))


def render(reply: Reply) -> dict:
    return {
        "response_type": "in_channel",
        "text": reply.headline,
        "attachments": [{"text": text} for text in reply.details],
    }
