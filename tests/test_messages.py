from __future__ import annotations

import pytest

from foosbot import messages
from foosbot.commands import CommandName, CommandParseError, parse_form
from foosbot.messages import Reply, render


def test_render_maps_details_to_attachments_in_order() -> None:
    payload = render(Reply("headline", ("first", "second")))
    assert payload == {
        "response_type": "in_channel",
        "text": "headline",
        "attachments": [{"text": "first"}, {"text": "second"}],
    }


def test_render_without_details_has_empty_attachments() -> None:
    assert render(Reply("hi"))["attachments"] == []


@pytest.mark.parametrize("count", [1, 2, 3])
def test_missing_players_draws_one_glyph_per_slot(count: int) -> None:
    text = messages.missing_players(count)
    glyphs = text.removeprefix("<!here> The game needs ").removesuffix(" more players")
    assert glyphs.count(":man:") + glyphs.count(":woman:") == count
    assert glyphs.replace(":woman:", "").replace(":man:", "") == ""


def test_explain_lists_every_command() -> None:
    for name in ("/new", "/play", "/giveup", "/reset", "/current", "/explain"):
        assert f"*{name}*" in messages.EXPLAIN_MESSAGE


def test_game_on_formats_both_teams() -> None:
    reply = messages.game_on(("U1", "U2"), ("U3", "U4"))
    assert reply.headline == "[<@U1> - <@U2>] vs. [<@U3> - <@U4>]"


def test_parse_form_reads_slack_fields() -> None:
    body = b"command=%2Fplay&user_id=U1&user_name=alice&channel_id=C1&text="
    command = parse_form(body)
    assert command.command is CommandName.PLAY
    assert command.user_id == "U1"
    assert command.user_name == "alice"
    assert command.channel_id == "C1"
    assert command.response_url is None


def test_parse_form_keeps_unknown_commands() -> None:
    command = parse_form(b"command=%2Fdance&user_id=U1&user_name=alice")
    assert command.command is CommandName.UNKNOWN
    assert command.text == "/dance"


@pytest.mark.parametrize(
    "body",
    [
        b"user_id=U1&user_name=alice",
        b"command=%2Fplay&user_name=alice",
        b"command=%2Fplay&user_id=&user_name=alice",
        b"\xff\xfe",
    ],
)
def test_parse_form_rejects_incomplete_bodies(body: bytes) -> None:
    with pytest.raises(CommandParseError):
        parse_form(body)


def test_command_name_requires_exact_match() -> None:
    assert CommandName.parse("/PLAY") is CommandName.UNKNOWN
    assert CommandName.parse("") is CommandName.UNKNOWN
    assert CommandName.parse("/giveup") is CommandName.GIVE_UP
