from __future__ import annotations

import logging

from foosbot import messages
from foosbot.commands import CommandName, SlashCommand
from foosbot.config import get_log_level
from foosbot.messages import Reply
from foosbot.session import Session, SessionState, SessionStore, fresh_score, store
from foosbot.teams import PLAYERS_PER_GAME, assign

logger = logging.getLogger(__name__)
logger.setLevel(get_log_level())


def _no_game(session: Session, cmd: SlashCommand) -> tuple[Session, Reply]:
    name = cmd.command
    if name is CommandName.NEW:
        logger.info("User [%s] created a new game.", cmd.user_name)
        created = Session().with_player(cmd.user_id, fresh_score())
        logger.info("[%s] players: %s", created.state.value, list(created.roster))
        return created, messages.game_created(cmd.user_id)
    if name is CommandName.EXPLAIN:
        return session, messages.explain()
    if name is CommandName.UNKNOWN:
        logger.info("[%s] Unrecognized command: [%s]", session.state.value, cmd.text)
        return session, messages.unrecognized()
    logger.info("No open game")
    return session, messages.no_open_game(cmd.user_id)


def _play(session: Session, cmd: SlashCommand) -> tuple[Session, Reply]:
    if cmd.user_id in session.roster:
        logger.info("User [%s] already signed up for the current game", cmd.user_name)
        return session, messages.player_already_added(cmd.user_id, session.missing)

    logger.info("Adding [%s] to the current game", cmd.user_name)
    joined = session.with_player(cmd.user_id, fresh_score())
    logger.info("[%s] players: %s", joined.state.value, list(joined.roster))
    if len(joined.roster) == PLAYERS_PER_GAME:
        team_a, team_b = assign(joined.roster)
        logger.info("Game is on: %s vs. %s", team_a, team_b)
        return Session(), messages.game_on(team_a, team_b)
    return joined, messages.player_added(cmd.user_id, joined.missing)


def _give_up(session: Session, cmd: SlashCommand) -> tuple[Session, Reply]:
    if cmd.user_id not in session.roster:
        logger.info("User [%s] never signed up for the current game", cmd.user_name)
        return session, messages.player_not_in_game(cmd.user_id)

    logger.info("Removing [%s] from the current game", cmd.user_name)
    remaining = session.without_player(cmd.user_id)
    if remaining.state is SessionState.NO_GAME:
        logger.info("No players left, game canceled")
        return remaining, messages.last_player_left(cmd.user_id)
    logger.info("[%s] players: %s", remaining.state.value, list(remaining.roster))
    return remaining, messages.player_left(cmd.user_id, remaining.missing)


def _collecting(session: Session, cmd: SlashCommand) -> tuple[Session, Reply]:
    name = cmd.command
    if name is CommandName.PLAY:
        return _play(session, cmd)
    if name is CommandName.GIVE_UP:
        return _give_up(session, cmd)
    if name is CommandName.RESET:
        logger.info("User [%s] reset the game", cmd.user_name)
        return Session(), messages.game_canceled()
    if name is CommandName.NEW:
        logger.info("[%s] Game is already created", session.state.value)
        return session, messages.game_already_created(session.missing)
    if name is CommandName.EXPLAIN:
        return session, messages.explain()
    if name is CommandName.CURRENT:
        logger.info("[%s] Asked for stats", session.state.value)
        return session, messages.current_players(list(session.roster))
    logger.info("[%s] Unrecognized command: [%s]", session.state.value, cmd.text)
    return session, messages.unrecognized()


def handle_command(cmd: SlashCommand, session_store: SessionStore = store) -> Reply:
    def transition(session: Session) -> tuple[Session, Reply]:
        if session.state is SessionState.COLLECTING:
            return _collecting(session, cmd)
        return _no_game(session, cmd)

    return session_store.with_session(transition)
