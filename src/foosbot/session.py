"""Process-wide game session and the lock that guards it."""

from __future__ import annotations

import random
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from foosbot.messages import Reply
from foosbot.teams import PLAYERS_PER_GAME

SCORE_RANGE = 2**63

_rng = random.Random()


class SessionState(str, Enum):
    NO_GAME = "no_game"
    COLLECTING = "collecting"


@dataclass(frozen=True)
class Session:
    state: SessionState = SessionState.NO_GAME
    roster: dict[str, int] = field(default_factory=dict)

    @property
    def missing(self) -> int:
        return PLAYERS_PER_GAME - len(self.roster)

    def with_player(self, user_id: str, score: int) -> Session:
        return Session(SessionState.COLLECTING, {**self.roster, user_id: score})

    def without_player(self, user_id: str) -> Session:
        roster = {uid: score for uid, score in self.roster.items() if uid != user_id}
        if not roster:
            return Session()
        return Session(SessionState.COLLECTING, roster)


def fresh_score() -> int:
    return _rng.randrange(SCORE_RANGE)


Transition = Callable[[Session], tuple[Session, Reply]]


class SessionStore:
    """Holds the single session; every change goes through ``with_session``."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session or Session()
        self._lock = threading.Lock()

    def with_session(self, fn: Transition) -> Reply:
        # The stored session is only replaced once fn has returned.
        with self._lock:
            session, reply = fn(self._session)
            self._session = session
        return reply

    def snapshot(self) -> Session:
        with self._lock:
            return Session(self._session.state, dict(self._session.roster))

    def reset(self) -> None:
        with self._lock:
            self._session = Session()


store = SessionStore()
