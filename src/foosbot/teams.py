from __future__ import annotations

from collections.abc import Mapping

TEAM_SIZE = 2
PLAYERS_PER_GAME = 2 * TEAM_SIZE


class PreconditionError(RuntimeError):
    pass


def assign(roster: Mapping[str, int]) -> tuple[tuple[str, str], tuple[str, str]]:
    """Split a full roster into two teams of two.

    Players are ordered by fairness score (user id breaks ties); the two
    lowest form the first team and the two highest the second.
    """
    if len(roster) != PLAYERS_PER_GAME:
        raise PreconditionError(f"Team assignment needs {PLAYERS_PER_GAME} players, got {len(roster)}")

    ordered = [uid for uid, _ in sorted(roster.items(), key=lambda item: (item[1], item[0]))]
    return (ordered[0], ordered[1]), (ordered[2], ordered[3])
