"""Greedy three-way team balancing over player ratings."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from league.domain.common import RatedPlayer
from league.domain.errors import DuplicatePlayerError, InsufficientPlayersError

TEAM_COUNT = 3


@dataclass(frozen=True)
class BalancedTeams:
    team_a: tuple[RatedPlayer, ...]
    team_b: tuple[RatedPlayer, ...]
    team_c: tuple[RatedPlayer, ...]

    @property
    def teams(self) -> tuple[tuple[RatedPlayer, ...], ...]:
        return (self.team_a, self.team_b, self.team_c)

    @property
    def rating_sums(self) -> tuple[float, float, float]:
        a, b, c = (_rating_total(team) for team in self.teams)
        return (a, b, c)

    @property
    def spread(self) -> float:
        sums = self.rating_sums
        return float(Decimal(str(max(sums))) - Decimal(str(min(sums))))


def _rating_total(team: Sequence[RatedPlayer]) -> float:
    return float(sum((Decimal(str(player.rating)) for player in team), Decimal(0)))


def balance_teams(players: Sequence[RatedPlayer]) -> BalancedTeams:
    """Split a rated pool into three teams with a first-fit-decreasing greedy pass.

    Players are taken by rating, highest first (input order breaks ties), and
    each goes to the team with the lowest running rating sum (lowest index on
    ties). Team sizes are capped so they never differ by more than one. This
    is a heuristic and does not search for the optimal split.
    """
    if len(players) < TEAM_COUNT:
        raise InsufficientPlayersError(len(players), TEAM_COUNT)

    counts = Counter(player.player_id for player in players)
    duplicates = sorted(player_id for player_id, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicatePlayerError(duplicates)

    ordered = sorted(enumerate(players), key=lambda item: (-item[1].rating, item[0]))

    base_size, extra_slots = divmod(len(players), TEAM_COUNT)
    teams: list[list[RatedPlayer]] = [[] for _ in range(TEAM_COUNT)]
    sums = [Decimal(0)] * TEAM_COUNT

    for _, player in ordered:
        oversized = sum(1 for team in teams if len(team) > base_size)
        eligible = [
            index
            for index, team in enumerate(teams)
            if len(team) < base_size or (len(team) == base_size and oversized < extra_slots)
        ]
        target = min(eligible, key=lambda index: (sums[index], index))
        teams[target].append(player)
        sums[target] += Decimal(str(player.rating))

    return BalancedTeams(
        team_a=tuple(teams[0]),
        team_b=tuple(teams[1]),
        team_c=tuple(teams[2]),
    )


__all__ = ["BalancedTeams", "TEAM_COUNT", "balance_teams"]
