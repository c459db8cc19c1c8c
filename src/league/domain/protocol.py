"""Storage capabilities the engine consumes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from league.domain.common import MatchRecord, PlayerStats, SeasonScope, TriangularRecord


@runtime_checkable
class LeagueReader(Protocol):
    """Read access to match history."""

    def fetch_triangulars(self, season: SeasonScope) -> list[TriangularRecord]: ...

    def fetch_player_ids(self) -> list[int]: ...

    def fetch_player_matches(self, player_id: int) -> list[MatchRecord]: ...


@runtime_checkable
class PlayerStatsWriter(Protocol):
    """Write access for derived player stats.

    ``replace_player_stats`` must apply the whole batch or nothing.
    """

    def replace_player_stats(self, stats_by_player: Mapping[int, PlayerStats]) -> None: ...


__all__ = ["LeagueReader", "PlayerStatsWriter"]
