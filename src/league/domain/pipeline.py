"""Full rebuild of derived player stats from raw match history."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from league.domain.common import SeasonScope
from league.domain.config import ScoringParameters
from league.domain.player_stats import aggregate_all_players
from league.domain.protocol import LeagueReader, PlayerStatsWriter


@dataclass(frozen=True)
class RecalculationSummary:
    """Outcome of one full stats rebuild."""

    season: str
    triangulars_processed: int
    players_updated: int
    dry_run: bool


def recalculate_all_player_stats(
    reader: LeagueReader,
    writer: PlayerStatsWriter,
    *,
    season: SeasonScope | None = None,
    params: ScoringParameters | None = None,
    dry_run: bool = False,
    echo: Callable[[str], None] | None = None,
) -> RecalculationSummary:
    """Recompute every player's stats from scratch and store them as one batch.

    Each triangular in the scope is scored exactly once. Players with no
    triangulars in scope are written with zeroed stats. Nothing is written
    unless every triangular scores cleanly.
    """
    season = season or SeasonScope.all_seasons()

    triangulars = reader.fetch_triangulars(season)
    player_ids = reader.fetch_player_ids()
    if echo is not None:
        echo(
            f"loaded season={season.describe()} "
            f"triangulars={len(triangulars)} "
            f"players={len(player_ids)}"
        )

    result = aggregate_all_players(player_ids, triangulars, params=params)
    players_updated = len(result.stats_by_player)

    if dry_run:
        if echo is not None:
            echo(
                f"[dry-run] season={season.describe()} "
                f"triangulars_processed={result.triangulars_processed} "
                f"players={players_updated}"
            )
        return RecalculationSummary(
            season=season.describe(),
            triangulars_processed=result.triangulars_processed,
            players_updated=players_updated,
            dry_run=True,
        )

    writer.replace_player_stats(result.stats_by_player)
    if echo is not None:
        echo(
            "completed "
            f"season={season.describe()} "
            f"triangulars_processed={result.triangulars_processed} "
            f"players_updated={players_updated}"
        )

    return RecalculationSummary(
        season=season.describe(),
        triangulars_processed=result.triangulars_processed,
        players_updated=players_updated,
        dry_run=False,
    )


__all__ = ["RecalculationSummary", "recalculate_all_player_stats"]
