"""Cross-triangular player stats aggregation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from league.domain.common import PlayerStats, TeamName, TriangularRecord, TriangularScore
from league.domain.config import RatingParameters, ScoringParameters
from league.domain.errors import MalformedTriangularError, safe_percentage
from league.domain.rating import calculate_rating_v1, rating_v2_for_stats, round2
from league.domain.triangular import score_triangular_record

SeasonFilter = Callable[[TriangularRecord], bool]


class RankingMetric(str, Enum):
    GOALS = "goals"
    WINS = "wins"
    POINTS = "points"
    RATING = "rating"
    RATING_V2 = "rating_v2"


@dataclass(frozen=True)
class PerformanceSummary:
    win_percentage: int
    draw_percentage: int
    loss_percentage: int
    goals_per_match: float


@dataclass(frozen=True)
class TriangularAverages:
    points_per_triangular: float
    wins_per_triangular: float
    goals_per_triangular: float
    matches_per_triangular: float


@dataclass(frozen=True)
class PlayerTriangularEntry:
    """One triangular from a player's point of view.

    ``position`` is 0 and ``champion`` is None while no match has been played.
    ``points``, ``wins`` and ``draws`` are the team's totals in that triangular;
    ``goals`` are the player's own.
    """

    triangular_id: int
    season_id: int | None
    played_at: datetime | None
    team: TeamName
    position: int
    champion: TeamName | None
    points: int
    wins: int
    draws: int
    goals: int
    triangular_points: int


@dataclass(frozen=True)
class AggregationResult:
    stats_by_player: dict[int, PlayerStats]
    triangulars_processed: int


@dataclass
class _StatsAccumulator:
    matches: int = 0
    goals: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    triangulars_played: int = 0
    triangular_wins: int = 0
    triangular_seconds: int = 0
    triangular_thirds: int = 0
    triangular_points: int = 0

    def add(
        self,
        player_id: int,
        record: TriangularRecord,
        score: TriangularScore,
        params: ScoringParameters,
    ) -> None:
        team = record.team_of(player_id)
        if team is None:
            return
        standing = score.standing_for(team)

        self.triangulars_played += 1
        self.matches += standing.matches_played
        self.wins += standing.wins
        self.draws += standing.draws
        self.losses += standing.losses
        self.goals += record.player_goals(player_id)

        # An unplayed triangular has no finishing order yet.
        if score.champion is None:
            return
        if standing.position == 1:
            self.triangular_wins += 1
        elif standing.position == 2:
            self.triangular_seconds += 1
        elif standing.position == 3:
            self.triangular_thirds += 1
        self.triangular_points += params.position_points(standing.position)

    def build(self, params: ScoringParameters) -> PlayerStats:
        return PlayerStats(
            matches=self.matches,
            goals=self.goals,
            wins=self.wins,
            draws=self.draws,
            losses=self.losses,
            points=self.wins * params.win_points + self.draws * params.draw_points,
            win_percentage=safe_percentage(self.wins, self.matches),
            triangulars_played=self.triangulars_played,
            triangular_wins=self.triangular_wins,
            triangular_seconds=self.triangular_seconds,
            triangular_thirds=self.triangular_thirds,
            triangular_points=self.triangular_points,
            triangular_win_percentage=safe_percentage(
                self.triangular_wins, self.triangulars_played
            ),
        )


def unique_triangulars(triangulars: Iterable[TriangularRecord]) -> list[TriangularRecord]:
    """Collapse repeated records by id, rejecting conflicting duplicates."""
    by_id: dict[int, TriangularRecord] = {}
    for record in triangulars:
        existing = by_id.get(record.triangular_id)
        if existing is None:
            by_id[record.triangular_id] = record
        elif existing != record:
            raise MalformedTriangularError(
                "appears twice with different contents",
                triangular_id=record.triangular_id,
            )
    return [by_id[triangular_id] for triangular_id in sorted(by_id)]


def aggregate_player_stats(
    player_id: int,
    triangulars: Iterable[TriangularRecord],
    *,
    season_filter: SeasonFilter | None = None,
    params: ScoringParameters | None = None,
) -> PlayerStats:
    """Fold every triangular the player took part in into cumulative stats."""
    params = params or ScoringParameters()
    accumulator = _StatsAccumulator()
    for record in unique_triangulars(triangulars):
        if season_filter is not None and not season_filter(record):
            continue
        if record.team_of(player_id) is None:
            continue
        accumulator.add(player_id, record, score_triangular_record(record, params), params)
    return accumulator.build(params)


def aggregate_all_players(
    player_ids: Iterable[int],
    triangulars: Iterable[TriangularRecord],
    *,
    season_filter: SeasonFilter | None = None,
    params: ScoringParameters | None = None,
) -> AggregationResult:
    """Score each triangular once and roll it into every participant's stats."""
    params = params or ScoringParameters()
    accumulators: dict[int, _StatsAccumulator] = {
        player_id: _StatsAccumulator() for player_id in player_ids
    }

    processed = 0
    for record in unique_triangulars(triangulars):
        if season_filter is not None and not season_filter(record):
            continue
        score = score_triangular_record(record, params)
        processed += 1
        for player_id in sorted(record.player_ids()):
            accumulator = accumulators.setdefault(player_id, _StatsAccumulator())
            accumulator.add(player_id, record, score, params)

    return AggregationResult(
        stats_by_player={
            player_id: accumulators[player_id].build(params) for player_id in sorted(accumulators)
        },
        triangulars_processed=processed,
    )


def player_triangular_history(
    player_id: int,
    triangulars: Iterable[TriangularRecord],
    *,
    season_filter: SeasonFilter | None = None,
    params: ScoringParameters | None = None,
) -> list[PlayerTriangularEntry]:
    """List the player's triangulars newest first, undated ones last."""
    params = params or ScoringParameters()
    entries: list[PlayerTriangularEntry] = []
    for record in unique_triangulars(triangulars):
        if season_filter is not None and not season_filter(record):
            continue
        team = record.team_of(player_id)
        if team is None:
            continue
        score = score_triangular_record(record, params)
        standing = score.standing_for(team)
        position = standing.position if score.champion is not None else 0
        entries.append(
            PlayerTriangularEntry(
                triangular_id=record.triangular_id,
                season_id=record.season_id,
                played_at=record.played_at,
                team=team,
                position=position,
                champion=score.champion,
                points=standing.points,
                wins=standing.wins,
                draws=standing.draws,
                goals=record.player_goals(player_id),
                triangular_points=params.position_points(position),
            )
        )

    entries.sort(
        key=lambda entry: (
            entry.played_at is not None,
            entry.played_at or datetime.min,
            entry.triangular_id,
        ),
        reverse=True,
    )
    return entries


def performance_summary(stats: PlayerStats) -> PerformanceSummary:
    """Whole-number result percentages and goals per match."""
    goals_per_match = (
        round2(Decimal(stats.goals) / Decimal(stats.matches)) if stats.matches > 0 else Decimal(0)
    )
    return PerformanceSummary(
        win_percentage=_round_whole(safe_percentage(stats.wins, stats.matches)),
        draw_percentage=_round_whole(safe_percentage(stats.draws, stats.matches)),
        loss_percentage=_round_whole(safe_percentage(stats.losses, stats.matches)),
        goals_per_match=float(goals_per_match),
    )


def triangular_averages(stats: PlayerStats) -> TriangularAverages:
    played = stats.triangulars_played

    def per_triangular(total: int) -> float:
        if played == 0:
            return 0.0
        return float(round2(Decimal(total) / Decimal(played)))

    return TriangularAverages(
        points_per_triangular=per_triangular(stats.points),
        wins_per_triangular=per_triangular(stats.wins),
        goals_per_triangular=per_triangular(stats.goals),
        matches_per_triangular=per_triangular(stats.matches),
    )


def rank_players(
    players: Sequence[tuple[int, PlayerStats]],
    metric: RankingMetric,
    params: RatingParameters | None = None,
) -> list[tuple[int, PlayerStats]]:
    """Stable descending sort of (player_id, stats) pairs by one metric.

    ``params`` sets the Rating V2 weights used by the ``rating_v2`` metric.
    """
    key_fns: Mapping[RankingMetric, Callable[[PlayerStats], float]] = {
        RankingMetric.GOALS: lambda stats: stats.goals,
        RankingMetric.WINS: lambda stats: stats.wins,
        RankingMetric.POINTS: lambda stats: stats.points,
        RankingMetric.RATING: lambda stats: calculate_rating_v1(stats).total,
        RankingMetric.RATING_V2: lambda stats: rating_v2_for_stats(stats, params),
    }
    key_fn = key_fns[metric]
    return sorted(players, key=lambda item: key_fn(item[1]), reverse=True)


def _round_whole(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


__all__ = [
    "AggregationResult",
    "PerformanceSummary",
    "PlayerTriangularEntry",
    "RankingMetric",
    "SeasonFilter",
    "TriangularAverages",
    "aggregate_all_players",
    "aggregate_player_stats",
    "performance_summary",
    "player_triangular_history",
    "rank_players",
    "triangular_averages",
    "unique_triangulars",
]
