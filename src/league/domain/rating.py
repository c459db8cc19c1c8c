"""Player rating formulas.

Rating V2 is a convex combination of the match win percentage and the
triangular win percentage. Components are rounded half-up to two decimals on
exact decimal arithmetic and the rating is the sum of the rounded components,
so the breakdown total and the rating are always the same number.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from math import isfinite

from league.domain.common import PlayerStats, RatedPlayer
from league.domain.config import RatingParameters

_CENTS = Decimal("0.01")

LEGACY_POINTS_WEIGHT = Decimal("0.4")
LEGACY_WIN_PERCENTAGE_WEIGHT = Decimal("0.35")
LEGACY_GOALS_PER_MATCH_WEIGHT = Decimal("25")


@dataclass(frozen=True)
class RatingV2Breakdown:
    win_percentage_component: float
    triangular_win_percentage_component: float
    total: float


@dataclass(frozen=True)
class RatingV2Result:
    rating: float
    breakdown: RatingV2Breakdown


@dataclass(frozen=True)
class RatingV1Breakdown:
    points_component: float
    win_percentage_component: float
    goals_per_match_component: float
    total: float


def round2(value: float | Decimal) -> Decimal:
    """Round half-up to two decimals."""
    decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
    return decimal_value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def _validate_percentage(name: str, value: float) -> None:
    if not isfinite(value) or value < 0.0 or value > 100.0:
        raise ValueError(f"{name} must be between 0 and 100, got {value!r}")


def calculate_rating_v2(
    win_percentage: float,
    triangular_win_percentage: float,
    params: RatingParameters | None = None,
) -> RatingV2Result:
    """Compute rating V2 and its breakdown from the two success rates."""
    _validate_percentage("win_percentage", win_percentage)
    _validate_percentage("triangular_win_percentage", triangular_win_percentage)
    params = params or RatingParameters()

    win_component = round2(
        _to_decimal(win_percentage) * _to_decimal(params.win_percentage_weight)
    )
    triangular_component = round2(
        _to_decimal(triangular_win_percentage)
        * _to_decimal(params.triangular_win_percentage_weight)
    )
    total = round2(win_component + triangular_component)

    breakdown = RatingV2Breakdown(
        win_percentage_component=float(win_component),
        triangular_win_percentage_component=float(triangular_component),
        total=float(total),
    )
    return RatingV2Result(rating=breakdown.total, breakdown=breakdown)


def rating_v2_for_stats(stats: PlayerStats, params: RatingParameters | None = None) -> float:
    return calculate_rating_v2(
        stats.win_percentage,
        stats.triangular_win_percentage,
        params,
    ).rating


def calculate_rating_v1(stats: PlayerStats) -> RatingV1Breakdown:
    """Legacy rating: points, win percentage and goals per match."""
    goals_per_match = (
        Decimal(stats.goals) / Decimal(stats.matches) if stats.matches > 0 else Decimal(0)
    )
    points_component = round2(Decimal(stats.points) * LEGACY_POINTS_WEIGHT)
    win_component = round2(_to_decimal(stats.win_percentage) * LEGACY_WIN_PERCENTAGE_WEIGHT)
    goals_component = round2(goals_per_match * LEGACY_GOALS_PER_MATCH_WEIGHT)
    total = round2(points_component + win_component + goals_component)
    return RatingV1Breakdown(
        points_component=float(points_component),
        win_percentage_component=float(win_component),
        goals_per_match_component=float(goals_component),
        total=float(total),
    )


def rate_players(
    stats_by_player: Mapping[int, PlayerStats],
    names: Mapping[int, str] | None = None,
    params: RatingParameters | None = None,
) -> list[RatedPlayer]:
    """Build balancer input from aggregated stats, keeping mapping order."""
    names = names or {}
    return [
        RatedPlayer(
            player_id=player_id,
            rating=rating_v2_for_stats(stats, params),
            name=names.get(player_id),
        )
        for player_id, stats in stats_by_player.items()
    ]


__all__ = [
    "RatingV1Breakdown",
    "RatingV2Breakdown",
    "RatingV2Result",
    "calculate_rating_v1",
    "calculate_rating_v2",
    "rate_players",
    "rating_v2_for_stats",
    "round2",
]
