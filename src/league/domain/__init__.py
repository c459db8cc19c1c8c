"""League engine domain modules."""

from league.domain.balancer import BalancedTeams, balance_teams
from league.domain.common import (
    MatchOutcome,
    MatchRecord,
    PlayerStats,
    RatedPlayer,
    SeasonScope,
    TeamName,
    TeamStanding,
    TriangularRecord,
    TriangularScore,
)
from league.domain.errors import (
    DuplicatePlayerError,
    InsufficientPlayersError,
    LeagueEngineError,
    MalformedTriangularError,
)
from league.domain.pipeline import RecalculationSummary, recalculate_all_player_stats
from league.domain.player_stats import aggregate_player_stats
from league.domain.rating import calculate_rating_v2
from league.domain.triangular import score_triangular

__all__ = [
    "BalancedTeams",
    "DuplicatePlayerError",
    "InsufficientPlayersError",
    "LeagueEngineError",
    "MalformedTriangularError",
    "MatchOutcome",
    "MatchRecord",
    "PlayerStats",
    "RatedPlayer",
    "RecalculationSummary",
    "SeasonScope",
    "TeamName",
    "TeamStanding",
    "TriangularRecord",
    "TriangularScore",
    "aggregate_player_stats",
    "balance_teams",
    "calculate_rating_v2",
    "recalculate_all_player_stats",
    "score_triangular",
]
