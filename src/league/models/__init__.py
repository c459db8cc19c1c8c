"""ORM models."""

from league.models.base import Base
from league.models.league import (
    Match,
    MatchGoal,
    Player,
    PlayerStatsRow,
    Season,
    Triangular,
    TriangularPlayer,
)

__all__ = [
    "Base",
    "Match",
    "MatchGoal",
    "Player",
    "PlayerStatsRow",
    "Season",
    "Triangular",
    "TriangularPlayer",
]
