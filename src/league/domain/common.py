"""Shared record types for the league engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TeamName(str, Enum):
    """The three fixed team labels of a triangular, in tie-break order."""

    TEAM_1 = "Team 1"
    TEAM_2 = "Team 2"
    TEAM_3 = "Team 3"

    @property
    def order(self) -> int:
        return list(TeamName).index(self)


class MatchOutcome(str, Enum):
    """Which side of a match won."""

    TEAM_A = "TeamA"
    TEAM_B = "TeamB"
    DRAW = "Draw"


@dataclass(frozen=True)
class MatchRecord:
    """Canonical match payload consumed by the triangular scorer."""

    match_id: int
    team_a: TeamName
    team_b: TeamName
    team_a_score: int
    team_b_score: int
    outcome: MatchOutcome
    played_at: datetime | None = None
    team_a_players: tuple[int, ...] = ()
    team_b_players: tuple[int, ...] = ()
    goals_by_player: dict[int, int] = field(default_factory=dict)

    @property
    def winner(self) -> TeamName | None:
        if self.outcome is MatchOutcome.TEAM_A:
            return self.team_a
        if self.outcome is MatchOutcome.TEAM_B:
            return self.team_b
        return None

    @property
    def loser(self) -> TeamName | None:
        if self.outcome is MatchOutcome.TEAM_A:
            return self.team_b
        if self.outcome is MatchOutcome.TEAM_B:
            return self.team_a
        return None

    def involves(self, team: TeamName) -> bool:
        return team in (self.team_a, self.team_b)

    def goals_for(self, team: TeamName) -> int:
        if team == self.team_a:
            return self.team_a_score
        if team == self.team_b:
            return self.team_b_score
        return 0

    def goals_against(self, team: TeamName) -> int:
        if team == self.team_a:
            return self.team_b_score
        if team == self.team_b:
            return self.team_a_score
        return 0


@dataclass(frozen=True)
class TriangularRecord:
    """One triangular session: its matches and the roster of each team."""

    triangular_id: int
    matches: tuple[MatchRecord, ...]
    rosters: dict[TeamName, tuple[int, ...]]
    season_id: int | None = None
    played_at: datetime | None = None

    def team_of(self, player_id: int) -> TeamName | None:
        for team, players in self.rosters.items():
            if player_id in players:
                return team
        return None

    def player_goals(self, player_id: int) -> int:
        return sum(match.goals_by_player.get(player_id, 0) for match in self.matches)

    def player_ids(self) -> set[int]:
        return {player_id for players in self.rosters.values() for player_id in players}


@dataclass(frozen=True)
class TeamStanding:
    """Derived result of one team inside one triangular."""

    team: TeamName
    points: int = 0
    wins: int = 0
    normal_wins: int = 0
    draws: int = 0
    losses: int = 0
    matches_played: int = 0
    goals_for: int = 0
    goals_against: int = 0
    position: int = 0


@dataclass(frozen=True)
class TriangularScore:
    """Standings ordered by position and the champion, if any match was played."""

    standings: tuple[TeamStanding, ...]
    champion: TeamName | None

    def standing_for(self, team: TeamName) -> TeamStanding:
        for standing in self.standings:
            if standing.team == team:
                return standing
        raise KeyError(team)

    def position_of(self, team: TeamName) -> int:
        return self.standing_for(team).position


@dataclass(frozen=True)
class PlayerStats:
    """Cumulative stats derived from a player's triangular history."""

    matches: int = 0
    goals: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: int = 0
    win_percentage: float = 0.0
    triangulars_played: int = 0
    triangular_wins: int = 0
    triangular_seconds: int = 0
    triangular_thirds: int = 0
    triangular_points: int = 0
    triangular_win_percentage: float = 0.0


@dataclass(frozen=True)
class RatedPlayer:
    """Player entry consumed by the team balancer."""

    player_id: int
    rating: float
    name: str | None = None


@dataclass(frozen=True)
class SeasonScope:
    """Which triangulars a read should cover."""

    season_id: int | None = None
    active_only: bool = False

    def __post_init__(self) -> None:
        if self.season_id is not None and self.active_only:
            raise ValueError("SeasonScope cannot select both a season id and the active season")

    @classmethod
    def all_seasons(cls) -> SeasonScope:
        return cls()

    @classmethod
    def active(cls) -> SeasonScope:
        return cls(active_only=True)

    @classmethod
    def for_season(cls, season_id: int) -> SeasonScope:
        return cls(season_id=season_id)

    @classmethod
    def from_options(cls, *, season_id: int | None, active_only: bool) -> SeasonScope:
        """Build a scope from CLI-style options; no option means all seasons."""
        if season_id is not None:
            if active_only:
                raise ValueError("Pass either a season id or the active-season flag, not both")
            return cls.for_season(season_id)
        if active_only:
            return cls.active()
        return cls.all_seasons()

    def describe(self) -> str:
        if self.active_only:
            return "active"
        if self.season_id is not None:
            return str(self.season_id)
        return "all"


__all__ = [
    "MatchOutcome",
    "MatchRecord",
    "PlayerStats",
    "RatedPlayer",
    "SeasonScope",
    "TeamName",
    "TeamStanding",
    "TriangularRecord",
    "TriangularScore",
]
