"""League tables: players, seasons, triangulars, matches and derived stats."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from league.models.base import Base

_TEAM_NAMES = "('Team 1', 'Team 2', 'Team 3')"


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class Season(Base):
    """Date-ranged grouping of triangulars; an open finish date marks the active season."""

    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    init_season_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    finish_season_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class Triangular(Base):
    __tablename__ = "triangulars"
    __table_args__ = (Index("idx_triangulars_season", "season_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    season_id: Mapped[int | None] = mapped_column(ForeignKey("seasons.id"), nullable=True)
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class TriangularPlayer(Base):
    """Roster entry: which team a player played for in one triangular."""

    __tablename__ = "triangular_players"
    __table_args__ = (
        UniqueConstraint("triangular_id", "player_id", name="uq_triangular_players_player"),
        CheckConstraint(f"team_name IN {_TEAM_NAMES}", name="ck_triangular_players_team"),
        Index("idx_triangular_players_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    triangular_id: Mapped[int] = mapped_column(ForeignKey("triangulars.id"), nullable=False)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    team_name: Mapped[str] = mapped_column(String(16), nullable=False)


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("team_a_name <> team_b_name", name="ck_matches_distinct_teams"),
        CheckConstraint(f"team_a_name IN {_TEAM_NAMES}", name="ck_matches_team_a"),
        CheckConstraint(f"team_b_name IN {_TEAM_NAMES}", name="ck_matches_team_b"),
        CheckConstraint(
            "team_a_score >= 0 AND team_b_score >= 0",
            name="ck_matches_scores",
        ),
        CheckConstraint("outcome IN ('TeamA', 'TeamB', 'Draw')", name="ck_matches_outcome"),
        Index("idx_matches_triangular", "triangular_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    triangular_id: Mapped[int] = mapped_column(ForeignKey("triangulars.id"), nullable=False)
    team_a_name: Mapped[str] = mapped_column(String(16), nullable=False)
    team_b_name: Mapped[str] = mapped_column(String(16), nullable=False)
    team_a_score: Mapped[int] = mapped_column(Integer, nullable=False)
    team_b_score: Mapped[int] = mapped_column(Integer, nullable=False)
    outcome: Mapped[str] = mapped_column(String(8), nullable=False)
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class MatchGoal(Base):
    __tablename__ = "match_goals"
    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_match_goals_player"),
        CheckConstraint("goals > 0", name="ck_match_goals_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(ForeignKey("matches.id"), nullable=False)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    goals: Mapped[int] = mapped_column(Integer, nullable=False)


class PlayerStatsRow(Base):
    """Derived stats per player, replaced wholesale by a full recalculation."""

    __tablename__ = "player_stats"

    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), primary_key=True)
    matches: Mapped[int] = mapped_column(Integer, nullable=False)
    goals: Mapped[int] = mapped_column(Integer, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False)
    draws: Mapped[int] = mapped_column(Integer, nullable=False)
    losses: Mapped[int] = mapped_column(Integer, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    win_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    triangulars_played: Mapped[int] = mapped_column(Integer, nullable=False)
    triangular_wins: Mapped[int] = mapped_column(Integer, nullable=False)
    triangular_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    triangular_thirds: Mapped[int] = mapped_column(Integer, nullable=False)
    triangular_points: Mapped[int] = mapped_column(Integer, nullable=False)
    triangular_win_percentage: Mapped[float] = mapped_column(Float, nullable=False)
    rating_v2: Mapped[float] = mapped_column(Float, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
