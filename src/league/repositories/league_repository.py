"""SQLAlchemy persistence for triangular history and derived player stats."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from league.domain.common import (
    MatchOutcome,
    MatchRecord,
    PlayerStats,
    SeasonScope,
    TeamName,
    TriangularRecord,
)
from league.domain.config import RatingParameters
from league.domain.rating import rating_v2_for_stats
from league.domain.triangular import validate_triangular
from league.models import (
    Match,
    MatchGoal,
    Player,
    PlayerStatsRow,
    Season,
    Triangular,
    TriangularPlayer,
)


class SqlLeagueRepository:
    """Reader/writer over the league tables bound to one session."""

    def __init__(self, session: Session, *, rating_params: RatingParameters | None = None) -> None:
        self.session = session
        self.rating_params = rating_params or RatingParameters()

    def fetch_triangulars(self, season: SeasonScope) -> list[TriangularRecord]:
        """Fetch triangulars in the scope in deterministic chronological order."""
        statement = select(Triangular.id, Triangular.season_id, Triangular.played_at)

        if season.active_only:
            active_season_id = (
                select(Season.id)
                .where(Season.finish_season_date.is_(None))
                .order_by(Season.init_season_date.desc(), Season.id.desc())
                .limit(1)
                .scalar_subquery()
            )
            statement = statement.where(Triangular.season_id == active_season_id)
        elif season.season_id is not None:
            statement = statement.where(Triangular.season_id == season.season_id)

        statement = statement.order_by(Triangular.played_at, Triangular.id)
        rows = self.session.execute(statement).mappings().all()
        return self._build_records(rows)

    def fetch_player_ids(self) -> list[int]:
        return list(self.session.scalars(select(Player.id).order_by(Player.id)).all())

    def fetch_player_names(self, player_ids: Sequence[int] | None = None) -> dict[int, str]:
        statement = select(Player.id, Player.name).order_by(Player.id)
        if player_ids is not None:
            statement = statement.where(Player.id.in_(player_ids))
        return {row.id: row.name for row in self.session.execute(statement)}

    def fetch_player_matches(self, player_id: int) -> list[MatchRecord]:
        """Every match the player's team played, across all seasons."""
        statement = (
            select(Triangular.id, Triangular.season_id, Triangular.played_at)
            .join(TriangularPlayer, TriangularPlayer.triangular_id == Triangular.id)
            .where(TriangularPlayer.player_id == player_id)
            .order_by(Triangular.played_at, Triangular.id)
        )
        rows = self.session.execute(statement).mappings().all()

        matches: list[MatchRecord] = []
        for record in self._build_records(rows):
            team = record.team_of(player_id)
            if team is None:
                continue
            matches.extend(match for match in record.matches if match.involves(team))
        return matches

    def fetch_player_stats(self) -> dict[int, PlayerStats]:
        """Load the stored derived stats keyed by player id."""
        rows = self.session.scalars(select(PlayerStatsRow).order_by(PlayerStatsRow.player_id)).all()
        return {
            row.player_id: PlayerStats(
                matches=row.matches,
                goals=row.goals,
                wins=row.wins,
                draws=row.draws,
                losses=row.losses,
                points=row.points,
                win_percentage=row.win_percentage,
                triangulars_played=row.triangulars_played,
                triangular_wins=row.triangular_wins,
                triangular_seconds=row.triangular_seconds,
                triangular_thirds=row.triangular_thirds,
                triangular_points=row.triangular_points,
                triangular_win_percentage=row.triangular_win_percentage,
            )
            for row in rows
        }

    def replace_player_stats(self, stats_by_player: Mapping[int, PlayerStats]) -> None:
        """Swap the whole player_stats table for a new batch in one transaction."""
        updated_at = datetime.now(UTC).replace(tzinfo=None)
        payload = [
            {
                "player_id": player_id,
                "matches": stats.matches,
                "goals": stats.goals,
                "wins": stats.wins,
                "draws": stats.draws,
                "losses": stats.losses,
                "points": stats.points,
                "win_percentage": stats.win_percentage,
                "triangulars_played": stats.triangulars_played,
                "triangular_wins": stats.triangular_wins,
                "triangular_seconds": stats.triangular_seconds,
                "triangular_thirds": stats.triangular_thirds,
                "triangular_points": stats.triangular_points,
                "triangular_win_percentage": stats.triangular_win_percentage,
                "rating_v2": rating_v2_for_stats(stats, self.rating_params),
                "updated_at": updated_at,
            }
            for player_id, stats in sorted(stats_by_player.items())
        ]

        try:
            self.session.execute(delete(PlayerStatsRow))
            if payload:
                self.session.execute(insert(PlayerStatsRow), payload)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def save_triangular(self, record: TriangularRecord) -> int:
        """Persist a validated triangular with its roster, matches and goals."""
        validate_triangular(record)

        try:
            triangular_fields: dict[str, Any] = {"season_id": record.season_id}
            if record.played_at is not None:
                triangular_fields["played_at"] = record.played_at
            triangular = Triangular(**triangular_fields)
            self.session.add(triangular)
            self.session.flush()

            for team in TeamName:
                for player_id in record.rosters[team]:
                    self.session.add(
                        TriangularPlayer(
                            triangular_id=triangular.id,
                            player_id=player_id,
                            team_name=team.value,
                        )
                    )

            for match_record in record.matches:
                match_fields: dict[str, Any] = {
                    "triangular_id": triangular.id,
                    "team_a_name": match_record.team_a.value,
                    "team_b_name": match_record.team_b.value,
                    "team_a_score": match_record.team_a_score,
                    "team_b_score": match_record.team_b_score,
                    "outcome": match_record.outcome.value,
                }
                if match_record.played_at is not None:
                    match_fields["played_at"] = match_record.played_at
                match = Match(**match_fields)
                self.session.add(match)
                self.session.flush()

                for player_id, goals in sorted(match_record.goals_by_player.items()):
                    if goals > 0:
                        self.session.add(
                            MatchGoal(match_id=match.id, player_id=player_id, goals=goals)
                        )

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return triangular.id

    def _build_records(self, triangular_rows: Sequence[Any]) -> list[TriangularRecord]:
        triangular_ids = [row["id"] for row in triangular_rows]
        if not triangular_ids:
            return []

        rosters: dict[int, dict[TeamName, list[int]]] = defaultdict(lambda: defaultdict(list))
        roster_rows = self.session.execute(
            select(
                TriangularPlayer.triangular_id,
                TriangularPlayer.player_id,
                TriangularPlayer.team_name,
            )
            .where(TriangularPlayer.triangular_id.in_(triangular_ids))
            .order_by(TriangularPlayer.triangular_id, TriangularPlayer.player_id)
        ).mappings()
        for row in roster_rows:
            rosters[row["triangular_id"]][TeamName(row["team_name"])].append(row["player_id"])

        goals: dict[int, dict[int, int]] = defaultdict(dict)
        goal_rows = self.session.execute(
            select(MatchGoal.match_id, MatchGoal.player_id, MatchGoal.goals)
            .join(Match, Match.id == MatchGoal.match_id)
            .where(Match.triangular_id.in_(triangular_ids))
        ).mappings()
        for row in goal_rows:
            goals[row["match_id"]][row["player_id"]] = row["goals"]

        matches: dict[int, list[MatchRecord]] = defaultdict(list)
        match_rows = self.session.execute(
            select(Match)
            .where(Match.triangular_id.in_(triangular_ids))
            .order_by(Match.played_at, Match.id)
        ).scalars()
        for match in match_rows:
            team_a = TeamName(match.team_a_name)
            team_b = TeamName(match.team_b_name)
            roster = rosters[match.triangular_id]
            matches[match.triangular_id].append(
                MatchRecord(
                    match_id=match.id,
                    team_a=team_a,
                    team_b=team_b,
                    team_a_score=match.team_a_score,
                    team_b_score=match.team_b_score,
                    outcome=MatchOutcome(match.outcome),
                    played_at=match.played_at,
                    team_a_players=tuple(roster.get(team_a, ())),
                    team_b_players=tuple(roster.get(team_b, ())),
                    goals_by_player=dict(goals.get(match.id, {})),
                )
            )

        return [
            TriangularRecord(
                triangular_id=row["id"],
                matches=tuple(matches.get(row["id"], ())),
                rosters={team: tuple(players) for team, players in rosters[row["id"]].items()},
                season_id=row["season_id"],
                played_at=row["played_at"],
            )
            for row in triangular_rows
        ]


__all__ = ["SqlLeagueRepository"]
