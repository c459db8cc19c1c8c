"""Triangular scoring: points, positions and champion from match results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from league.domain.common import (
    MatchOutcome,
    MatchRecord,
    TeamName,
    TeamStanding,
    TriangularRecord,
    TriangularScore,
)
from league.domain.config import ScoringParameters
from league.domain.errors import MalformedTriangularError


@dataclass
class _TeamTally:
    points: int = 0
    wins: int = 0
    normal_wins: int = 0
    draws: int = 0
    losses: int = 0
    matches_played: int = 0
    goals_for: int = 0
    goals_against: int = 0


def validate_match(match: MatchRecord, *, triangular_id: int | None = None) -> None:
    """Check that one match record is internally consistent."""
    if match.team_a == match.team_b:
        raise MalformedTriangularError(
            f"match_id={match.match_id} has identical teams ({match.team_a.value})",
            triangular_id=triangular_id,
        )
    if match.team_a_score < 0 or match.team_b_score < 0:
        raise MalformedTriangularError(
            f"match_id={match.match_id} has a negative score",
            triangular_id=triangular_id,
        )

    if match.outcome is MatchOutcome.DRAW:
        if match.team_a_score != match.team_b_score:
            raise MalformedTriangularError(
                f"match_id={match.match_id} is a draw with unequal scores "
                f"{match.team_a_score}-{match.team_b_score}",
                triangular_id=triangular_id,
            )
    elif match.goals_for(match.winner) < match.goals_for(match.loser):
        raise MalformedTriangularError(
            f"match_id={match.match_id} winner {match.winner.value} scored fewer goals "
            f"than {match.loser.value}",
            triangular_id=triangular_id,
        )

    if match.goals_by_player:
        _validate_goal_sums(match, triangular_id=triangular_id)


def _validate_goal_sums(match: MatchRecord, *, triangular_id: int | None) -> None:
    for players, score, team in (
        (match.team_a_players, match.team_a_score, match.team_a),
        (match.team_b_players, match.team_b_score, match.team_b),
    ):
        scored = sum(match.goals_by_player.get(player_id, 0) for player_id in players)
        if scored != score:
            raise MalformedTriangularError(
                f"match_id={match.match_id} {team.value} scored {score} "
                f"but its players are credited with {scored}",
                triangular_id=triangular_id,
            )

    on_pitch = set(match.team_a_players) | set(match.team_b_players)
    unknown = sorted(player_id for player_id in match.goals_by_player if player_id not in on_pitch)
    if unknown:
        raise MalformedTriangularError(
            f"match_id={match.match_id} credits goals to players not on either side: {unknown}",
            triangular_id=triangular_id,
        )


def validate_triangular(record: TriangularRecord) -> None:
    """Check rosters and every match of a triangular record."""
    missing = [team.value for team in TeamName if team not in record.rosters]
    if missing:
        raise MalformedTriangularError(
            f"missing teams {missing}",
            triangular_id=record.triangular_id,
        )

    seen: dict[int, TeamName] = {}
    for team in TeamName:
        for player_id in record.rosters[team]:
            previous = seen.get(player_id)
            if previous is not None:
                raise MalformedTriangularError(
                    f"player_id={player_id} is listed in both {previous.value} and {team.value}",
                    triangular_id=record.triangular_id,
                )
            seen[player_id] = team

    for match in record.matches:
        validate_match(match, triangular_id=record.triangular_id)


def _ranking_key(item: tuple[TeamName, _TeamTally]) -> tuple[int, int, int, int]:
    team, tally = item
    return (-tally.points, -tally.normal_wins, -tally.wins, team.order)


def score_triangular(
    matches: Iterable[MatchRecord],
    params: ScoringParameters | None = None,
) -> TriangularScore:
    """Compute per-team standings and the champion for one triangular."""
    params = params or ScoringParameters()
    tallies = {team: _TeamTally() for team in TeamName}
    played = 0

    for match in matches:
        validate_match(match)
        played += 1

        for team in (match.team_a, match.team_b):
            tally = tallies[team]
            tally.matches_played += 1
            tally.goals_for += match.goals_for(team)
            tally.goals_against += match.goals_against(team)

        winner = match.winner
        if winner is None:
            tallies[match.team_a].draws += 1
            tallies[match.team_a].points += params.draw_points
            tallies[match.team_b].draws += 1
            tallies[match.team_b].points += params.draw_points
            continue

        winner_tally = tallies[winner]
        winner_tally.wins += 1
        winner_tally.points += params.win_points
        if match.goals_for(winner) > match.goals_against(winner):
            winner_tally.normal_wins += 1
        tallies[match.loser].losses += 1

    ranked = sorted(tallies.items(), key=_ranking_key)
    standings = tuple(
        TeamStanding(
            team=team,
            points=tally.points,
            wins=tally.wins,
            normal_wins=tally.normal_wins,
            draws=tally.draws,
            losses=tally.losses,
            matches_played=tally.matches_played,
            goals_for=tally.goals_for,
            goals_against=tally.goals_against,
            position=position,
        )
        for position, (team, tally) in enumerate(ranked, start=1)
    )
    champion = standings[0].team if played else None
    return TriangularScore(standings=standings, champion=champion)


def score_triangular_record(
    record: TriangularRecord,
    params: ScoringParameters | None = None,
) -> TriangularScore:
    """Validate a full triangular record and score its matches."""
    validate_triangular(record)
    return score_triangular(record.matches, params)


__all__ = [
    "score_triangular",
    "score_triangular_record",
    "validate_match",
    "validate_triangular",
]
