"""Unit tests for greedy team balancing."""

from __future__ import annotations

import pytest

from league.domain.balancer import balance_teams
from league.domain.common import RatedPlayer
from league.domain.errors import DuplicatePlayerError, InsufficientPlayersError


def _pool(ratings: list[float]) -> list[RatedPlayer]:
    return [
        RatedPlayer(player_id=index, rating=rating, name=f"player-{index}")
        for index, rating in enumerate(ratings, start=1)
    ]


def _ids(team: tuple[RatedPlayer, ...]) -> list[int]:
    return [player.player_id for player in team]


def test_nine_players_stay_within_max_rating_of_each_other() -> None:
    ratings = [90.0, 80.0, 70.0, 60.0, 50.0, 40.0, 30.0, 20.0, 10.0]
    teams = balance_teams(_pool(ratings))

    sums = teams.rating_sums
    assert max(sums) - min(sums) <= max(ratings)
    assert [len(team) for team in teams.teams] == [3, 3, 3]


def test_nine_players_follow_greedy_assignment_order() -> None:
    teams = balance_teams(_pool([90.0, 80.0, 70.0, 60.0, 50.0, 40.0, 30.0, 20.0, 10.0]))

    assert _ids(teams.team_a) == [1, 6, 7]
    assert _ids(teams.team_b) == [2, 5, 8]
    assert _ids(teams.team_c) == [3, 4, 9]
    assert teams.rating_sums == pytest.approx((160.0, 150.0, 140.0))
    assert teams.spread == pytest.approx(20.0)


def test_input_order_is_irrelevant_except_for_ties() -> None:
    pool = _pool([10.0, 90.0, 50.0, 30.0, 70.0, 20.0])
    shuffled = [pool[index] for index in (3, 0, 5, 1, 4, 2)]

    assert balance_teams(pool) == balance_teams(shuffled)


def test_equal_ratings_are_assigned_in_input_order() -> None:
    teams = balance_teams(_pool([50.0] * 6))

    assert _ids(teams.team_a) == [1, 4]
    assert _ids(teams.team_b) == [2, 5]
    assert _ids(teams.team_c) == [3, 6]


def test_team_sizes_differ_by_at_most_one() -> None:
    for size in range(3, 14):
        teams = balance_teams(_pool([float((index * 37) % 101) for index in range(size)]))
        lengths = [len(team) for team in teams.teams]
        assert sum(lengths) == size
        assert max(lengths) - min(lengths) <= 1


def test_outlier_rating_does_not_leave_a_team_short_handed() -> None:
    teams = balance_teams(_pool([100.0, 1.0, 1.0, 1.0, 1.0, 1.0]))

    assert [len(team) for team in teams.teams] == [2, 2, 2]
    assert _ids(teams.team_a) == [1, 6]


def test_balancing_is_deterministic() -> None:
    pool = _pool([33.5, 71.25, 12.0, 71.25, 48.0, 5.5, 60.0])
    assert balance_teams(pool) == balance_teams(pool)


@pytest.mark.parametrize("size", [0, 1, 2])
def test_fewer_than_three_players_is_rejected(size: int) -> None:
    with pytest.raises(InsufficientPlayersError) as exc_info:
        balance_teams(_pool([50.0] * size))
    assert exc_info.value.player_count == size


def test_duplicate_player_ids_are_rejected() -> None:
    pool = _pool([50.0, 40.0, 30.0]) + [RatedPlayer(player_id=2, rating=10.0)]

    with pytest.raises(DuplicatePlayerError) as exc_info:
        balance_teams(pool)
    assert exc_info.value.player_ids == (2,)
