"""Unit tests for rating formulas."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from league.domain.common import PlayerStats
from league.domain.config import RatingParameters
from league.domain.rating import (
    calculate_rating_v1,
    calculate_rating_v2,
    rate_players,
    round2,
)


def test_rating_v2_weights_win_percentage_sixty_percent() -> None:
    result = calculate_rating_v2(80.0, 80.0)

    assert result.rating == pytest.approx(80.0)
    assert result.breakdown.win_percentage_component == pytest.approx(48.0)
    assert result.breakdown.triangular_win_percentage_component == pytest.approx(32.0)
    assert result.breakdown.total == pytest.approx(80.0)


def test_rating_v2_penalises_players_without_triangular_wins() -> None:
    consistent = calculate_rating_v2(67.0, 50.0)
    match_only = calculate_rating_v2(67.0, 0.0)

    assert match_only.rating == pytest.approx(40.2)
    assert match_only.breakdown.triangular_win_percentage_component == 0.0
    assert consistent.rating > match_only.rating


def test_rating_v2_zero_inputs() -> None:
    result = calculate_rating_v2(0.0, 0.0)
    assert result.rating == 0.0
    assert result.breakdown.total == 0.0


def test_round2_rounds_half_up() -> None:
    assert str(round2(0.125)) == "0.13"
    assert str(round2(0.135)) == "0.14"
    assert str(round2(2.675)) == "2.68"
    assert str(round2(1.004)) == "1.00"


def test_rating_v2_component_rounds_half_up() -> None:
    result = calculate_rating_v2(0.0, 0.3125)
    assert result.breakdown.triangular_win_percentage_component == pytest.approx(0.13)
    assert result.rating == pytest.approx(0.13)


def test_breakdown_total_equals_rating_for_whole_percentages() -> None:
    for win_percentage in range(0, 101):
        for triangular_win_percentage in range(0, 101, 5):
            result = calculate_rating_v2(float(win_percentage), float(triangular_win_percentage))
            assert result.breakdown.total == result.rating


def test_breakdown_total_equals_rating_for_fractional_percentages() -> None:
    values = [0.0, 2 / 3 * 100, 1 / 3 * 100, 12.5, 0.0125, 0.008333, 99.995, 100.0]
    for win_percentage in values:
        for triangular_win_percentage in values:
            result = calculate_rating_v2(win_percentage, triangular_win_percentage)
            assert result.breakdown.total == result.rating
            components = (
                result.breakdown.win_percentage_component
                + result.breakdown.triangular_win_percentage_component
            )
            assert result.rating == pytest.approx(components, abs=1e-9)


@pytest.mark.parametrize("value", [-0.01, 100.01, math.nan, math.inf])
def test_rating_v2_rejects_out_of_range_percentages(value: float) -> None:
    with pytest.raises(ValueError, match="must be between 0 and 100"):
        calculate_rating_v2(value, 50.0)
    with pytest.raises(ValueError, match="must be between 0 and 100"):
        calculate_rating_v2(50.0, value)


def test_rating_v2_custom_weights() -> None:
    params = RatingParameters(win_percentage_weight=0.5, triangular_win_percentage_weight=0.5)
    result = calculate_rating_v2(60.0, 20.0, params)
    assert result.rating == pytest.approx(40.0)


def test_rating_v1_legacy_formula() -> None:
    breakdown = calculate_rating_v1(
        PlayerStats(matches=20, goals=15, wins=16, draws=2, losses=2, points=50, win_percentage=80.0)
    )

    assert breakdown.points_component == pytest.approx(20.0)
    assert breakdown.win_percentage_component == pytest.approx(28.0)
    assert breakdown.goals_per_match_component == pytest.approx(18.75)
    assert breakdown.total == pytest.approx(66.75)


def test_rating_v1_without_matches() -> None:
    breakdown = calculate_rating_v1(PlayerStats())
    assert breakdown.total == 0.0


def test_rate_players_keeps_mapping_order_and_names() -> None:
    rated = rate_players(
        {
            7: PlayerStats(win_percentage=50.0, triangular_win_percentage=100.0),
            3: PlayerStats(win_percentage=80.0, triangular_win_percentage=80.0),
        },
        names={7: "Rama", 3: "Tomi"},
    )

    assert [player.player_id for player in rated] == [7, 3]
    assert rated[0].rating == pytest.approx(70.0)
    assert rated[0].name == "Rama"
    assert rated[1].rating == pytest.approx(80.0)


def test_rating_v2_is_sum_of_rounded_components() -> None:
    # 19.9995 + 0.005 rounds to 20.00 in one step, but 20.00 + 0.01 per component.
    result = calculate_rating_v2(33.3325, 0.0125)

    assert result.breakdown.win_percentage_component == pytest.approx(20.0)
    assert result.breakdown.triangular_win_percentage_component == pytest.approx(0.01)
    assert result.rating == pytest.approx(20.01)
    single_shot = Decimal("33.3325") * Decimal("0.6") + Decimal("0.0125") * Decimal("0.4")
    assert str(round2(single_shot)) == "20.00"


def test_rate_players_applies_configured_weights() -> None:
    params = RatingParameters(win_percentage_weight=1.0, triangular_win_percentage_weight=0.0)
    rated = rate_players(
        {4: PlayerStats(win_percentage=60.0, triangular_win_percentage=0.0)},
        {4: "Nico"},
        params,
    )

    assert rated[0].rating == pytest.approx(60.0)
    assert rated[0].name == "Nico"
