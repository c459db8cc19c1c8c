"""Tests for TOML-based engine config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from league.domain.config import (
    EngineParameters,
    load_engine_config,
    load_engine_configs,
)

ROOT_DIR = Path(__file__).resolve().parents[1]


def test_load_engine_config_from_file(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        """
[system]
name = "custom"
description = "Two points per win"

[scoring]
win_points = 2
draw_points = 1
champion_points = 6
runner_up_points = 3
third_place_points = 0

[rating]
win_percentage_weight = 0.7
triangular_win_percentage_weight = 0.3
""".strip()
    )

    config = load_engine_config(config_path)

    assert config.name == "custom"
    assert config.description == "Two points per win"
    assert config.file_path == config_path
    assert config.parameters.scoring.win_points == 2
    assert config.parameters.scoring.champion_points == 6
    assert config.parameters.scoring.runner_up_points == 3
    assert config.parameters.scoring.third_place_points == 0
    assert config.parameters.rating.win_percentage_weight == pytest.approx(0.7)
    assert config.parameters.rating.triangular_win_percentage_weight == pytest.approx(0.3)
    assert config.as_config_json()["win_points"] == 2


def test_missing_sections_use_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "bare.toml"
    config_path.write_text('[system]\nname = "bare"\n')

    config = load_engine_config(config_path)

    assert config.description is None
    assert config.parameters == EngineParameters()


def test_shipped_default_config_matches_code_defaults() -> None:
    config = load_engine_config(ROOT_DIR / "configs" / "default.toml")
    assert config.name == "league_default"
    assert config.parameters == EngineParameters()


def test_name_is_required(tmp_path: Path) -> None:
    config_path = tmp_path / "nameless.toml"
    config_path.write_text("[scoring]\nwin_points = 3\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_engine_config(config_path)


def test_weights_must_sum_to_one(tmp_path: Path) -> None:
    config_path = tmp_path / "weights.toml"
    config_path.write_text(
        '[system]\nname = "weights"\n\n[rating]\n'
        "win_percentage_weight = 0.6\ntriangular_win_percentage_weight = 0.6\n"
    )

    with pytest.raises(ValueError, match="weights must sum to 1.0"):
        load_engine_config(config_path)


def test_draw_points_below_win_points(tmp_path: Path) -> None:
    config_path = tmp_path / "draws.toml"
    config_path.write_text('[system]\nname = "draws"\n\n[scoring]\nwin_points = 1\ndraw_points = 1\n')

    with pytest.raises(ValueError, match="draw_points must be < win_points"):
        load_engine_config(config_path)


def test_position_points_must_not_increase(tmp_path: Path) -> None:
    config_path = tmp_path / "positions.toml"
    config_path.write_text(
        '[system]\nname = "positions"\n\n[scoring]\nchampion_points = 1\nrunner_up_points = 2\n'
    )

    with pytest.raises(ValueError, match="position points"):
        load_engine_config(config_path)


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[system]\nname = "dup"\n')
    (tmp_path / "b.toml").write_text('[system]\nname = "dup"\n')

    with pytest.raises(ValueError, match="Duplicate engine config names"):
        load_engine_configs(tmp_path)


def test_load_engine_configs_sorted_by_file_name(tmp_path: Path) -> None:
    (tmp_path / "b.toml").write_text('[system]\nname = "second"\n')
    (tmp_path / "a.toml").write_text('[system]\nname = "first"\n')

    configs = load_engine_configs(tmp_path)
    assert [config.name for config in configs] == ["first", "second"]


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_engine_configs(tmp_path / "missing")


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_engine_configs(tmp_path)
