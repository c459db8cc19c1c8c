"""Load league engine settings from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib


@dataclass(frozen=True)
class ScoringParameters:
    win_points: int = 3
    draw_points: int = 1
    champion_points: int = 5
    runner_up_points: int = 2
    third_place_points: int = 1

    def position_points(self, position: int) -> int:
        if position == 1:
            return self.champion_points
        if position == 2:
            return self.runner_up_points
        if position == 3:
            return self.third_place_points
        return 0


@dataclass(frozen=True)
class RatingParameters:
    win_percentage_weight: float = 0.6
    triangular_win_percentage_weight: float = 0.4


@dataclass(frozen=True)
class EngineParameters:
    scoring: ScoringParameters = field(default_factory=ScoringParameters)
    rating: RatingParameters = field(default_factory=RatingParameters)


@dataclass(frozen=True)
class EngineConfig:
    """One named engine configuration loaded from disk."""

    name: str
    description: str | None
    file_path: Path
    parameters: EngineParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "win_points": self.parameters.scoring.win_points,
            "draw_points": self.parameters.scoring.draw_points,
            "champion_points": self.parameters.scoring.champion_points,
            "runner_up_points": self.parameters.scoring.runner_up_points,
            "third_place_points": self.parameters.scoring.third_place_points,
            "win_percentage_weight": self.parameters.rating.win_percentage_weight,
            "triangular_win_percentage_weight": (
                self.parameters.rating.triangular_win_percentage_weight
            ),
        }


def load_engine_config(file_path: Path) -> EngineConfig:
    """Load and validate a single engine TOML file."""
    if not file_path.is_file():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_engine_config(raw, file_path)


def load_engine_configs(config_dir: Path) -> list[EngineConfig]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    configs = [load_engine_config(file_path) for file_path in config_files]

    names = [config.name for config in configs]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate engine config names found in {config_dir}: {names}")

    return configs


def _parse_engine_config(raw: dict[str, Any], file_path: Path) -> EngineConfig:
    system_raw = raw.get("system", {})
    scoring_raw = raw.get("scoring", {})
    rating_raw = raw.get("rating", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    scoring = ScoringParameters(
        win_points=int(scoring_raw.get("win_points", 3)),
        draw_points=int(scoring_raw.get("draw_points", 1)),
        champion_points=int(scoring_raw.get("champion_points", 5)),
        runner_up_points=int(scoring_raw.get("runner_up_points", 2)),
        third_place_points=int(scoring_raw.get("third_place_points", 1)),
    )
    rating = RatingParameters(
        win_percentage_weight=float(rating_raw.get("win_percentage_weight", 0.6)),
        triangular_win_percentage_weight=float(
            rating_raw.get("triangular_win_percentage_weight", 0.4)
        ),
    )
    _validate_scoring(file_path=file_path, scoring=scoring)
    _validate_rating(file_path=file_path, rating=rating)

    return EngineConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=EngineParameters(scoring=scoring, rating=rating),
    )


def _validate_scoring(*, file_path: Path, scoring: ScoringParameters) -> None:
    if scoring.win_points <= 0:
        raise ValueError(f"{file_path}: [scoring].win_points must be > 0")
    if scoring.draw_points < 0:
        raise ValueError(f"{file_path}: [scoring].draw_points must be >= 0")
    if scoring.draw_points >= scoring.win_points:
        raise ValueError(f"{file_path}: [scoring].draw_points must be < win_points")
    if scoring.third_place_points < 0:
        raise ValueError(f"{file_path}: [scoring].third_place_points must be >= 0")
    if not scoring.champion_points >= scoring.runner_up_points >= scoring.third_place_points:
        raise ValueError(
            f"{file_path}: [scoring] position points must not increase with position"
        )


def _validate_rating(*, file_path: Path, rating: RatingParameters) -> None:
    if rating.win_percentage_weight < 0.0:
        raise ValueError(f"{file_path}: [rating].win_percentage_weight must be >= 0")
    if rating.triangular_win_percentage_weight < 0.0:
        raise ValueError(f"{file_path}: [rating].triangular_win_percentage_weight must be >= 0")
    total = rating.win_percentage_weight + rating.triangular_win_percentage_weight
    if abs(total - 1.0) > 1e-9:
        raise ValueError(f"{file_path}: [rating] weights must sum to 1.0, got {total}")


__all__ = [
    "EngineConfig",
    "EngineParameters",
    "RatingParameters",
    "ScoringParameters",
    "load_engine_config",
    "load_engine_configs",
]
