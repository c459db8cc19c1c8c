"""Typed failures raised by the league engine."""

from __future__ import annotations

from collections.abc import Sequence


class LeagueEngineError(ValueError):
    """Base class for every engine failure."""


class InsufficientPlayersError(LeagueEngineError):
    """Raised when a pool is too small to form three teams."""

    def __init__(self, player_count: int, required: int = 3) -> None:
        self.player_count = player_count
        self.required = required
        super().__init__(
            f"At least {required} players are required to form teams, got {player_count}"
        )


class DuplicatePlayerError(LeagueEngineError):
    """Raised when the same player id appears more than once in a pool."""

    def __init__(self, player_ids: Sequence[int]) -> None:
        self.player_ids = tuple(player_ids)
        super().__init__(f"Duplicate player ids in pool: {list(self.player_ids)}")


class MalformedTriangularError(LeagueEngineError):
    """Raised for triangular or match records that break the data invariants."""

    def __init__(self, message: str, *, triangular_id: int | None = None) -> None:
        self.triangular_id = triangular_id
        prefix = "" if triangular_id is None else f"triangular_id={triangular_id}: "
        super().__init__(f"{prefix}{message}")


def safe_percentage(numerator: float, denominator: float) -> float:
    """Return numerator / denominator * 100, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


__all__ = [
    "DuplicatePlayerError",
    "InsufficientPlayersError",
    "LeagueEngineError",
    "MalformedTriangularError",
    "safe_percentage",
]
