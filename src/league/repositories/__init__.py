"""Database repository helpers."""

from league.repositories.league_repository import SqlLeagueRepository

__all__ = ["SqlLeagueRepository"]
