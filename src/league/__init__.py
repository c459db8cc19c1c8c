"""Triangular league scoring and team-balancing engine."""
