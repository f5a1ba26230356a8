"""Data models for Spirit11 fantasy cricket."""

from .player import (
    InvalidStatsError,
    Player,
    PlayerStats,
    Role,
    balls_to_overs,
    overs_to_balls,
    parse_role,
)
from .roster import (
    MAX_BUDGET,
    ROLE_QUOTAS,
    ROSTER_SIZE,
    CompositionViolation,
    Roster,
    RosterState,
)

__all__ = [
    # Player
    "InvalidStatsError",
    "Player",
    "PlayerStats",
    "Role",
    "balls_to_overs",
    "overs_to_balls",
    "parse_role",
    # Roster
    "MAX_BUDGET",
    "ROLE_QUOTAS",
    "ROSTER_SIZE",
    "CompositionViolation",
    "Roster",
    "RosterState",
]
