"""Analysis modules for fantasy points calculation and roster building."""

from .calculator import (
    NOT_AVAILABLE,
    DerivedStats,
    Rate,
    calculate_batting_points,
    calculate_bowling_points,
    calculate_points,
    calculate_value,
    compute_derived_stats,
)
from .validator import (
    ValidationResult,
    can_add_player,
    get_max_player_value,
    get_role_counts,
    get_role_slots_remaining,
    get_squad_slots_remaining,
    get_team_composition,
    validate_composition,
    validate_roster,
)
from .aggregator import (
    BudgetExceeded,
    CapacityExceeded,
    CompositionViolationError,
    DuplicateMember,
    LeaderboardEntry,
    MemberNotFound,
    MemberView,
    PlayerNotFound,
    RosterError,
    RosterService,
    RosterView,
    build_roster_view,
    rank_rosters,
)
from .summary import StatLeader, TournamentSummary, tournament_summary

__all__ = [
    # Calculator
    "NOT_AVAILABLE",
    "DerivedStats",
    "Rate",
    "calculate_batting_points",
    "calculate_bowling_points",
    "calculate_points",
    "calculate_value",
    "compute_derived_stats",
    # Validator
    "ValidationResult",
    "can_add_player",
    "get_max_player_value",
    "get_role_counts",
    "get_role_slots_remaining",
    "get_squad_slots_remaining",
    "get_team_composition",
    "validate_composition",
    "validate_roster",
    # Aggregator
    "BudgetExceeded",
    "CapacityExceeded",
    "CompositionViolationError",
    "DuplicateMember",
    "LeaderboardEntry",
    "MemberNotFound",
    "MemberView",
    "PlayerNotFound",
    "RosterError",
    "RosterService",
    "RosterView",
    "build_roster_view",
    "rank_rosters",
    # Summary
    "StatLeader",
    "TournamentSummary",
    "tournament_summary",
]
