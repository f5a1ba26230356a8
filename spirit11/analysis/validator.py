"""Roster composition validation for fantasy team building."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models.player import Player, Role
from ..models.roster import (
    MAX_BUDGET,
    ROLE_QUOTAS,
    ROSTER_SIZE,
    CompositionViolation,
)


# Per-role checks run in this order after the size check
ROLE_CHECK_ORDER = (
    Role.BATSMAN,
    Role.BOWLER,
    Role.ALL_ROUNDER,
    Role.WICKET_KEEPER,
)


@dataclass
class ValidationResult:
    """
    Result of a validation check.

    Attributes:
        is_valid: Whether the validation passed.
        errors: List of validation errors (empty if valid).
        warnings: Non-blocking issues (e.g., incomplete roster).
    """

    is_valid: bool
    errors: list[CompositionViolation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def violation(self) -> Optional[CompositionViolation]:
        """The first error, if any."""
        return self.errors[0] if self.errors else None


def get_role_counts(members: Iterable[Player]) -> dict[Role, int]:
    """Count members per role, including roles with no members."""
    counts = Counter(p.role for p in members)
    return {role: counts.get(role, 0) for role in Role}


def validate_composition(members: list[Player]) -> ValidationResult:
    """
    Validate a proposed member set against the size limit and role quotas.

    Only the first rule broken is reported, checking size, then batsmen,
    bowlers, all-rounders and wicket-keepers, so messages are deterministic.

    Args:
        members: The full proposed roster.

    Returns:
        ValidationResult with at most one error.
    """
    if len(members) > ROSTER_SIZE:
        return ValidationResult(
            is_valid=False,
            errors=[
                CompositionViolation(
                    code="ROSTER_FULL",
                    message=f"Cannot have more than {ROSTER_SIZE} players "
                    f"({len(members)}/{ROSTER_SIZE})",
                    count=len(members),
                    limit=ROSTER_SIZE,
                )
            ],
        )

    counts = get_role_counts(members)
    for role in ROLE_CHECK_ORDER:
        limit = ROLE_QUOTAS[role]
        if counts[role] > limit:
            return ValidationResult(
                is_valid=False,
                errors=[
                    CompositionViolation(
                        code="ROLE_LIMIT",
                        message=f"Cannot have more than {limit} {role.value} "
                        f"({counts[role]}/{limit})",
                        role=role,
                        count=counts[role],
                        limit=limit,
                    )
                ],
            )

    return ValidationResult(is_valid=True)


def validate_roster(members: list[Player]) -> ValidationResult:
    """
    Validate a roster and add warnings for incomplete selections.

    Args:
        members: Current roster members.

    Returns:
        ValidationResult with composition errors and budget/size warnings.
    """
    result = validate_composition(members)
    warnings: list[str] = []

    if len(members) < ROSTER_SIZE:
        warnings.append(
            f"Incomplete roster ({len(members)}/{ROSTER_SIZE}): "
            "not eligible for the leaderboard"
        )

    total_value = sum(p.value for p in members)
    if total_value > MAX_BUDGET:
        warnings.append(f"Roster value ({total_value:,}) exceeds budget ({MAX_BUDGET:,})")

    return ValidationResult(is_valid=result.is_valid, errors=result.errors, warnings=warnings)


def can_add_player(
    members: list[Player],
    player: Player,
    enforce_budget: bool = True,
) -> ValidationResult:
    """
    Check if a player can be added to a roster.

    Duplicate and capacity problems short-circuit; otherwise the add is
    simulated and validated, and the budget is checked when enforced.

    Args:
        members: Current roster members.
        player: The player to potentially add.
        enforce_budget: Whether exceeding the budget is an error.

    Returns:
        ValidationResult indicating if the add is valid.
    """
    if any(p.id == player.id for p in members):
        return ValidationResult(
            is_valid=False,
            errors=[
                CompositionViolation(
                    code="DUPLICATE_PLAYER",
                    message=f"Player {player.name} is already in the roster",
                )
            ],
        )

    if len(members) >= ROSTER_SIZE:
        return ValidationResult(
            is_valid=False,
            errors=[
                CompositionViolation(
                    code="ROSTER_FULL",
                    message=f"Roster is full ({ROSTER_SIZE} players)",
                    count=len(members),
                    limit=ROSTER_SIZE,
                )
            ],
        )

    result = validate_composition(members + [player])
    if not result.is_valid:
        return result

    remaining = get_max_player_value(members)
    if player.value > remaining:
        budget_error = CompositionViolation(
            code="INSUFFICIENT_BUDGET",
            message=f"Adding {player.name} ({player.value:,}) would exceed "
            f"the remaining budget ({remaining:,})",
            count=player.value,
            limit=remaining,
        )
        if enforce_budget:
            return ValidationResult(is_valid=False, errors=[budget_error])
        return ValidationResult(is_valid=True, warnings=[budget_error.message])

    return ValidationResult(is_valid=True)


def get_max_player_value(members: list[Player]) -> int:
    """
    Calculate the maximum value a new player may have given the budget.

    Returns:
        Remaining budget, or 0 if already over budget.
    """
    return max(0, MAX_BUDGET - sum(p.value for p in members))


def get_role_slots_remaining(members: list[Player], role: Role) -> int:
    """Get the number of additional players of a role the quota allows."""
    return max(0, ROLE_QUOTAS[role] - get_role_counts(members)[role])


def get_squad_slots_remaining(members: list[Player]) -> int:
    """Get the number of roster slots remaining."""
    return max(0, ROSTER_SIZE - len(members))


def get_team_composition(members: list[Player]) -> dict[str, int]:
    """
    Summarise a roster's composition.

    Returns:
        Dict with total, per-role counts and completeness.
    """
    counts = get_role_counts(members)
    return {
        "total": len(members),
        "batsmen": counts[Role.BATSMAN],
        "bowlers": counts[Role.BOWLER],
        "all_rounders": counts[Role.ALL_ROUNDER],
        "wicket_keepers": counts[Role.WICKET_KEEPER],
        "is_complete": len(members) == ROSTER_SIZE,
    }
