"""Roster rule messages for the team builder."""

import streamlit as st

from ...analysis import ValidationResult

RULE_LABELS = {
    "ROSTER_FULL": "Squad size",
    "ROLE_LIMIT": "Role quota",
    "DUPLICATE_PLAYER": "Duplicate selection",
    "INSUFFICIENT_BUDGET": "Budget",
}


def render_validation(result: ValidationResult) -> None:
    """
    Show the broken roster rule, if any, followed by advisory warnings.

    A roster reports at most one broken rule, so only the first error is shown.
    """
    violation = result.violation
    if violation is None and not result.warnings:
        st.success("Your XI is complete and eligible for the leaderboard.")
        return

    if violation is not None:
        label = RULE_LABELS.get(violation.code, "Roster rule")
        st.error(f"**{label}:** {violation.message}")

    for warning in result.warnings:
        st.warning(warning)
