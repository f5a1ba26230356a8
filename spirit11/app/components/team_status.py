"""Roster status component showing budget and composition."""

import streamlit as st

from ...analysis import RosterView
from ...models import MAX_BUDGET, ROLE_QUOTAS, ROSTER_SIZE, Role
from ..formatting import format_currency


def render_team_status(view: RosterView) -> None:
    """
    Render roster status metrics.

    Args:
        view: The roster to display status for.
    """
    budget_pct = view.total_value / MAX_BUDGET

    st.metric(
        label="Budget",
        value=format_currency(view.remaining_budget),
        delta=f"{format_currency(view.total_value)} / {format_currency(MAX_BUDGET)} used",
        delta_color="off",
    )
    st.progress(min(max(budget_pct, 0.0), 1.0))

    col1, col2 = st.columns(2)
    with col1:
        slots = ROSTER_SIZE - view.size
        st.metric(
            label="Players",
            value=f"{view.size} / {ROSTER_SIZE}",
            delta=f"{slots} slots" if slots > 0 else "Full",
            delta_color="off",
        )

    with col2:
        if view.is_complete:
            st.success("Team complete")
        else:
            needed = ROSTER_SIZE - view.size
            st.warning(f"Need {needed} more player{'s' if needed > 1 else ''}")

    with st.expander("Role breakdown", expanded=False):
        for role in Role:
            count = view.composition.get(role, 0)
            limit = ROLE_QUOTAS[role]
            col1, col2 = st.columns([3, 1])
            with col1:
                st.progress(min(count / limit, 1.0), text=f"{role.value}: {count}/{limit}")
            with col2:
                st.caption("Full" if count >= limit else f"{limit - count} left")
