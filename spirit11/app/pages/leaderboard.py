"""Leaderboard and tournament summary page."""

import streamlit as st

from ...analysis import RosterService, tournament_summary
from ..formatting import format_currency
from . import team_builder


def render() -> None:
    """Render the leaderboard page."""
    team_builder.init_session_state()
    service: RosterService = st.session_state.service

    st.title("Leaderboard")

    entries = service.leaderboard()
    if entries:
        st.dataframe(
            [
                {
                    "Rank": e.rank,
                    "User": e.user_id,
                    "Points": round(e.points, 2),
                    "Team Value": format_currency(e.team_value),
                }
                for e in entries
            ],
            hide_index=True,
        )
    else:
        st.info("No complete teams yet. A team needs 11 players to be ranked.")

    st.divider()
    st.header("Tournament Summary")

    summary = tournament_summary(service.players)
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Overall Runs", f"{summary.overall_runs:,}")
        if summary.highest_run_scorer:
            leader = summary.highest_run_scorer
            st.caption(f"Highest run scorer: {leader.name} ({leader.amount} runs)")
    with col2:
        st.metric("Overall Wickets", f"{summary.overall_wickets:,}")
        if summary.highest_wicket_taker:
            leader = summary.highest_wicket_taker
            st.caption(f"Highest wicket taker: {leader.name} ({leader.amount} wickets)")
