"""Streamlit entry point: ``streamlit run spirit11/app/main.py``."""

import sys
from pathlib import Path

# streamlit runs this file as a script, so the package root must be importable
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from spirit11.app.formatting import format_currency
from spirit11.app.logging_utils import setup_logging
from spirit11.app.pages import leaderboard, team_builder
from spirit11.models import MAX_BUDGET, ROLE_QUOTAS, ROSTER_SIZE

PAGES = {
    "Select Team": team_builder,
    "Leaderboard": leaderboard,
}


def _render_rules() -> None:
    with st.sidebar.expander("Game rules", expanded=False):
        st.markdown(f"- Pick {ROSTER_SIZE} players")
        st.markdown(f"- Budget {format_currency(MAX_BUDGET)}")
        for role, limit in ROLE_QUOTAS.items():
            st.markdown(f"- At most {limit} {role.value}")
        st.caption("Only complete teams appear on the leaderboard.")


def main() -> None:
    """Configure logging and the page, then render the selected page."""
    setup_logging()
    st.set_page_config(
        page_title="Spirit11 - Fantasy Cricket",
        page_icon="🏏",
        layout="wide",
    )

    st.sidebar.title("Spirit11")
    st.sidebar.caption("Inter-University Fantasy Cricket")
    choice = st.sidebar.radio("Navigation", list(PAGES), label_visibility="collapsed")
    _render_rules()

    PAGES[choice].render()


if __name__ == "__main__":
    main()
