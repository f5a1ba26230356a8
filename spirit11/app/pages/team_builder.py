"""Team builder page for selecting and managing a fantasy roster."""

import streamlit as st

from ...analysis import RosterError, RosterService, validate_roster
from ...models import MAX_BUDGET, Player, Role
from ...scrapers import (
    FetchError,
    ParseError,
    RateLimitError,
    StatsScraper,
    create_sample_players,
    load_players_from_csv,
)
from ..components import render_player_table, render_team_status, render_validation
from ..formatting import filter_players, format_currency


DEFAULT_USER = "guest"


def init_session_state() -> None:
    """Initialize session state variables."""
    if "service" not in st.session_state:
        st.session_state.service = RosterService(_get_players())
    if "user_id" not in st.session_state:
        st.session_state.user_id = DEFAULT_USER
    if "data_source" not in st.session_state:
        st.session_state.data_source = "unknown"


def _get_players() -> list[Player]:
    """Load players from the seed CSV, falling back to sample data."""
    players = load_players_from_csv()
    if players:
        st.session_state.data_source = "csv"
        return players
    st.session_state.data_source = "sample"
    return create_sample_players()


def _load_from_url(url: str) -> None:
    """Replace player records with those scraped from a stats page."""
    try:
        players = StatsScraper(url).scrape()
    except (FetchError, ParseError, RateLimitError) as e:
        st.error(f"Could not load stats: {e}")
        return
    if not players:
        st.error("No players found on that page.")
        return

    service = st.session_state.service
    rejected = []
    for player in players:
        try:
            service.add_player_record(player)
        except RosterError as e:
            rejected.append(f"{player.name}: {e}")
    st.session_state.data_source = "url"
    st.success(f"Loaded {len(players) - len(rejected)} players")
    if rejected:
        details = "\n\n".join(rejected)
        st.warning(f"Kept the current record for selected players whose new role breaks a quota:\n\n{details}")


def _current_members() -> list[Player]:
    service = st.session_state.service
    view = service.get_roster_view(st.session_state.user_id)
    return [service.get_player(pid) for pid in view.player_ids]


def _add_player(player: Player) -> None:
    """Add player to the roster, reporting the violated rule on failure."""
    try:
        st.session_state.service.add_member(st.session_state.user_id, player.id)
    except RosterError as e:
        st.error(f"Cannot add {player.name}: {e}")


def _remove_player(player_id: str) -> None:
    try:
        st.session_state.service.remove_member(st.session_state.user_id, player_id)
    except RosterError as e:
        st.error(str(e))


def render() -> None:
    """Render the team builder page."""
    init_session_state()
    service: RosterService = st.session_state.service

    st.title("Select Your Team")

    col1, col2 = st.columns([3, 1])
    with col1:
        st.session_state.user_id = st.text_input("Username", value=st.session_state.user_id) or DEFAULT_USER
    with col2:
        source = st.session_state.get("data_source", "unknown")
        st.caption(f"{len(service.players)} players ({source} data)")

    with st.expander("Load stats from a web page", expanded=False):
        url = st.text_input("Stats page URL", key="stats_url")
        if st.button("Load", disabled=not url):
            _load_from_url(url)

    st.divider()

    view = service.get_roster_view(st.session_state.user_id)
    members = _current_members()

    team_col, players_col = st.columns([1, 1.5])

    with team_col:
        st.header("Your Team")
        render_team_status(view)

        st.subheader("Players")
        if view.members:
            for member in view.members:
                cols = st.columns([3, 2, 1])
                with cols[0]:
                    st.markdown(f"**{member.name}**")
                    st.caption(f"{member.university} · {member.role.value}")
                with cols[1]:
                    st.markdown(format_currency(member.value))
                with cols[2]:
                    st.button(
                        "🗑️",
                        key=f"remove_{member.player_id}",
                        on_click=_remove_player,
                        args=(member.player_id,),
                        help="Remove player",
                    )
        else:
            st.info("No players selected. Add players from the list on the right.")

        st.divider()
        render_validation(validate_roster(members))

    with players_col:
        st.header("Available Players")

        filter_col1, filter_col2, filter_col3 = st.columns(3)
        with filter_col1:
            universities = sorted({p.university for p in service.players})
            university_filter = st.selectbox("University", ["All"] + universities, key="university_filter")
        with filter_col2:
            role_filter = st.selectbox("Role", ["All"] + [r.value for r in Role], key="role_filter")
        with filter_col3:
            max_value = st.slider(
                "Max Value",
                min_value=0,
                max_value=MAX_BUDGET,
                value=max(0, view.remaining_budget),
                step=50_000,
                key="max_value_filter",
            )

        selected = set(view.player_ids)
        available = [
            p
            for p in filter_players(service.players, university_filter, role_filter, max_value)
            if p.id not in selected
        ]

        if available:
            render_player_table(available, members, on_add=_add_player)
        else:
            st.info("No players match your filters.")
