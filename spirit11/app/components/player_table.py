"""Available-player list grouped by role, with add buttons."""

from typing import Callable, Optional

import streamlit as st

from ...analysis import can_add_player, get_role_slots_remaining
from ...models import Player, Role
from ..formatting import format_currency


def render_player_table(
    players: list[Player],
    members: list[Player],
    on_add: Optional[Callable[[Player], None]] = None,
) -> None:
    """
    Render available players under one heading per role.

    Each heading shows how many slots of that role the roster has left. The
    add button of a player is disabled with the broken rule as its tooltip
    when selecting them would be rejected. Points are never shown; users see
    value only.

    Args:
        players: Players to list.
        members: Current roster members, used to check each add.
        on_add: Called with the chosen player.
    """
    if not players:
        st.info("No players to display.")
        return

    for role in Role:
        in_role = [p for p in players if p.role == role]
        if not in_role:
            continue
        slots = get_role_slots_remaining(members, role)
        st.markdown(f"#### {role.value} · {slots} slot{'s' if slots != 1 else ''} left")
        for player in in_role:
            _render_player_row(player, members, on_add)


def _stat_line(player: Player) -> str:
    parts = [f"Avg {player.batting_average.format()}", f"SR {player.batting_strike_rate:.2f}"]
    if player.stats.balls_bowled:
        parts.append(f"Econ {player.economy_rate:.2f}")
        parts.append(f"{player.stats.wickets_taken} wkts")
    return " · ".join(parts)


def _render_player_row(
    player: Player,
    members: list[Player],
    on_add: Optional[Callable[[Player], None]],
) -> None:
    name_col, value_col, action_col = st.columns([4, 2, 1])

    with name_col:
        st.markdown(f"**{player.name}**")
        st.caption(f"{player.university} · {_stat_line(player)}")

    with value_col:
        st.markdown(format_currency(player.value))

    if on_add is None:
        return

    with action_col:
        check = can_add_player(members, player)
        blocked = check.violation
        if st.button(
            "Add",
            key=f"add_{player.id}",
            disabled=blocked is not None,
            help=blocked.message if blocked is not None else None,
        ):
            on_add(player)
            st.rerun()
