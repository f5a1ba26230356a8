"""Reusable UI components for the Spirit11 application."""

from .player_table import render_player_table
from .team_status import render_team_status
from .validation_display import render_validation

__all__ = ["render_player_table", "render_team_status", "render_validation"]
