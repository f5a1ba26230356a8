"""Tests for the Streamlit app module."""

import pytest

from spirit11.app.formatting import filter_players, format_currency
from spirit11.models import Player, PlayerStats, Role


def make_player(id: str, university: str, role: Role, runs: int) -> Player:
    return Player(
        id=id,
        name=f"Player {id}",
        university=university,
        role=role,
        stats=PlayerStats(innings_played=5, runs_scored=runs, balls_faced=runs),
    )


class TestFormatCurrency:
    """Tests for currency formatting."""

    def test_thousands_separator(self) -> None:
        assert format_currency(1_250_000) == "Rs 1,250,000"

    def test_zero(self) -> None:
        assert format_currency(0) == "Rs 0"

    def test_negative(self) -> None:
        """Overspent budgets show a leading minus."""
        assert format_currency(-50_000) == "-Rs 50,000"


class TestFilterPlayers:
    """Tests for player filtering."""

    @pytest.fixture
    def sample_players(self) -> list[Player]:
        """Create sample players with increasing value."""
        return [
            make_player("p1", "University of Colombo", Role.BATSMAN, 50),
            make_player("p2", "University of Moratuwa", Role.BOWLER, 150),
            make_player("p3", "University of Colombo", Role.BOWLER, 300),
            make_player("p4", "University of Ruhuna", Role.WICKET_KEEPER, 100),
        ]

    def test_filter_all_returns_all(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "All", "All", 9_000_000)
        assert len(result) == 4

    def test_filter_by_university(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "University of Colombo", "All", 9_000_000)
        assert {p.id for p in result} == {"p1", "p3"}

    def test_filter_by_role(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "All", "Bowler", 9_000_000)
        assert {p.id for p in result} == {"p2", "p3"}
        assert all(p.role == Role.BOWLER for p in result)

    def test_filter_by_max_value(self, sample_players: list[Player]) -> None:
        cheapest = min(p.value for p in sample_players)
        result = filter_players(sample_players, "All", "All", cheapest)
        assert result
        assert all(p.value <= cheapest for p in result)

    def test_filter_combined(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "University of Colombo", "Bowler", 9_000_000)
        assert [p.id for p in result] == ["p3"]

    def test_returns_sorted_by_value_descending(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "All", "All", 9_000_000)
        values = [p.value for p in result]
        assert values == sorted(values, reverse=True)

    def test_empty_result_when_no_matches(self, sample_players: list[Player]) -> None:
        result = filter_players(sample_players, "University of Jaffna", "All", 9_000_000)
        assert result == []


class TestAppImports:
    """Tests for app module imports."""

    def test_main_import(self) -> None:
        pytest.importorskip("streamlit")
        from spirit11.app.main import PAGES, main

        assert callable(main)
        assert set(PAGES) == {"Select Team", "Leaderboard"}

    def test_pages_import(self) -> None:
        pytest.importorskip("streamlit")
        from spirit11.app.pages import leaderboard, team_builder

        assert hasattr(team_builder, "render")
        assert hasattr(leaderboard, "render")

    def test_components_import(self) -> None:
        pytest.importorskip("streamlit")
        from spirit11.app.components import (
            render_player_table,
            render_team_status,
            render_validation,
        )

        assert callable(render_player_table)
        assert callable(render_team_status)
        assert callable(render_validation)
