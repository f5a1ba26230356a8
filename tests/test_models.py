"""Tests for data models."""

import pytest

from spirit11.models import (
    InvalidStatsError,
    Player,
    PlayerStats,
    Role,
    Roster,
    RosterState,
    MAX_BUDGET,
    ROLE_QUOTAS,
    ROSTER_SIZE,
    balls_to_overs,
    overs_to_balls,
    parse_role,
)


class TestGameConstants:
    """Verify game rule constants."""

    def test_budget(self) -> None:
        assert MAX_BUDGET == 9_000_000

    def test_roster_size(self) -> None:
        assert ROSTER_SIZE == 11

    def test_role_quotas(self) -> None:
        assert ROLE_QUOTAS == {
            Role.BATSMAN: 5,
            Role.BOWLER: 4,
            Role.ALL_ROUNDER: 2,
            Role.WICKET_KEEPER: 1,
        }


class TestParseRole:
    """Tests for role normalization."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Batsman", Role.BATSMAN),
            ("batsman", Role.BATSMAN),
            ("Bowler", Role.BOWLER),
            ("AllRounder", Role.ALL_ROUNDER),
            ("All Rounder", Role.ALL_ROUNDER),
            ("All-Rounder", Role.ALL_ROUNDER),
            ("All-rounder", Role.ALL_ROUNDER),
            ("WicketKeeper", Role.WICKET_KEEPER),
            ("Wicket-Keeper", Role.WICKET_KEEPER),
            ("wicket keeper", Role.WICKET_KEEPER),
            ("WK", Role.WICKET_KEEPER),
        ],
    )
    def test_variants_normalize(self, text: str, expected: Role) -> None:
        assert parse_role(text) == expected

    def test_enum_passes_through(self) -> None:
        assert parse_role(Role.BOWLER) == Role.BOWLER

    def test_unknown_role_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="Unknown role"):
            parse_role("Umpire")

    def test_empty_role_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="role is required"):
            parse_role("")


class TestOvers:
    """Tests for overs/balls conversion."""

    def test_whole_overs(self) -> None:
        assert overs_to_balls(10) == 60

    def test_partial_over_counts_balls(self) -> None:
        """4.3 overs is four overs and three balls, not 4.3 x 6."""
        assert overs_to_balls(4.3) == 27

    def test_five_balls(self) -> None:
        assert overs_to_balls(0.5) == 5

    def test_six_balls_invalid(self) -> None:
        with pytest.raises(InvalidStatsError, match="Invalid overs"):
            overs_to_balls(3.6)

    def test_negative_overs_invalid(self) -> None:
        with pytest.raises(InvalidStatsError):
            overs_to_balls(-1)

    def test_balls_to_overs(self) -> None:
        assert balls_to_overs(27) == pytest.approx(4.3)
        assert balls_to_overs(60) == 10


class TestPlayerStats:
    """Tests for PlayerStats model."""

    def test_defaults_to_zero(self) -> None:
        stats = PlayerStats()
        assert stats.runs_scored == 0
        assert stats.balls_bowled == 0
        assert stats.overs_bowled == 0

    def test_negative_counter_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="runs_scored cannot be negative"):
            PlayerStats(runs_scored=-1)

    def test_non_integer_counter_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="must be an integer"):
            PlayerStats(runs_scored=10.5)

    def test_missing_counter_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="is required"):
            PlayerStats(wickets_taken=None)

    def test_from_overs(self) -> None:
        stats = PlayerStats.from_overs(20.2, wickets_taken=3)
        assert stats.balls_bowled == 122
        assert stats.wickets_taken == 3

    def test_updated_returns_new_instance(self) -> None:
        stats = PlayerStats(runs_scored=10)
        updated = stats.updated(runs_scored=20)
        assert updated.runs_scored == 20
        assert stats.runs_scored == 10

    def test_updated_unknown_field_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="Unknown stat field"):
            PlayerStats().updated(sixes=3)

    def test_dismissals(self) -> None:
        assert PlayerStats(innings_played=10, not_outs=3).dismissals == 7


class TestPlayer:
    """Tests for Player model."""

    def test_create_player(self) -> None:
        player = Player(
            id="p1",
            name="Danushka Kumara",
            university="Eastern University",
            role=Role.BATSMAN,
        )
        assert player.name == "Danushka Kumara"
        assert player.stats == PlayerStats()
        assert player.points == 0
        assert player.value == 100_000

    def test_role_string_normalized(self) -> None:
        player = Player(id="p1", name="A", university="U", role="All-Rounder")
        assert player.role == Role.ALL_ROUNDER

    def test_missing_name_raises(self) -> None:
        with pytest.raises(InvalidStatsError, match="name is required"):
            Player(id="p1", name="", university="U", role=Role.BOWLER)

    def test_update_stats_recomputes_points_and_value(self) -> None:
        player = Player(id="p1", name="A", university="U", role=Role.BATSMAN)
        player.update_stats(innings_played=10, runs_scored=500, balls_faced=400)

        assert player.batting_average.amount == pytest.approx(50.0)
        assert player.points == pytest.approx(125 / 5 + 50 * 0.8)
        assert player.value == player.derived.value
        assert player.value % 50_000 == 0

    def test_rejected_update_leaves_player_unchanged(self) -> None:
        player = Player(
            id="p1",
            name="A",
            university="U",
            role=Role.BATSMAN,
            stats=PlayerStats(innings_played=5, runs_scored=100),
        )
        before_stats, before_derived = player.stats, player.derived

        with pytest.raises(InvalidStatsError):
            player.update_stats(runs_scored=-5)

        assert player.stats is before_stats
        assert player.derived is before_derived


class TestRoster:
    """Tests for Roster model."""

    def test_empty_roster(self) -> None:
        roster = Roster(user_id="u1")
        assert roster.size == 0
        assert roster.state == RosterState.EMPTY
        assert roster.is_complete is False

    def test_building_state(self) -> None:
        roster = Roster(user_id="u1", player_ids=["a", "b"])
        assert roster.state == RosterState.BUILDING

    def test_complete_state(self) -> None:
        roster = Roster(user_id="u1", player_ids=[f"p{i}" for i in range(11)])
        assert roster.state == RosterState.COMPLETE
        assert roster.is_complete is True

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="unique"):
            Roster(user_id="u1", player_ids=["a", "a"])

    def test_contains(self) -> None:
        roster = Roster(user_id="u1", player_ids=["a"])
        assert roster.contains("a")
        assert not roster.contains("b")
