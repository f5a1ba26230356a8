"""Tests for fantasy points and value calculator."""

import math

import pytest

from spirit11.analysis.calculator import (
    NOT_AVAILABLE,
    Rate,
    batting_average,
    batting_strike_rate,
    bowling_average,
    bowling_strike_rate,
    calculate_batting_points,
    calculate_bowling_points,
    calculate_points,
    calculate_value,
    compute_derived_stats,
    economy_rate,
    BATTING_AVERAGE_WEIGHT,
    BOWLING_STRIKE_RATE_NUMERATOR,
    ECONOMY_NUMERATOR,
    STRIKE_RATE_DIVISOR,
    VALUE_ROUNDING,
)
from spirit11.models import PlayerStats


class TestScoringConstants:
    """Verify scoring constants."""

    def test_points_constants(self) -> None:
        assert STRIKE_RATE_DIVISOR == 5
        assert BATTING_AVERAGE_WEIGHT == 0.8
        assert BOWLING_STRIKE_RATE_NUMERATOR == 500
        assert ECONOMY_NUMERATOR == 140

    def test_value_rounding(self) -> None:
        assert VALUE_ROUNDING == 50_000


class TestRate:
    """Tests for the Rate result type."""

    def test_not_available(self) -> None:
        assert NOT_AVAILABLE.is_available is False
        assert NOT_AVAILABLE.or_zero() == 0.0
        assert NOT_AVAILABLE.format() == "N/A"

    def test_available_zero_is_distinct(self) -> None:
        zero = Rate.available(0.0)
        assert zero.is_available is True
        assert zero != NOT_AVAILABLE

    def test_format(self) -> None:
        assert Rate.available(41.666).format() == "41.67"


class TestBattingRates:
    """Tests for batting rate calculations."""

    def test_batting_average(self) -> None:
        stats = PlayerStats(innings_played=10, not_outs=0, runs_scored=500)
        assert batting_average(stats).amount == pytest.approx(50.0)

    def test_batting_average_excludes_not_outs(self) -> None:
        stats = PlayerStats(innings_played=10, not_outs=2, runs_scored=400)
        assert batting_average(stats).amount == pytest.approx(50.0)

    def test_batting_average_no_dismissals_not_available(self) -> None:
        stats = PlayerStats(innings_played=3, not_outs=3, runs_scored=90)
        assert batting_average(stats) == NOT_AVAILABLE

    def test_batting_average_no_innings_not_available(self) -> None:
        assert batting_average(PlayerStats()) == NOT_AVAILABLE

    def test_zero_runs_average_is_zero_not_missing(self) -> None:
        stats = PlayerStats(innings_played=4, runs_scored=0)
        result = batting_average(stats)
        assert result.is_available
        assert result.amount == 0.0

    def test_strike_rate(self) -> None:
        stats = PlayerStats(runs_scored=150, balls_faced=100)
        assert batting_strike_rate(stats) == pytest.approx(150.0)

    def test_strike_rate_no_balls_is_zero(self) -> None:
        assert batting_strike_rate(PlayerStats(runs_scored=10)) == 0.0


class TestBowlingRates:
    """Tests for bowling rate calculations."""

    @pytest.fixture
    def bowler(self) -> PlayerStats:
        return PlayerStats(wickets_taken=10, balls_bowled=120, runs_conceded=200)

    def test_bowling_strike_rate(self, bowler: PlayerStats) -> None:
        assert bowling_strike_rate(bowler).amount == pytest.approx(12.0)

    def test_economy_rate(self, bowler: PlayerStats) -> None:
        assert economy_rate(bowler) == pytest.approx(10.0)

    def test_bowling_average(self, bowler: PlayerStats) -> None:
        assert bowling_average(bowler).amount == pytest.approx(20.0)

    def test_no_wickets_not_available(self) -> None:
        stats = PlayerStats(balls_bowled=60, runs_conceded=50)
        assert bowling_average(stats) == NOT_AVAILABLE
        assert bowling_strike_rate(stats) == NOT_AVAILABLE

    def test_economy_no_balls_is_zero(self) -> None:
        assert economy_rate(PlayerStats()) == 0.0


class TestPoints:
    """Tests for points calculation."""

    def test_batting_points_uses_zero_for_missing_average(self) -> None:
        assert calculate_batting_points(NOT_AVAILABLE, 100.0) == pytest.approx(20.0)

    def test_batting_points(self) -> None:
        assert calculate_batting_points(Rate.available(50.0), 125.0) == pytest.approx(65.0)

    def test_bowling_points_with_wickets(self) -> None:
        stats = PlayerStats(wickets_taken=10, balls_bowled=120, runs_conceded=200)
        derived = compute_derived_stats(stats)
        assert derived.bowling_points == pytest.approx(500 / 12 + 14, abs=0.01)
        assert derived.bowling_points == pytest.approx(55.67, abs=0.01)

    def test_bowling_points_without_wickets(self) -> None:
        stats = PlayerStats(balls_bowled=60, runs_conceded=70)
        points = calculate_bowling_points(stats, NOT_AVAILABLE, economy_rate(stats))
        assert points == pytest.approx(140 / 7)

    def test_no_bowling_no_points(self) -> None:
        stats = PlayerStats(innings_played=3, runs_scored=30, balls_faced=40)
        derived = compute_derived_stats(stats)
        assert derived.bowling_points == 0
        assert derived.economy_rate == 0

    def test_zero_runs_conceded_stays_finite(self) -> None:
        stats = PlayerStats(wickets_taken=2, balls_bowled=12, runs_conceded=0)
        derived = compute_derived_stats(stats)
        assert math.isfinite(derived.points)
        assert derived.bowling_points == pytest.approx(500 / 6)

    def test_wickets_without_balls_stays_finite(self) -> None:
        stats = PlayerStats(wickets_taken=1, runs_conceded=10)
        derived = compute_derived_stats(stats)
        assert math.isfinite(derived.points)
        assert derived.points == 0

    def test_total_points_sums_components(self) -> None:
        stats = PlayerStats(
            innings_played=10,
            runs_scored=500,
            balls_faced=400,
            wickets_taken=10,
            balls_bowled=120,
            runs_conceded=200,
        )
        derived = compute_derived_stats(stats)
        assert derived.points == pytest.approx(derived.batting_points + derived.bowling_points)
        assert calculate_points(stats) == derived.points

    def test_zero_stats_zero_points(self) -> None:
        assert calculate_points(PlayerStats()) == 0


class TestValue:
    """Tests for value calculation."""

    def test_zero_points(self) -> None:
        assert calculate_value(0) == 100_000

    def test_rounds_to_nearest_50000(self) -> None:
        # (9 * 65 + 100) * 1000 / 50000 = 13.7 -> 14
        assert calculate_value(65.0) == 700_000

    def test_half_rounds_up(self) -> None:
        # (9 * 25 + 100) * 1000 / 50000 = 6.5 -> 7
        assert calculate_value(25.0) == 350_000

    @pytest.mark.parametrize("points", [0.0, 1.3, 17.77, 48.1, 55.67, 123.456, 999.9])
    def test_value_is_multiple_of_rounding(self, points: float) -> None:
        value = calculate_value(points)
        assert isinstance(value, int)
        assert value % 50_000 == 0


class TestComputeDerivedStats:
    """Tests for compute_derived_stats."""

    def test_idempotent(self) -> None:
        stats = PlayerStats(
            innings_played=7,
            not_outs=1,
            runs_scored=232,
            balls_faced=190,
            wickets_taken=8,
            balls_bowled=164,
            runs_conceded=198,
        )
        assert compute_derived_stats(stats) == compute_derived_stats(stats)

    def test_value_matches_points(self) -> None:
        stats = PlayerStats(innings_played=9, runs_scored=287, balls_faced=251)
        derived = compute_derived_stats(stats)
        assert derived.value == calculate_value(derived.points)
