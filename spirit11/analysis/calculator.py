"""Fantasy points and value calculator based on Spirit11 scoring rules."""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..models.player import PlayerStats


# Scoring constants
STRIKE_RATE_DIVISOR = 5
BATTING_AVERAGE_WEIGHT = 0.8
BOWLING_STRIKE_RATE_NUMERATOR = 500
ECONOMY_NUMERATOR = 140

# Value constants
VALUE_POINTS_MULTIPLIER = 9
VALUE_POINTS_OFFSET = 100
VALUE_SCALE = 1000
VALUE_ROUNDING = 50_000

NOT_AVAILABLE_TEXT = "N/A"


@dataclass(frozen=True)
class Rate:
    """
    A rate that is either available or not applicable.

    A rate is not applicable when its denominator is zero, e.g. a bowling
    average for a bowler with no wickets. This is distinct from a computed
    rate of 0.
    """

    amount: Optional[float] = None

    @classmethod
    def available(cls, amount: float) -> "Rate":
        return cls(amount=amount)

    @property
    def is_available(self) -> bool:
        return self.amount is not None

    def or_zero(self) -> float:
        """Return the amount, substituting 0 when not applicable."""
        return self.amount if self.amount is not None else 0.0

    def format(self, places: int = 2) -> str:
        if self.amount is None:
            return NOT_AVAILABLE_TEXT
        return f"{self.amount:.{places}f}"


NOT_AVAILABLE = Rate()


@dataclass(frozen=True)
class DerivedStats:
    """
    Every field derived from a player's raw counters.

    Attributes:
        batting_average: Runs per dismissal, or not applicable.
        batting_strike_rate: Runs per 100 balls faced (0 if none faced).
        bowling_average: Runs conceded per wicket, or not applicable.
        bowling_strike_rate: Balls bowled per wicket, or not applicable.
        economy_rate: Runs conceded per over (0 if none bowled).
        batting_points: Batting contribution to points.
        bowling_points: Bowling contribution to points.
        points: Total fantasy points.
        value: Monetary value in whole units, a multiple of 50,000.
    """

    batting_average: Rate
    batting_strike_rate: float
    bowling_average: Rate
    bowling_strike_rate: Rate
    economy_rate: float
    batting_points: float
    bowling_points: float
    points: float
    value: int


def batting_average(stats: "PlayerStats") -> Rate:
    dismissals = stats.innings_played - stats.not_outs
    if dismissals <= 0:
        return NOT_AVAILABLE
    return Rate.available(stats.runs_scored / dismissals)


def batting_strike_rate(stats: "PlayerStats") -> float:
    if stats.balls_faced <= 0:
        return 0.0
    return (stats.runs_scored / stats.balls_faced) * 100


def bowling_average(stats: "PlayerStats") -> Rate:
    if stats.wickets_taken <= 0:
        return NOT_AVAILABLE
    return Rate.available(stats.runs_conceded / stats.wickets_taken)


def bowling_strike_rate(stats: "PlayerStats") -> Rate:
    if stats.wickets_taken <= 0:
        return NOT_AVAILABLE
    return Rate.available(stats.balls_bowled / stats.wickets_taken)


def economy_rate(stats: "PlayerStats") -> float:
    if stats.balls_bowled <= 0:
        return 0.0
    return stats.runs_conceded / (stats.balls_bowled / 6)


def calculate_batting_points(average: Rate, strike_rate: float) -> float:
    """
    Calculate batting points.

    A not-applicable batting average (no dismissals) contributes 0, so a
    player who has never been out scores on strike rate alone.
    """
    return (strike_rate / STRIKE_RATE_DIVISOR) + (average.or_zero() * BATTING_AVERAGE_WEIGHT)


def calculate_bowling_points(
    stats: "PlayerStats",
    strike_rate: Rate,
    economy: float,
) -> float:
    """
    Calculate bowling points.

    Wicket takers earn both the strike rate and economy terms; bowlers
    without a wicket earn the economy term only. Each reciprocal term is 0
    when its denominator is 0 (e.g. no runs conceded), keeping points finite.
    """
    if stats.balls_bowled <= 0 and stats.wickets_taken <= 0:
        return 0.0

    economy_term = ECONOMY_NUMERATOR / economy if economy > 0 else 0.0
    if stats.wickets_taken > 0:
        sr = strike_rate.or_zero()
        strike_term = BOWLING_STRIKE_RATE_NUMERATOR / sr if sr > 0 else 0.0
        return strike_term + economy_term
    return economy_term


def calculate_value(points: float) -> int:
    """
    Convert points to a monetary value rounded to the nearest 50,000.

    Halves round up.
    """
    raw = ((VALUE_POINTS_MULTIPLIER * points + VALUE_POINTS_OFFSET) * VALUE_SCALE) / VALUE_ROUNDING
    return int(math.floor(raw + 0.5)) * VALUE_ROUNDING


def calculate_points(stats: "PlayerStats") -> float:
    """Calculate total fantasy points from raw counters."""
    return compute_derived_stats(stats).points


def compute_derived_stats(stats: "PlayerStats") -> DerivedStats:
    """
    Compute every derived field for a set of raw counters.

    Pure: the same counters always give identical results.

    Args:
        stats: Player's raw career counters.

    Returns:
        DerivedStats with rates, points and value computed together.
    """
    bat_avg = batting_average(stats)
    bat_sr = batting_strike_rate(stats)
    bowl_avg = bowling_average(stats)
    bowl_sr = bowling_strike_rate(stats)
    economy = economy_rate(stats)

    batting_points = calculate_batting_points(bat_avg, bat_sr)
    bowling_points = calculate_bowling_points(stats, bowl_sr, economy)
    points = batting_points + bowling_points

    return DerivedStats(
        batting_average=bat_avg,
        batting_strike_rate=bat_sr,
        bowling_average=bowl_avg,
        bowling_strike_rate=bowl_sr,
        economy_rate=economy,
        batting_points=batting_points,
        bowling_points=bowling_points,
        points=points,
        value=calculate_value(points),
    )
