"""Player data model for Spirit11 fantasy cricket."""

import math
import re
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..analysis.calculator import DerivedStats, Rate


BALLS_PER_OVER = 6


class InvalidStatsError(ValueError):
    """Raised when raw player input is negative, missing or malformed."""

    pass


class Role(Enum):
    """Canonical player roles."""

    BATSMAN = "Batsman"
    BOWLER = "Bowler"
    ALL_ROUNDER = "AllRounder"
    WICKET_KEEPER = "WicketKeeper"


# Keys are lowercased with spaces, hyphens and underscores removed
ROLE_ALIASES = {
    "batsman": Role.BATSMAN,
    "batter": Role.BATSMAN,
    "batsmen": Role.BATSMAN,
    "bowler": Role.BOWLER,
    "allrounder": Role.ALL_ROUNDER,
    "ar": Role.ALL_ROUNDER,
    "wicketkeeper": Role.WICKET_KEEPER,
    "keeper": Role.WICKET_KEEPER,
    "wk": Role.WICKET_KEEPER,
}


def parse_role(role_str: str) -> Role:
    """
    Parse a free-text role name to the Role enum.

    Accepts the spelling variants found in seed data, e.g. "All Rounder",
    "All-rounder", "Wicket-Keeper" or "WK".

    Args:
        role_str: Role name as entered or ingested.

    Returns:
        Canonical Role value.

    Raises:
        InvalidStatsError: If the role cannot be recognised.
    """
    if isinstance(role_str, Role):
        return role_str
    if not role_str:
        raise InvalidStatsError("role is required")
    normalized = re.sub(r"[\s_\-]+", "", str(role_str).lower())
    if normalized in ROLE_ALIASES:
        return ROLE_ALIASES[normalized]
    raise InvalidStatsError(f"Unknown role: {role_str}")


def overs_to_balls(overs: float) -> int:
    """
    Convert an overs figure to balls.

    Overs use cricket notation: 4.3 means four overs and three balls, so the
    fractional part counts balls 0-5 rather than decimal tenths.

    Raises:
        InvalidStatsError: If overs is negative or the ball part exceeds 5.
    """
    if overs < 0:
        raise InvalidStatsError("overs_bowled cannot be negative")
    whole = math.floor(overs)
    extra_balls = round((overs % 1) * 10)
    if extra_balls >= BALLS_PER_OVER:
        raise InvalidStatsError(f"Invalid overs figure: {overs}")
    return whole * BALLS_PER_OVER + extra_balls


def balls_to_overs(balls: int) -> float:
    """Convert balls to an overs figure in cricket notation."""
    return balls // BALLS_PER_OVER + (balls % BALLS_PER_OVER) / 10


@dataclass(frozen=True)
class PlayerStats:
    """
    Career statistics for a single player.

    All counters default to 0 and must be non-negative integers. Balls
    bowled is the primitive bowling counter; overs are derived from it.
    """

    matches_played: int = 0

    # Batting
    innings_played: int = 0
    not_outs: int = 0
    runs_scored: int = 0
    balls_faced: int = 0
    highest_score: int = 0
    fifties: int = 0
    hundreds: int = 0
    ducks: int = 0

    # Bowling
    wickets_taken: int = 0
    balls_bowled: int = 0
    runs_conceded: int = 0

    def __post_init__(self) -> None:
        """Reject negative or non-integer counters."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                raise InvalidStatsError(f"{f.name} is required")
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidStatsError(f"{f.name} must be an integer")
            if value < 0:
                raise InvalidStatsError(f"{f.name} cannot be negative")

    @classmethod
    def from_overs(cls, overs_bowled: float = 0.0, **counters: int) -> "PlayerStats":
        """Build stats from an overs figure instead of balls bowled."""
        return cls(balls_bowled=overs_to_balls(overs_bowled), **counters)

    @property
    def overs_bowled(self) -> float:
        """Overs bowled in cricket notation."""
        return balls_to_overs(self.balls_bowled)

    @property
    def dismissals(self) -> int:
        """Innings in which the player was out."""
        return self.innings_played - self.not_outs

    def updated(self, **changes: int) -> "PlayerStats":
        """
        Return a copy with the given counters changed.

        Raises:
            InvalidStatsError: If a counter name is unknown or a value invalid.
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise InvalidStatsError(f"Unknown stat field(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)


def _derive(stats: PlayerStats) -> "DerivedStats":
    # Imported lazily: the calculator package imports this module.
    from ..analysis.calculator import compute_derived_stats

    return compute_derived_stats(stats)


@dataclass
class Player:
    """
    Represents a player in Spirit11.

    Attributes:
        id: Unique identifier for the player.
        name: Player's full name.
        university: University the player represents.
        role: Canonical playing role.
        stats: Raw career counters.
        derived: Rates, points and value computed from stats.
    """

    id: str
    name: str
    university: str
    role: Role
    stats: PlayerStats = field(default_factory=PlayerStats)
    derived: "DerivedStats" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize the role and compute derived fields."""
        if not self.id:
            raise InvalidStatsError("id is required")
        if not self.name:
            raise InvalidStatsError("name is required")
        self.role = parse_role(self.role)
        self._recompute()

    def _recompute(self) -> None:
        self.derived = _derive(self.stats)

    def update_stats(self, **changes: int) -> None:
        """
        Apply a statistics update and recompute every derived field.

        The new stats are validated first, so a rejected update leaves the
        player unchanged.
        """
        new_stats = self.stats.updated(**changes)
        new_derived = _derive(new_stats)
        self.stats, self.derived = new_stats, new_derived

    @property
    def points(self) -> float:
        """Fantasy points derived from current stats."""
        return self.derived.points

    @property
    def value(self) -> int:
        """Monetary value derived from current points."""
        return self.derived.value

    @property
    def batting_average(self) -> "Rate":
        return self.derived.batting_average

    @property
    def batting_strike_rate(self) -> float:
        return self.derived.batting_strike_rate

    @property
    def bowling_average(self) -> "Rate":
        return self.derived.bowling_average

    @property
    def bowling_strike_rate(self) -> "Rate":
        return self.derived.bowling_strike_rate

    @property
    def economy_rate(self) -> float:
        return self.derived.economy_rate
