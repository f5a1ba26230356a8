"""Fantasy roster data model and game constants."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .player import Role


# Game constants
MAX_BUDGET = 9_000_000
ROSTER_SIZE = 11
ROLE_QUOTAS = {
    Role.BATSMAN: 5,
    Role.BOWLER: 4,
    Role.ALL_ROUNDER: 2,
    Role.WICKET_KEEPER: 1,
}


class RosterState(Enum):
    """Lifecycle state of a roster, derived from its size."""

    EMPTY = "empty"
    BUILDING = "building"
    COMPLETE = "complete"


@dataclass
class CompositionViolation:
    """
    Represents a rule broken by a roster or a proposed change to it.

    Attributes:
        code: Machine-readable rule identifier.
        message: Human-readable reason naming the rule.
        role: Role whose quota was exceeded, if the rule is per-role.
        count: Count that broke the rule.
        limit: The rule's limit.
    """

    code: str
    message: str
    role: Optional[Role] = None
    count: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class Roster:
    """
    One user's player selection.

    Holds player ids only; points and value are always read from the
    current player records.

    Attributes:
        user_id: Owning user.
        player_ids: Selected player ids, each at most once.
    """

    user_id: str
    player_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(set(self.player_ids)) != len(self.player_ids):
            raise ValueError("player_ids must be unique")

    @property
    def size(self) -> int:
        """Return number of players in the roster."""
        return len(self.player_ids)

    @property
    def is_complete(self) -> bool:
        return self.size == ROSTER_SIZE

    @property
    def state(self) -> RosterState:
        if self.size == 0:
            return RosterState.EMPTY
        if self.size >= ROSTER_SIZE:
            return RosterState.COMPLETE
        return RosterState.BUILDING

    def contains(self, player_id: str) -> bool:
        return player_id in self.player_ids
