"""Roster aggregation: membership changes, totals and the leaderboard."""

import logging
import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..models.player import Player, Role
from ..models.roster import (
    MAX_BUDGET,
    CompositionViolation,
    Roster,
    RosterState,
)
from .calculator import Rate
from .validator import (
    can_add_player,
    get_role_counts,
    validate_composition,
)

logger = logging.getLogger(__name__)


class RosterError(Exception):
    """Base exception for rejected roster operations."""

    pass


class PlayerNotFound(RosterError):
    """Raised when a player id is unknown."""

    pass


class DuplicateMember(RosterError):
    """Raised when adding a player already in the roster."""

    pass


class MemberNotFound(RosterError):
    """Raised when removing a player not in the roster."""

    pass


class CapacityExceeded(RosterError):
    """Raised when adding to a roster that is already full."""

    pass


class CompositionViolationError(RosterError):
    """Raised when a change would break a role quota or the size limit."""

    def __init__(self, violation: CompositionViolation) -> None:
        self.violation = violation
        super().__init__(violation.message)


class BudgetExceeded(RosterError):
    """Raised when an add would take the roster over budget."""

    pass


_ERRORS_BY_CODE = {
    "DUPLICATE_PLAYER": DuplicateMember,
    "ROSTER_FULL": CapacityExceeded,
    "INSUFFICIENT_BUDGET": BudgetExceeded,
}


@dataclass(frozen=True)
class MemberView:
    """A roster member joined with its current derived fields."""

    player_id: str
    name: str
    university: str
    role: Role
    points: float
    value: int
    batting_average: Rate
    batting_strike_rate: float
    bowling_average: Rate
    bowling_strike_rate: Rate
    economy_rate: float

    @classmethod
    def from_player(cls, player: Player) -> "MemberView":
        d = player.derived
        return cls(
            player_id=player.id,
            name=player.name,
            university=player.university,
            role=player.role,
            points=d.points,
            value=d.value,
            batting_average=d.batting_average,
            batting_strike_rate=d.batting_strike_rate,
            bowling_average=d.bowling_average,
            bowling_strike_rate=d.bowling_strike_rate,
            economy_rate=d.economy_rate,
        )


@dataclass(frozen=True)
class RosterView:
    """
    Read-only snapshot of a roster and its aggregates.

    Attributes:
        user_id: Owning user.
        members: Members with their current derived fields.
        total_points: Sum of member points.
        total_value: Sum of member values.
        remaining_budget: Budget minus total value.
        is_complete: Whether the roster has exactly 11 members.
        state: Empty, building or complete.
        composition: Member count per role.
    """

    user_id: str
    members: tuple[MemberView, ...]
    total_points: float
    total_value: int
    remaining_budget: int
    is_complete: bool
    state: RosterState
    composition: dict[Role, int]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def player_ids(self) -> list[str]:
        return [m.player_id for m in self.members]


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked, complete roster."""

    rank: int
    user_id: str
    points: float
    team_value: int


def build_roster_view(roster: Roster, members: list[Player]) -> RosterView:
    """
    Build a view from a roster and its current member records.

    Totals are summed fresh from the given players on every call.
    """
    total_points = sum(p.points for p in members)
    total_value = sum(p.value for p in members)
    return RosterView(
        user_id=roster.user_id,
        members=tuple(MemberView.from_player(p) for p in members),
        total_points=total_points,
        total_value=total_value,
        remaining_budget=MAX_BUDGET - total_value,
        is_complete=roster.is_complete,
        state=roster.state,
        composition=get_role_counts(members),
    )


def rank_rosters(views: Iterable[RosterView]) -> list[RosterView]:
    """
    Rank complete rosters by total points, highest first.

    Incomplete rosters are excluded. Ties are broken by user id.
    """
    complete = [v for v in views if v.is_complete]
    return sorted(complete, key=lambda v: (-v.total_points, v.user_id))


class RosterService:
    """
    Owns player records and one roster per user.

    Mutations of a roster are serialized by a per-user lock covering the
    whole read-validate-write sequence. Replacing or deleting a player
    record holds every roster lock, so no roster can gain or keep a member
    whose record would break its quotas or no longer exists. Reads take no
    lock.
    """

    def __init__(
        self,
        players: Optional[Iterable[Player]] = None,
        enforce_budget: bool = True,
    ) -> None:
        """
        Initialize the service.

        Args:
            players: Initial player records.
            enforce_budget: Reject adds that exceed the remaining budget.
        """
        self.enforce_budget = enforce_budget
        self._players: dict[str, Player] = {}
        self._rosters: dict[str, Roster] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

        for player in players or []:
            self.add_player_record(player)

    # Player records

    def add_player_record(self, player: Player) -> None:
        """
        Store a player record, replacing any record with the same id.

        Raises:
            CompositionViolationError: If the replacement changes the role of
                a selected player and a roster holding them would break a
                quota. The stored record is left unchanged.
        """
        with self._all_rosters_locked():
            existing = self._players.get(player.id)
            if existing is not None and existing.role != player.role:
                for roster in self._rosters.values():
                    if not roster.contains(player.id):
                        continue
                    members = [player if p.id == player.id else p for p in self._members(roster)]
                    result = validate_composition(members)
                    if not result.is_valid:
                        logger.info(
                            "Rejected role change of %s to %s: roster of %s would break: %s",
                            player.id,
                            player.role.value,
                            roster.user_id,
                            result.errors[0].message,
                        )
                        raise CompositionViolationError(result.errors[0])
            self._players[player.id] = player

    def get_player(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFound(f"Player {player_id} not found") from None

    @property
    def players(self) -> list[Player]:
        return list(self._players.values())

    def update_player_stats(self, player_id: str, **changes: int) -> Player:
        """
        Apply a statistics update to a player.

        Rosters hold ids, so their aggregates reflect the new values on the
        next read.
        """
        player = self.get_player(player_id)
        player.update_stats(**changes)
        logger.info("Updated stats for %s: points=%.2f value=%d", player_id, player.points, player.value)
        return player

    def delete_player(self, player_id: str) -> None:
        """Delete a player record and remove it from every roster."""
        with self._all_rosters_locked():
            self.get_player(player_id)
            for user_id, roster in list(self._rosters.items()):
                if roster.contains(player_id):
                    self._save(Roster(user_id, [p for p in roster.player_ids if p != player_id]))
                    logger.info("Removed deleted player %s from roster of %s", player_id, user_id)
            # Readers take no lock: drop the record only once no roster holds it.
            del self._players[player_id]

    # Rosters

    def _lock_for(self, user_id: str) -> threading.RLock:
        with self._registry_lock:
            return self._locks.setdefault(user_id, threading.RLock())

    @contextmanager
    def _all_rosters_locked(self) -> Iterator[None]:
        # Holding the registry lock also stops new rosters being created.
        with self._registry_lock, ExitStack() as stack:
            for user_id in sorted(self._locks):
                stack.enter_context(self._locks[user_id])
            yield

    def _stored_roster(self, user_id: str) -> Roster:
        # Caller holds the user's lock.
        return self._rosters.setdefault(user_id, Roster(user_id))

    def get_roster(self, user_id: str) -> Roster:
        """Return the user's roster, creating an empty one on first access."""
        roster = self._rosters.get(user_id)
        if roster is None:
            with self._lock_for(user_id):
                roster = self._rosters.setdefault(user_id, Roster(user_id))
        return roster

    def _members(self, roster: Roster) -> list[Player]:
        return [self._players[pid] for pid in roster.player_ids]

    def _save(self, roster: Roster) -> None:
        # Every write path re-validates the full membership.
        result = validate_composition(self._members(roster))
        if not result.is_valid:
            raise CompositionViolationError(result.errors[0])
        self._rosters[roster.user_id] = roster

    def add_member(self, user_id: str, player_id: str) -> RosterView:
        """
        Add a player to a user's roster.

        Raises:
            PlayerNotFound: If the player id is unknown.
            DuplicateMember: If the player is already selected.
            CapacityExceeded: If the roster already has 11 members.
            CompositionViolationError: If a role quota would be exceeded.
            BudgetExceeded: If budget is enforced and the player is unaffordable.
        """
        with self._lock_for(user_id):
            player = self.get_player(player_id)
            roster = self._stored_roster(user_id)
            members = self._members(roster)

            result = can_add_player(members, player, enforce_budget=self.enforce_budget)
            if not result.is_valid:
                violation = result.errors[0]
                logger.info("Rejected add of %s to roster of %s: %s", player_id, user_id, violation.message)
                error_cls = _ERRORS_BY_CODE.get(violation.code)
                if error_cls is None:
                    raise CompositionViolationError(violation)
                raise error_cls(violation.message)
            for warning in result.warnings:
                logger.warning("Roster of %s: %s", user_id, warning)

            self._save(Roster(user_id, roster.player_ids + [player_id]))
            logger.info("Added %s to roster of %s", player_id, user_id)

        return self.get_roster_view(user_id)

    def remove_member(self, user_id: str, player_id: str) -> RosterView:
        """
        Remove a player from a user's roster.

        Raises:
            MemberNotFound: If the player is not in the roster.
        """
        with self._lock_for(user_id):
            roster = self._stored_roster(user_id)
            if not roster.contains(player_id):
                raise MemberNotFound(f"Player {player_id} is not in the roster")
            self._save(Roster(user_id, [p for p in roster.player_ids if p != player_id]))
            logger.info("Removed %s from roster of %s", player_id, user_id)

        return self.get_roster_view(user_id)

    def get_roster_view(self, user_id: str) -> RosterView:
        """Return the roster joined with current member records and totals."""
        roster = self.get_roster(user_id)
        return build_roster_view(roster, self._members(roster))

    def rank_rosters(self) -> list[RosterView]:
        """Rank every stored complete roster."""
        return rank_rosters(self.get_roster_view(user_id) for user_id in list(self._rosters))

    def leaderboard(self) -> list[LeaderboardEntry]:
        """Return ranked leaderboard entries for complete rosters."""
        return [
            LeaderboardEntry(
                rank=i,
                user_id=view.user_id,
                points=view.total_points,
                team_value=view.total_value,
            )
            for i, view in enumerate(self.rank_rosters(), start=1)
        ]
