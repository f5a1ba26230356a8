"""Tournament-wide statistics across all players."""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.player import Player


@dataclass(frozen=True)
class StatLeader:
    """The player leading a statistic."""

    player_id: str
    name: str
    university: str
    amount: int


@dataclass(frozen=True)
class TournamentSummary:
    """
    Aggregate tournament statistics.

    Attributes:
        overall_runs: Runs scored by all players.
        overall_wickets: Wickets taken by all players.
        highest_run_scorer: Leader by runs, None if nobody has scored.
        highest_wicket_taker: Leader by wickets, None if nobody has taken one.
    """

    overall_runs: int
    overall_wickets: int
    highest_run_scorer: Optional[StatLeader] = None
    highest_wicket_taker: Optional[StatLeader] = None


def _leader(players: list[Player], stat: str) -> Optional[StatLeader]:
    """Return the first player with the strictly highest positive stat."""
    best: Optional[Player] = None
    for player in players:
        amount = getattr(player.stats, stat)
        if amount > 0 and (best is None or amount > getattr(best.stats, stat)):
            best = player
    if best is None:
        return None
    return StatLeader(
        player_id=best.id,
        name=best.name,
        university=best.university,
        amount=getattr(best.stats, stat),
    )


def tournament_summary(players: Iterable[Player]) -> TournamentSummary:
    """
    Summarise runs and wickets across all players.

    Ties keep the player seen first.
    """
    players = list(players)
    return TournamentSummary(
        overall_runs=sum(p.stats.runs_scored for p in players),
        overall_wickets=sum(p.stats.wickets_taken for p in players),
        highest_run_scorer=_leader(players, "runs_scored"),
        highest_wicket_taker=_leader(players, "wickets_taken"),
    )
