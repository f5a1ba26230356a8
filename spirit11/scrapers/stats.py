"""Player statistics ingestion from CSV seed files and HTML stat tables."""

import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from ..analysis.calculator import compute_derived_stats
from ..models import InvalidStatsError, Player, PlayerStats, overs_to_balls, parse_role
from .base import BaseScraper, ParseError

logger = logging.getLogger(__name__)


# Path to the player seed CSV
PLAYERS_CSV_PATH = Path(__file__).parent.parent.parent / "data" / "players.csv"

# Seed column name -> stat field. Innings played doubles as matches played.
COUNTER_COLUMNS = {
    "Innings Played": "innings_played",
    "Total Runs": "runs_scored",
    "Balls Faced": "balls_faced",
    "Wickets": "wickets_taken",
    "Runs Conceded": "runs_conceded",
}

REQUIRED_COLUMNS = ("Name", "University", "Category")


def slugify(name: str) -> str:
    """Generate a player id from a name."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _parse_count(row: dict[str, str], column: str) -> int:
    raw = (row.get(column) or "0").strip() or "0"
    try:
        number = float(raw)
    except ValueError:
        raise ParseError(f"{column} is not a number: {raw!r}")
    if not number.is_integer():
        raise ParseError(f"{column} must be a whole number: {raw!r}")
    return int(number)


def parse_player_row(row: dict[str, str]) -> Player:
    """
    Parse one seed row into a Player.

    Args:
        row: Mapping of seed column name to text value.

    Returns:
        Player with derived fields computed.

    Raises:
        ParseError: If a column is missing or a value is invalid.
    """
    for column in REQUIRED_COLUMNS:
        if not (row.get(column) or "").strip():
            raise ParseError(f"Missing {column}")

    name = row["Name"].strip()
    counters = {stat: _parse_count(row, column) for column, stat in COUNTER_COLUMNS.items()}
    counters["matches_played"] = counters["innings_played"]

    overs_text = (row.get("Overs Bowled") or "0").strip() or "0"
    try:
        stats = PlayerStats(balls_bowled=overs_to_balls(float(overs_text)), **counters)
        return Player(
            id=slugify(name),
            name=name,
            university=row["University"].strip(),
            role=parse_role(row["Category"]),
            stats=stats,
        )
    except InvalidStatsError as e:
        raise ParseError(f"Invalid row for {name}: {e}") from e
    except ValueError as e:
        raise ParseError(f"Overs Bowled is not a number for {name}: {overs_text!r}") from e


def parse_player_rows(rows: Iterable[dict[str, str]]) -> list[Player]:
    """
    Parse rows, skipping and logging invalid ones.

    Players sharing a name get distinct ids: the second "Kusal Perera" is
    stored as ``kusal-perera-2`` and a warning is logged.
    """
    players = []
    taken: set[str] = set()
    for line, row in enumerate(rows, start=1):
        try:
            player = parse_player_row(row)
        except ParseError as e:
            logger.warning("Skipping player row %d: %s", line, e)
            continue

        if player.id in taken:
            base_id, n = player.id, 2
            while f"{base_id}-{n}" in taken:
                n += 1
            player.id = f"{base_id}-{n}"
            logger.warning("Duplicate player name on row %d: %s stored as %s", line, player.name, player.id)
        taken.add(player.id)
        players.append(player)
    return players


def load_players_from_csv(csv_path: Optional[Path] = None) -> list[Player]:
    """
    Load players from the seed CSV file.

    Args:
        csv_path: Path to CSV file. Defaults to data/players.csv.

    Returns:
        List of parsed players; empty if the file does not exist.
    """
    path = csv_path or PLAYERS_CSV_PATH
    if not path.exists():
        return []

    with open(path, "r", newline="", encoding="utf-8") as f:
        players = parse_player_rows(csv.DictReader(f))

    logger.info("Loaded %d players from %s", len(players), path)
    return players


def recalculate_all(players: Iterable[Player]) -> int:
    """
    Re-derive points and value for every player and repair stale records.

    Derived fields are refreshed on every stats write, so a record is only
    stale if it was built under different scoring weights or its derived
    fields were assigned directly.

    Returns:
        Number of players whose derived fields were corrected.
    """
    corrected = 0
    for player in players:
        fresh = compute_derived_stats(player.stats)
        if fresh == player.derived:
            continue
        logger.info(
            "Corrected %s: points %.2f -> %.2f, value %d -> %d",
            player.name,
            player.points,
            fresh.points,
            player.value,
            fresh.value,
        )
        player.derived = fresh
        corrected += 1
    return corrected


class StatsScraper(BaseScraper):
    """
    Scraper for a published player statistics table.

    The source is either a CSV export or an HTML page holding a table; both
    use the seed column names (Name, University, Category, Total Runs, ...).
    """

    def __init__(
        self,
        url: str,
        cache_dir: Optional[Path] = None,
        cache_ttl_hours: int = 1,
    ) -> None:
        super().__init__(
            cache_dir=cache_dir,
            cache_ttl_hours=cache_ttl_hours,
            min_interval_seconds=1.0,
        )
        self.url = url

    def scrape_players(self, use_cache: bool = True) -> list[Player]:
        """
        Fetch and parse every player on the stats page.

        Raises:
            FetchError: If fetching data fails.
            ParseError: If an HTML page has no stats table.
        """
        players = parse_player_rows(self.fetch_rows(self.url, use_cache=use_cache))
        logger.info("Scraped %d players from %s", len(players), self.url)
        return players

    def scrape(self, use_cache: bool = True) -> list[Player]:
        return self.scrape_players(use_cache=use_cache)


# Name, University, Category, Innings, Runs, Balls Faced, Wickets, Overs, Runs Conceded
SAMPLE_ROWS = [
    ("Chamika Chandimal", "University of the Visual & Performing Arts", "Batsman", 9, 287, 251, 0, "0", 0),
    ("Dimuth Dhananjaya", "University of the Visual & Performing Arts", "All-Rounder", 9, 175, 152, 11, "33", 225),
    ("Avishka Mendis", "Eastern University", "All-Rounder", 7, 232, 190, 8, "27.2", 198),
    ("Danushka Kumara", "University of the Visual & Performing Arts", "Batsman", 7, 301, 266, 0, "0", 0),
    ("Praveen Vandersay", "Eastern University", "Batsman", 8, 320, 275, 0, "0", 0),
    ("Niroshan Mathews", "University of the Visual & Performing Arts", "Batsman", 8, 268, 239, 0, "0", 0),
    ("Chaturanga Gunathilaka", "University of Moratuwa", "Bowler", 5, 35, 58, 13, "42", 330),
    ("Lahiru Rathnayake", "University of Ruhuna", "Batsman", 9, 292, 263, 0, "0", 0),
    ("Jeewan Thirimanne", "University of Jaffna", "Batsman", 8, 291, 246, 0, "0", 0),
    ("Kalana Samarawickrama", "Eastern University", "Batsman", 8, 253, 247, 0, "0", 0),
    ("Lakshan Vandersay", "University of the Visual & Performing Arts", "All-Rounder", 7, 169, 143, 9, "28", 204),
    ("Roshen Samarawickrama", "University of Kelaniya", "Bowler", 4, 16, 31, 10, "36", 290),
    ("Sammu Sandakan", "University of Ruhuna", "Bowler", 5, 22, 35, 12, "40", 296),
    ("Kalana Jayawardene", "University of Jaffna", "Bowler", 4, 12, 25, 9, "31.4", 260),
    ("Binura Samarawickrama", "University of Colombo", "Bowler", 6, 48, 60, 11, "38", 310),
    ("Dasun Thirimanne", "Eastern University", "Bowler", 3, 9, 17, 8, "30", 248),
    ("Angelo Samarawickrama", "University of Kelaniya", "Batsman", 8, 244, 224, 0, "0", 0),
    ("Nuwan Jayawickrama", "University of Ruhuna", "All-Rounder", 8, 198, 166, 10, "32", 240),
    ("Kusal Dhananjaya", "South Eastern University", "WicketKeeper", 9, 276, 241, 0, "0", 0),
    ("Sadeera Rajapaksa", "University of Jaffna", "Wicket-Keeper", 8, 260, 236, 0, "0", 0),
    ("Pathum Dhananjaya", "Eastern University", "Bowler", 4, 18, 27, 14, "45", 360),
    ("Minod Rathnayake", "University of Kelaniya", "Bowler", 5, 30, 42, 7, "29.3", 231),
]


def create_sample_players() -> list[Player]:
    """
    Create sample player data for testing/development.

    Returns:
        List of sample players covering every role.
    """
    columns = (
        "Name",
        "University",
        "Category",
        "Innings Played",
        "Total Runs",
        "Balls Faced",
        "Wickets",
        "Overs Bowled",
        "Runs Conceded",
    )
    rows = [{col: str(v) for col, v in zip(columns, values)} for values in SAMPLE_ROWS]
    return parse_player_rows(rows)
