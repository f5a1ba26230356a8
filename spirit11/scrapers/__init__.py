"""Scrapers and loaders for Spirit11 player statistics."""

from .base import (
    BaseScraper,
    FetchError,
    ParseError,
    RateLimitError,
    ResponseCache,
    ScraperError,
    table_rows,
    CACHE_DIR,
)
from .stats import (
    StatsScraper,
    create_sample_players,
    load_players_from_csv,
    parse_player_row,
    parse_player_rows,
    recalculate_all,
    slugify,
    PLAYERS_CSV_PATH,
)

__all__ = [
    # Base
    "BaseScraper",
    "FetchError",
    "ParseError",
    "RateLimitError",
    "ResponseCache",
    "ScraperError",
    "table_rows",
    "CACHE_DIR",
    # Stats
    "StatsScraper",
    "create_sample_players",
    "load_players_from_csv",
    "parse_player_row",
    "parse_player_rows",
    "recalculate_all",
    "slugify",
    "PLAYERS_CSV_PATH",
]
