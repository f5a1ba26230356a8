"""Fetching player statistics pages with a file cache and request pacing."""

import csv
import hashlib
import io
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


# Default cache directory
CACHE_DIR = Path(__file__).parent.parent.parent / "data" / "cache"

# Header that marks a table as a player statistics table
KEY_COLUMN = "Name"


class ScraperError(Exception):
    """Base exception for ingestion errors."""

    pass


class RateLimitError(ScraperError):
    """Raised when the stats host answers 429."""

    pass


class FetchError(ScraperError):
    """Raised when a stats page cannot be downloaded."""

    pass


class ParseError(ScraperError):
    """Raised when a stats page or row cannot be parsed."""

    pass


@dataclass
class ResponseCache:
    """
    JSON file cache of downloaded stats pages, keyed by URL.

    Each entry stores the URL, the download time and the page body. Entries
    older than ``ttl`` are ignored; unreadable entries are deleted on read.
    """

    directory: Path
    ttl: timedelta

    def __post_init__(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, url: str) -> Path:
        return self.directory / f"{hashlib.sha256(url.encode()).hexdigest()}.json"

    def get(self, url: str) -> Optional[str]:
        path = self.path_for(url)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = json.load(f)
            fetched_at = datetime.fromisoformat(entry["timestamp"])
            content = entry["data"]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Discarding unreadable cache entry %s", path.name)
            path.unlink(missing_ok=True)
            return None

        if datetime.now() - fetched_at >= self.ttl:
            return None
        return content

    def put(self, url: str, content: str) -> None:
        entry = {"url": url, "timestamp": datetime.now().isoformat(), "data": content}
        with open(self.path_for(url), "w", encoding="utf-8") as f:
            json.dump(entry, f)

    def clear(self) -> int:
        """
        Delete every cache entry in the directory.

        Files that are not cache entries are left alone.

        Returns:
            Number of entries deleted.
        """
        count = 0
        for path in self.directory.glob("*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    entry = json.load(f)
            except (json.JSONDecodeError, OSError):
                continue
            if not isinstance(entry, dict) or not {"url", "timestamp", "data"} <= entry.keys():
                continue
            path.unlink()
            count += 1
        return count


def table_rows(soup: BeautifulSoup) -> Optional[list[dict[str, str]]]:
    """
    Extract rows from the first table whose header includes the Name column.

    Rows whose cell count differs from the header are skipped.

    Returns:
        Rows keyed by header text, or None if no such table exists.
    """
    for table in soup.find_all("table"):
        headers = [th.get_text(strip=True) for th in table.find_all("th")]
        if KEY_COLUMN not in headers:
            continue
        rows = []
        for tr in table.find_all("tr"):
            cells = [td.get_text(strip=True) for td in tr.find_all("td")]
            if len(cells) == len(headers):
                rows.append(dict(zip(headers, cells)))
        return rows
    return None


def _is_csv(url: str, content: str) -> bool:
    if urlparse(url).path.lower().endswith(".csv"):
        return True
    first_line = content.lstrip().split("\n", 1)[0]
    return "<" not in first_line and KEY_COLUMN in first_line.split(",")


class BaseScraper(ABC):
    """
    Downloads player statistics from a published page.

    Responses are cached on disk and requests to the host are spaced at
    least ``min_interval_seconds`` apart. Subclasses implement scrape().
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        cache_ttl_hours: int = 1,
        min_interval_seconds: float = 1.0,
    ) -> None:
        """
        Initialize the scraper.

        Args:
            cache_dir: Directory for cached pages.
            cache_ttl_hours: How long a cached page stays fresh.
            min_interval_seconds: Minimum gap between two requests.
        """
        self.cache = ResponseCache(cache_dir or CACHE_DIR, timedelta(hours=cache_ttl_hours))
        self.min_interval_seconds = min_interval_seconds
        self._last_request_at: Optional[float] = None

        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "Spirit11/1.0 (Fantasy Cricket Stats Loader)",
                "Accept": "text/html,application/xhtml+xml,text/csv;q=0.9,*/*;q=0.8",
            }
        )

    @property
    def cache_dir(self) -> Path:
        return self.cache.directory

    def _wait_turn(self) -> None:
        if self._last_request_at is not None:
            wait = self.min_interval_seconds - (time.monotonic() - self._last_request_at)
            if wait > 0:
                time.sleep(wait)
        self._last_request_at = time.monotonic()

    def _download(self, url: str) -> str:
        self._wait_turn()
        logger.info("Fetching %s", url)
        try:
            response = self._session.get(url, timeout=30)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise FetchError(f"Request timed out: {url}")
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 429:
                raise RateLimitError(f"Rate limited: {url}")
            raise FetchError(f"HTTP error {status or 'unknown'}: {url}")
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {url} - {e}")
        return response.text

    def fetch(self, url: str, use_cache: bool = True) -> str:
        """
        Return the body of a stats page, from cache when fresh.

        Raises:
            RateLimitError: If the host answers 429.
            FetchError: If the request fails.
        """
        if use_cache:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached

        content = self._download(url)
        if use_cache:
            self.cache.put(url, content)
        return content

    def fetch_rows(self, url: str, use_cache: bool = True) -> list[dict[str, str]]:
        """
        Fetch a stats source and return its rows keyed by column name.

        CSV exports and HTML pages holding a stats table are both accepted.

        Raises:
            FetchError: If the request fails.
            ParseError: If an HTML page has no stats table.
        """
        content = self.fetch(url, use_cache=use_cache)
        if _is_csv(url, content):
            return list(csv.DictReader(io.StringIO(content)))

        rows = table_rows(self.parse_html(content))
        if rows is None:
            raise ParseError(f"No player stats table found at {url}")
        return rows

    def parse_html(self, content: str) -> BeautifulSoup:
        return BeautifulSoup(content, "html.parser")

    def clear_cache(self) -> int:
        """Delete all cached pages, returning how many were removed."""
        return self.cache.clear()

    @abstractmethod
    def scrape(self) -> Any:
        """Scrape data from the source."""
        pass
