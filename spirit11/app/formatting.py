"""Display formatting helpers shared by the app pages."""

from ..models import Player, Role


CURRENCY_SYMBOL = "Rs"


def format_currency(amount: int) -> str:
    """Format a monetary amount, e.g. 'Rs 1,250,000'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {abs(amount):,}"


def filter_players(
    players: list[Player],
    university: str,
    role: str,
    max_value: int,
) -> list[Player]:
    """Filter players by criteria, most valuable first."""
    filtered = players

    if university != "All":
        filtered = [p for p in filtered if p.university == university]

    if role != "All":
        filtered = [p for p in filtered if p.role == Role(role)]

    filtered = [p for p in filtered if p.value <= max_value]

    return sorted(filtered, key=lambda p: (-p.value, p.name))
