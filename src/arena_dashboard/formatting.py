"""Text formatting helpers shared by reporters and ranked views."""

from __future__ import annotations

from datetime import datetime


def format_date(value: str | None) -> str:
    """Render an ISO timestamp in local time.

    Returns ``"-"`` for missing values and the raw value when it cannot be
    parsed.
    """
    if not value:
        return "-"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_average(value: float) -> str:
    return f"{value:.2f}"


def format_count(value: float) -> str:
    return str(int(value))


def format_rounds(value: float) -> str:
    n = int(value)
    return f"{n} round" if n == 1 else f"{n} rounds"


def format_rating(value: float | str) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)
