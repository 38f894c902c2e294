"""Calendar helpers for day-boundary arithmetic.

Day markers in the game-state document are ISO dates ("2026-10-18"). Documents
written by older browser clients may carry the JavaScript toDateString() form
("Sun Oct 18 2026"); parse_day() accepts both. Timestamps are epoch
milliseconds, matching Date.now() on the client.

All helpers take an explicit datetime so callers can pin the clock in tests.
"""

from datetime import date, datetime

MS_PER_DAY = 1000 * 60 * 60 * 24

_DAY_FORMATS = ("%Y-%m-%d", "%a %b %d %Y")


def now_local() -> datetime:
    return datetime.now()


def day_key(moment: datetime) -> str:
    """Return the calendar-day marker for a moment."""
    return moment.date().isoformat()


def parse_day(value) -> date | None:
    """Parse a day marker. Returns None for anything unparsable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _DAY_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def same_day(marker, moment: datetime) -> bool:
    return parse_day(marker) == moment.date()


def days_between(marker, moment: datetime) -> int | None:
    """Whole calendar days from a day marker to a moment, or None if unparsable."""
    day = parse_day(marker)
    if day is None:
        return None
    return (moment.date() - day).days


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def elapsed_days(since_ms, moment: datetime) -> float:
    """Fractional days between an epoch-millis timestamp and a moment.

    Missing or non-numeric timestamps count as no time elapsed.
    """
    if isinstance(since_ms, bool) or not isinstance(since_ms, (int, float)):
        return 0.0
    return (to_millis(moment) - since_ms) / MS_PER_DAY


def is_weekend(moment: datetime) -> bool:
    # Monday is 0
    return moment.weekday() >= 5
