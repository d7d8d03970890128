"""Column conversion helpers shared by the SQLite stores."""

from datetime import UTC, date, datetime, timedelta


def parse_timestamp(value: str | None) -> datetime:
    """Parse a stored timestamp, treating naive values as UTC."""
    if value:
        try:
            parsed = datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(UTC)


def parse_date(value: str | None) -> date:
    if value:
        try:
            return date.fromisoformat(value[:10])
        except (ValueError, TypeError):
            pass
    return datetime.now(UTC).date()


def day_bounds(
    start_date: date | None, end_date: date | None
) -> tuple[str | None, str | None]:
    """
    Convert an inclusive date range into half-open timestamp bounds.

    Stored timestamps are ISO strings, so plain string comparison against
    ``YYYY-MM-DD`` works for both ``T`` and space separated values.
    """
    lower = start_date.isoformat() if start_date else None
    upper = (end_date + timedelta(days=1)).isoformat() if end_date else None
    return lower, upper
