"""Helpers for reading PostgREST row values."""

from datetime import UTC, date, datetime

MISSING_TIMESTAMP = datetime.min.replace(tzinfo=UTC)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None for empty values."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_date(value: object) -> date | None:
    if value is None or value == "":
        return None
    return date.fromisoformat(str(value))


def optional_str(value: object) -> str | None:
    return str(value) if value is not None else None


def str_list(value: object) -> list[str]:
    """Read a JSON array column as a list of strings."""
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
