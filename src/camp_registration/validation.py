"""Field validation helpers shared by form-handling services."""

from collections.abc import Mapping
from datetime import date


def blank_fields(values: Mapping[str, str | None]) -> list[str]:
    """Return the names of fields that are missing or whitespace only."""
    return [name for name, value in values.items() if not value or not value.strip()]


def is_valid_email(value: str | None) -> bool:
    """Loose email check: must contain both '@' and '.'."""
    return bool(value) and "@" in value and "." in value


def parse_iso_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD string, returning None when malformed."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def file_extension(filename: str, default: str) -> str:
    """Return the lowercased extension of an uploaded file name."""
    _, dot, ext = filename.rpartition(".")
    if not dot or not ext or "/" in ext:
        return default
    return ext.lower()


def is_image(content_type: str | None) -> bool:
    return bool(content_type) and content_type.startswith("image/")
