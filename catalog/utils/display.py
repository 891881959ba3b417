"""
Display Helpers

Pure functions that derive presentation values from stored fields.
Models expose them as read-only properties; nothing here is persisted.
"""

from datetime import date

URL_PREFIX = "/catalog"


def author_display_name(first_name: str | None, family_name: str | None) -> str:
    """
    "family_name, first_name", or "" when either part is missing.

    >>> author_display_name("Frank", "Herbert")
    'Herbert, Frank'
    """
    if first_name and family_name:
        return f"{family_name}, {first_name}"
    return ""


def format_date(value: date | None, default: str = "") -> str:
    """
    Medium date format, e.g. "Jun 25, 1903".

    Returns default when the date is absent.
    """
    if value is None:
        return default
    return f"{value:%b} {value.day}, {value.year}"


def iso_date(value: date | None) -> str:
    """YYYY-MM-DD, or "" when the date is absent."""
    return value.isoformat() if value is not None else ""


def lifespan(date_of_birth: date | None, date_of_death: date | None) -> str:
    """Birth and death dates joined for author pages."""
    return f"{format_date(date_of_birth, 'unknown')} - {format_date(date_of_death)}"


def entity_url(kind: str, entity_id: int | None) -> str:
    """Canonical detail page for an entity, e.g. /catalog/genre/3."""
    return f"{URL_PREFIX}/{kind}/{entity_id}"


def list_url(kind: str) -> str:
    """List page for an entity kind, e.g. /catalog/genres."""
    return f"{URL_PREFIX}/{kind}s"
