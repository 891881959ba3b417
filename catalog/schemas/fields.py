"""
Shared field checks for the form schemas.

Errors are raised as PydanticCustomError so the message reaches the page
exactly as written, without pydantic's "Value error, " prefix.
"""

from datetime import date
from typing import Any

from pydantic_core import PydanticCustomError


def require_text(value: Any, message: str, max_length: int | None = None) -> str:
    """Non-empty text, optionally bounded in length."""
    if not isinstance(value, str) or not value:
        raise PydanticCustomError("required", message)
    if max_length is not None and len(value) > max_length:
        raise PydanticCustomError(
            "too_long",
            "Must be at most {max_length} characters",
            {"max_length": max_length},
        )
    return value


def optional_iso_date(value: Any, message: str) -> date | None:
    """
    An ISO-8601 date (YYYY-MM-DD), or None for an empty value.

    Empty strings and other falsy values mean "no date", not an error.
    """
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise PydanticCustomError("invalid_date", message) from None


def reference_id(value: Any, message: str) -> int:
    """The id of a referenced record, posted as a decimal string."""
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise PydanticCustomError("invalid_reference", message)
    return int(value)
