"""Environment variable parsing utilities."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer, returning None if value is None or not numeric."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_enum_env(value: str | None, enum_cls: type[E]) -> E | None:
    """Parse an enum member by name, value or (for int enums) index.

    Names are matched case-insensitively with ``-`` and ``_`` treated alike.
    Raises ValueError for non-empty values that match nothing.
    """
    if value is None or not value.strip():
        return None
    token = value.strip()
    normalized = token.replace("-", "_").upper()
    for member in enum_cls:
        if member.name == normalized or str(member.value).lower() == token.lower():
            return member
    index = parse_int_env(token)
    if index is not None:
        members = list(enum_cls)
        if 0 <= index < len(members):
            return members[index]
    raise ValueError(f"{token!r} is not a valid {enum_cls.__name__}")
