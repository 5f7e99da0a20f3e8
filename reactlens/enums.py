"""Conversion between enumeration members and their names."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

__all__ = ["to_string", "to_enum"]

E = TypeVar("E", bound=Enum)


def to_string(value: Enum) -> str:
    """Return the name of an enumeration member."""
    if not isinstance(value, Enum) or value.name is None:
        raise ValueError("unknown enum value")
    if type(value).__members__.get(value.name) is not value:
        raise ValueError("unknown enum value")
    return value.name


def to_enum(enum_type: type[E], name: str) -> E:
    """Return the member of ``enum_type`` called ``name``."""
    try:
        return enum_type[name]
    except KeyError:
        raise ValueError("unknown enum name") from None