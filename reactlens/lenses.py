"""Composable lenses for reading and updating parts of immutable values."""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = ["Lens", "view", "put", "over", "getset", "attr", "item"]


@dataclass(frozen=True)
class Lens:
    """A focus on part of a value: a getter and a setter that returns a new whole."""

    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], Any]

    def __or__(self, other: Lens) -> Lens:
        """Compose so that ``other`` focuses inside what ``self`` focuses on."""
        if not isinstance(other, Lens):
            return NotImplemented
        outer, inner = self, other

        def get(whole: Any) -> Any:
            return inner.getter(outer.getter(whole))

        def set_(whole: Any, value: Any) -> Any:
            return outer.setter(whole, inner.setter(outer.getter(whole), value))

        return Lens(get, set_)


def view(lens: Lens, whole: Any) -> Any:
    """Return the part of ``whole`` that ``lens`` focuses on."""
    return lens.getter(whole)


def put(lens: Lens, whole: Any, value: Any) -> Any:
    """Return a copy of ``whole`` with the focused part replaced by ``value``."""
    return lens.setter(whole, value)


def over(lens: Lens, whole: Any, fn: Callable[[Any], Any]) -> Any:
    """Return a copy of ``whole`` with ``fn`` applied to the focused part."""
    return lens.setter(whole, fn(lens.getter(whole)))


def getset(getter: Callable[[Any], Any], setter: Callable[[Any, Any], Any]) -> Lens:
    """Build a lens from a getter and a setter returning the updated whole."""
    return Lens(getter, setter)


def _replace_attr(whole: Any, name: str, value: Any) -> Any:
    if dataclasses.is_dataclass(whole) and not isinstance(whole, type):
        init_fields = {f.name for f in dataclasses.fields(whole) if f.init}
        if name in init_fields:
            return dataclasses.replace(whole, **{name: value})
    if isinstance(whole, tuple) and hasattr(whole, "_replace"):
        return whole._replace(**{name: value})
    result = copy.copy(whole)
    setattr(result, name, value)
    return result


def attr(name: str) -> Lens:
    """A lens focusing on the attribute ``name``."""

    def get(whole: Any) -> Any:
        return getattr(whole, name)

    def set_(whole: Any, value: Any) -> Any:
        return _replace_attr(whole, name, value)

    return Lens(get, set_)


def _replace_item(whole: Any, key: Any, value: Any) -> Any:
    if isinstance(whole, (str, bytes)):
        raise TypeError(f"cannot replace items of {type(whole).__name__}")
    if isinstance(whole, tuple):
        items = list(whole)
        items[key] = value
        if hasattr(whole, "_fields"):
            return type(whole)(*items)
        return type(whole)(items)
    result = copy.copy(whole)
    result[key] = value
    return result


def item(key: Any) -> Lens:
    """A lens focusing on ``whole[key]`` for sequences and mappings."""

    def get(whole: Any) -> Any:
        return whole[key]

    def set_(whole: Any, value: Any) -> Any:
        return _replace_item(whole, key, value)

    return Lens(get, set_)