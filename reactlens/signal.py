"""Lightweight signals with connectable slots and chainable forwarders."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = ["Connection", "Signal", "Forwarder"]


class _Link:
    """A slot that knows which signal, if any, it is attached to."""

    _owner: Signal | None = None

    def unlink(self) -> None:
        """Detach from the signal this slot is attached to, if any."""
        if self._owner is not None:
            self._owner.remove(self)


class _Slot(_Link):
    def __init__(self, fn: Callable[..., Any]) -> None:
        self._fn = fn

    def __call__(self, *args: Any) -> None:
        self._fn(*args)


class Connection:
    """Handle to a callback connected to a signal."""

    def __init__(self, slot: _Slot) -> None:
        self._slot = slot

    @property
    def connected(self) -> bool:
        return self._slot._owner is not None

    def disconnect(self) -> None:
        """Stop the callback from receiving further emissions."""
        self._slot.unlink()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc: object) -> None:
        self.disconnect()


class Signal:
    """Calls every attached slot, in the order they were attached."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, fn: Callable[..., Any]) -> Connection:
        """Attach ``fn`` and return a connection that can detach it."""
        slot = _Slot(fn)
        self.add(slot)
        return Connection(slot)

    def add(self, slot: Callable[..., Any]) -> None:
        """Attach a callable slot; a linked slot is moved from its old signal."""
        if isinstance(slot, _Link):
            slot.unlink()
            slot._owner = self
        self._slots.append(slot)

    def remove(self, slot: Callable[..., Any]) -> None:
        """Detach ``slot``; raises ValueError if it is not attached."""
        for index, candidate in enumerate(self._slots):
            if candidate is slot:
                del self._slots[index]
                break
        else:
            raise ValueError("slot is not attached to this signal")
        if isinstance(slot, _Link):
            slot._owner = None

    def __call__(self, *args: Any) -> None:
        for slot in tuple(self._slots):
            slot(*args)

    def __bool__(self) -> bool:
        return bool(self._slots)

    def __len__(self) -> int:
        return len(self._slots)


class Forwarder(_Link, Signal):
    """A signal that can itself be attached as a slot to another signal."""

    def __init__(self) -> None:
        Signal.__init__(self)

    def unlink(self) -> None:
        """Detach this forwarder from the signal that feeds it."""
        _Link.unlink(self)