"""Objects that let callbacks watch a node for changes."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any

from .nodes import ReaderNode
from .signal import Connection, Forwarder

__all__ = ["Watchable", "watch"]


class Watchable:
    """Holds a node and forwards its notifications to attached callbacks."""

    def __init__(self, node: ReaderNode | None = None) -> None:
        self._node = node
        self._forwarder = Forwarder()
        self._connections: list[Connection] = []
        weakref.finalize(self, self._forwarder.unlink)

    def _require_node(self) -> ReaderNode:
        if self._node is None:
            raise RuntimeError("Accessing uninitialized reader")
        return self._node

    def watch(self, callback: Callable[[Any], Any]) -> Watchable:
        """Call ``callback`` with each new value; returns ``self``."""
        if not self._forwarder and self._node is not None:
            self._node.observers().add(self._forwarder)
        self._connections.append(self._forwarder.connect(callback))
        return self

    def bind(self, callback: Callable[[Any], Any]) -> Watchable:
        """Call ``callback`` with the current value now and on every change."""
        callback(self._require_node().last())
        return self.watch(callback)

    def nudge(self) -> None:
        """Call every watcher with the current value."""
        self._forwarder(self._require_node().last())

    def unbind(self) -> None:
        """Drop every watcher."""
        for connection in self._connections:
            connection.disconnect()
        self._connections.clear()
        self._forwarder.unlink()


def watch(reader: Watchable, callback: Callable[[Any], Any]) -> Watchable:
    """Watch changes of ``reader`` with ``callback``."""
    return reader.watch(callback)