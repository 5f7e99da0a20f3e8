"""Readers and cursors over dataflow nodes, and lazy expressions combining them.

A ``Reader`` gives read access to a node's visible value; a ``Cursor``
can also write values back towards the roots.  ``State`` and ``Sensor``
are the roots.  Transformations (``xform``, ``map``, ``filter``, ``zoom``,
indexing) build a ``WithExpr`` that composes lazily and creates a single
node when ``make`` is called.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import Any

from .lenses import Lens, item, view
from .nodes import (
    CursorNode,
    ReaderNode,
    Tag,
    comp,
    filtering,
    make_lens_cursor_node,
    make_lens_reader_node,
    make_merge_cursor_node,
    make_merge_reader_node,
    make_sensor_node,
    make_state_node,
    make_xform_cursor_node,
    make_xform_reader_node,
    mapping,
)
from .watchable import Watchable

__all__ = [
    "Reader",
    "Cursor",
    "State",
    "Sensor",
    "WithExpr",
    "with_",
    "make_state",
    "make_sensor",
]

Transducer = Callable[[Callable[..., Any]], Callable[..., Any]]


def _tuplify(*values: Any) -> Any:
    return values[0] if len(values) == 1 else values


def _view_mapping(lens: Lens) -> Transducer:
    return mapping(lambda *xs: view(lens, _tuplify(*xs)))


class Reader(Watchable):
    """Read access to the value of a node."""

    def __init__(self, source: ReaderNode | Watchable | None = None) -> None:
        if isinstance(source, Watchable):
            source = source._node
        super().__init__(source)

    def get(self) -> Any:
        """The currently visible value."""
        return self._require_node().last()

    def xform(self, xf: Transducer) -> WithExpr:
        """Derive a read-only value through the transducer ``xf``."""
        return with_(self).xform(xf)

    def map(self, fn: Callable[..., Any]) -> WithExpr:
        """Derive a read-only value by applying ``fn``."""
        return self.xform(mapping(fn))

    def filter(self, pred: Callable[..., bool]) -> WithExpr:
        """Derive a read-only value that only takes values satisfying ``pred``."""
        return self.xform(filtering(pred))

    def zoom(self, lens: Lens) -> WithExpr:
        """Focus on the part of the value that ``lens`` selects."""
        return with_(self).zoom(lens)

    def __getitem__(self, key: Any) -> WithExpr:
        return with_(self)[key]

    def make(self) -> Reader:
        """Return ``self``; readers are already concrete."""
        return self


class Cursor(Reader):
    """Read and write access to the value of a node."""

    def __init__(self, source: ReaderNode | Watchable | None = None) -> None:
        super().__init__(source)
        if self._node is not None and not isinstance(self._node, CursorNode):
            raise TypeError("a cursor needs a node that accepts writes")

    def xform(self, xf: Transducer, wxf: Transducer | None = None) -> WithExpr:
        """Transform through ``xf``; with ``wxf`` writes are transformed back."""
        return with_(self).xform(xf, wxf)

    def set(self, value: Any) -> None:
        """Write ``value`` towards the roots."""
        self._require_node().send_up(value)

    def update(self, fn: Callable[[Any], Any]) -> None:
        """Write the result of ``fn`` applied to the up-to-date current value."""
        node = self._require_node()
        node.refresh()
        self.set(fn(node.current()))


class State(Cursor):
    """A root cursor holding a value."""

    def __init__(self, value: Any = None, tag: Tag = Tag.TRANSACTIONAL) -> None:
        super().__init__(make_state_node(value, tag))


class Sensor(Reader):
    """A root reader that samples a function whenever the graph is refreshed."""

    def __init__(self, fn: Callable[[], Any]) -> None:
        super().__init__(make_sensor_node(fn))


class _Kind(Enum):
    MERGE = auto()
    XFORM = auto()
    WXFORM = auto()
    LENS = auto()


class WithExpr:
    """A lazy description of transformations over a set of nodes."""

    def __init__(
        self,
        nodes: tuple[ReaderNode, ...],
        writable: bool,
        kind: _Kind = _Kind.MERGE,
        xform: Transducer | None = None,
        wxform: Transducer | None = None,
        lens: Lens | None = None,
    ) -> None:
        self._nodes = nodes
        self._writable = writable
        self._kind = kind
        self._xform = xform
        self._wxform = wxform
        self._lens = lens

    def _derive(self, kind: _Kind, **fields: Any) -> WithExpr:
        writable = self._writable and kind is not _Kind.XFORM
        return WithExpr(self._nodes, writable, kind, **fields)

    def xform(self, xf: Transducer, wxf: Transducer | None = None) -> WithExpr:
        """Add a transducer; with ``wxf`` the result stays writable."""
        kind = self._kind
        if kind is _Kind.MERGE:
            if wxf is None:
                return self._derive(_Kind.XFORM, xform=xf)
            return self._derive(_Kind.WXFORM, xform=xf, wxform=wxf)
        if kind is _Kind.XFORM:
            if wxf is not None:
                raise TypeError("cannot write through a read-only transformation")
            return self._derive(_Kind.XFORM, xform=comp(self._xform, xf))
        if kind is _Kind.WXFORM:
            if wxf is None:
                return self._derive(_Kind.XFORM, xform=comp(self._xform, xf))
            return self._derive(
                _Kind.WXFORM,
                xform=comp(self._xform, xf),
                wxform=comp(wxf, self._wxform),
            )
        if wxf is None:
            return self._derive(
                _Kind.XFORM, xform=comp(_view_mapping(self._lens), xf)
            )
        return self.make().xform(xf, wxf)

    def map(self, fn: Callable[..., Any]) -> WithExpr:
        """Add a read-only mapping by ``fn``."""
        return self.xform(mapping(fn))

    def filter(self, pred: Callable[..., bool]) -> WithExpr:
        """Add a read-only filter by ``pred``."""
        return self.xform(filtering(pred))

    def zoom(self, lens: Lens) -> WithExpr:
        """Focus through ``lens``."""
        kind = self._kind
        if kind is _Kind.MERGE:
            return self._derive(_Kind.LENS, lens=lens)
        if kind is _Kind.XFORM:
            return self.xform(_view_mapping(lens))
        if kind is _Kind.WXFORM:
            return self.make().zoom(lens)
        return self._derive(_Kind.LENS, lens=self._lens | lens)

    def __getitem__(self, key: Any) -> WithExpr:
        return self.zoom(item(key))

    def make(self) -> Reader:
        """Create the node described by this expression and return its reader."""
        kind = self._kind
        writable = self._writable and kind is not _Kind.XFORM
        nodes = self._nodes
        if kind is _Kind.MERGE:
            node = (make_merge_cursor_node if writable else make_merge_reader_node)(
                nodes
            )
        elif kind is _Kind.XFORM:
            node = make_xform_reader_node(self._xform, nodes)
        elif kind is _Kind.WXFORM:
            if writable:
                node = make_xform_cursor_node(self._xform, self._wxform, nodes)
            else:
                node = make_xform_reader_node(self._xform, nodes)
        else:
            make_node = make_lens_cursor_node if writable else make_lens_reader_node
            node = make_node(self._lens, nodes)
        return Cursor(node) if writable else Reader(node)


def with_(*args: Reader) -> WithExpr:
    """Start an expression over the given readers or cursors.

    The result is writable only when every argument is a cursor.
    """
    if not args:
        raise ValueError("with_ needs at least one reader or cursor")
    nodes = tuple(arg.make()._require_node() for arg in args)
    writable = all(isinstance(arg, Cursor) for arg in args)
    return WithExpr(nodes, writable)


def make_state(value: Any, tag: Tag = Tag.TRANSACTIONAL) -> State:
    """Create a state holding ``value``."""
    return State(value, tag)


def make_sensor(fn: Callable[[], Any]) -> Sensor:
    """Create a sensor sampling ``fn``."""
    return Sensor(fn)