"""Dataflow nodes: roots that hold values and derived nodes that follow them.

Values travel in two phases.  ``push_down``/``send_up`` stage a new current
value; ``send_down`` makes staged values visible as ``last`` throughout the
graph; ``notify`` then tells observers about what changed.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from .lenses import Lens, put, view
from .signal import Signal

__all__ = [
    "Tag",
    "NoValueError",
    "ReaderNode",
    "CursorNode",
    "StateNode",
    "SensorNode",
    "XformReaderNode",
    "XformCursorNode",
    "LensReaderNode",
    "LensCursorNode",
    "MergeReaderNode",
    "MergeCursorNode",
    "mapping",
    "filtering",
    "comp",
    "update",
    "make_state_node",
    "make_sensor_node",
    "make_xform_reader_node",
    "make_xform_cursor_node",
    "make_lens_reader_node",
    "make_lens_cursor_node",
    "make_merge_reader_node",
    "make_merge_cursor_node",
]

Transducer = Callable[[Callable[..., Any]], Callable[..., Any]]


class Tag(Enum):
    """How a state propagates the values written to it."""

    TRANSACTIONAL = "transactional"
    AUTOMATIC = "automatic"
    ENABLE_FUTURES = "enable_futures"


class NoValueError(Exception):
    """Raised when a transformation has produced no value yet."""

    def __init__(self, message: str = "no_value_error") -> None:
        super().__init__(message)


class _NoValue:
    def __repr__(self) -> str:
        return "<no value>"


_NO_VALUE = _NoValue()


def _tuplify(*values: Any) -> Any:
    return values[0] if len(values) == 1 else values


def _current_from(parents: Iterable[ReaderNode]) -> Any:
    return _tuplify(*(parent.current() for parent in parents))


class _Observers(Signal):
    def clear(self) -> None:
        """Detach every slot."""
        for slot in list(self._slots):
            self.remove(slot)


class ReaderNode:
    """A node whose value can be read and observed."""

    def __init__(self, value: Any, parents: Iterable[ReaderNode] = ()) -> None:
        self._current = value
        self._last = value
        self.parents: tuple[ReaderNode, ...] = tuple(parents)
        self._children: list[weakref.ref[ReaderNode]] = []
        self._observers = _Observers()
        self._needs_send_down = False
        self._needs_notify = False
        weakref.finalize(self, self._observers.clear)

    def last(self) -> Any:
        """The value visible to readers since the last ``send_down``."""
        return self._last

    def current(self) -> Any:
        """The staged value, possibly not yet visible."""
        return self._current

    def push_down(self, value: Any) -> None:
        """Stage ``value`` as the current value if it differs."""
        if not (value == self._current):
            self._current = value
            self._needs_send_down = True

    def _live_children(self) -> list[ReaderNode]:
        pairs = [(ref, ref()) for ref in self._children]
        self._children = [ref for ref, node in pairs if node is not None]
        return [node for _, node in pairs if node is not None]

    def send_down(self) -> None:
        """Recompute, make the staged value visible and propagate to children."""
        self.recompute()
        if self._needs_send_down:
            self._last = self._current
            self._needs_send_down = False
            self._needs_notify = True
            for child in self._live_children():
                child.send_down()

    def notify(self) -> None:
        """Call observers once per visible change, then notify children."""
        if self._needs_notify and not self._needs_send_down:
            self._needs_notify = False
            self._observers(self._last)
            for child in self._live_children():
                child.notify()

    def recompute(self) -> None:
        """Derive the current value from the parents; roots have nothing to do."""

    def observers(self) -> Signal:
        """The signal called with the new value on each notification."""
        return self._observers

    def link(self, child: ReaderNode) -> None:
        """Register ``child`` to follow this node; it is held weakly."""
        self._children.append(weakref.ref(child))


class CursorNode(ReaderNode):
    """A node that also accepts values written back towards its roots."""

    def send_up(self, value: Any) -> None:
        """Write ``value`` through this node towards its roots."""
        self.push_up(value)

    def push_up(self, value: Any) -> None:
        """Hand ``value`` to the parent, or its parts to each parent."""
        if not self.parents:
            raise RuntimeError("node has no parents to push values up to")
        if len(self.parents) == 1:
            self.parents[0].send_up(value)
        else:
            for parent, part in zip(self.parents, value, strict=True):
                parent.send_up(part)

    def refresh(self) -> None:
        """Bring the current value up to date with the parents' current values."""
        for parent in self.parents:
            parent.refresh()
        self.recompute()


class StateNode(CursorNode):
    """A root node holding a value that is written directly."""

    def __init__(self, value: Any, tag: Tag = Tag.TRANSACTIONAL) -> None:
        super().__init__(value)
        self.tag = tag

    def send_up(self, value: Any) -> None:
        self.push_down(value)
        if self.tag is Tag.AUTOMATIC:
            self.send_down()
            self.notify()


class SensorNode(ReaderNode):
    """A root node that samples a function on each ``send_down``."""

    def __init__(self, sensor: Callable[[], Any]) -> None:
        super().__init__(sensor())
        self._sensor = sensor

    def recompute(self) -> None:
        self.push_down(self._sensor())


def _last_rf(_state: Any, *inputs: Any) -> Any:
    return _tuplify(*inputs)


def _send_down_rf(node: ReaderNode, *inputs: Any) -> ReaderNode:
    node.push_down(_tuplify(*inputs))
    return node


def _send_up_rf(node: CursorNode, *inputs: Any) -> CursorNode:
    node.push_up(_tuplify(*inputs))
    return node


class XformReaderNode(ReaderNode):
    """A node whose value is the parents' values run through a transducer."""

    def __init__(
        self,
        xform: Transducer,
        parents: Iterable[ReaderNode],
        default: Any = _NO_VALUE,
    ) -> None:
        parents = tuple(parents)
        initial = xform(_last_rf)(_NO_VALUE, *(p.current() for p in parents))
        if initial is _NO_VALUE:
            if default is _NO_VALUE:
                raise NoValueError()
            initial = default
        super().__init__(initial, parents)
        self._down_step = xform(_send_down_rf)

    def recompute(self) -> None:
        self._down_step(self, *(parent.current() for parent in self.parents))


class XformCursorNode(XformReaderNode, CursorNode):
    """A transducer node with a second transducer for writing back."""

    def __init__(
        self,
        xform: Transducer,
        wxform: Transducer,
        parents: Iterable[CursorNode],
        default: Any = _NO_VALUE,
    ) -> None:
        super().__init__(xform, parents, default)
        self._up_step = wxform(_send_up_rf)

    def send_up(self, value: Any) -> None:
        self._up_step(self, value)


class LensReaderNode(ReaderNode):
    """A node viewing its parents' values through a lens."""

    def __init__(self, lens: Lens, parents: Iterable[ReaderNode]) -> None:
        parents = tuple(parents)
        super().__init__(view(lens, _current_from(parents)), parents)
        self._lens = lens

    def recompute(self) -> None:
        self.push_down(view(self._lens, _current_from(self.parents)))


class LensCursorNode(LensReaderNode, CursorNode):
    """A lens node that writes back by setting through the lens."""

    def send_up(self, value: Any) -> None:
        self.refresh()
        self.push_up(put(self._lens, _current_from(self.parents), value))


class MergeReaderNode(ReaderNode):
    """A node whose value is the tuple of its parents' values."""

    def __init__(self, parents: Iterable[ReaderNode]) -> None:
        parents = tuple(parents)
        super().__init__(_current_from(parents), parents)

    def recompute(self) -> None:
        self.push_down(_current_from(self.parents))


class MergeCursorNode(MergeReaderNode, CursorNode):
    """A merge node that splits written tuples among its parents."""

    def send_up(self, value: Any) -> None:
        self.push_up(value)


def mapping(fn: Callable[..., Any]) -> Transducer:
    """A transducer applying ``fn`` to the inputs."""

    def xform(step: Callable[..., Any]) -> Callable[..., Any]:
        def reduce(state: Any, *inputs: Any) -> Any:
            return step(state, fn(*inputs))

        return reduce

    return xform


def filtering(pred: Callable[..., bool]) -> Transducer:
    """A transducer passing on only the inputs that satisfy ``pred``."""

    def xform(step: Callable[..., Any]) -> Callable[..., Any]:
        def reduce(state: Any, *inputs: Any) -> Any:
            return step(state, *inputs) if pred(*inputs) else state

        return reduce

    return xform


def comp(*args: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose functions right to left; with transducers, inputs flow left to right."""

    def composed(value: Any) -> Any:
        for fn in reversed(args):
            value = fn(value)
        return value

    return composed


def update(updater: Callable[..., Any]) -> Transducer:
    """A write transducer that rebuilds the parents' value from the input."""

    def xform(step: Callable[..., Any]) -> Callable[..., Any]:
        def reduce(node: CursorNode, *inputs: Any) -> Any:
            node.refresh()
            return step(node, updater(_current_from(node.parents), *inputs))

        return reduce

    return xform


def _link_to_parents(node: ReaderNode) -> ReaderNode:
    for parent in node.parents:
        parent.link(node)
    return node


def make_state_node(value: Any, tag: Tag = Tag.TRANSACTIONAL) -> StateNode:
    return StateNode(value, tag)


def make_sensor_node(sensor: Callable[[], Any]) -> SensorNode:
    return SensorNode(sensor)


def make_xform_reader_node(
    xform: Transducer, parents: Iterable[ReaderNode]
) -> XformReaderNode:
    return _link_to_parents(XformReaderNode(xform, parents))


def make_xform_cursor_node(
    xform: Transducer, wxform: Transducer, parents: Iterable[CursorNode]
) -> XformCursorNode:
    return _link_to_parents(XformCursorNode(xform, wxform, parents))


def make_lens_reader_node(lens: Lens, parents: Iterable[ReaderNode]) -> LensReaderNode:
    return _link_to_parents(LensReaderNode(lens, parents))


def make_lens_cursor_node(lens: Lens, parents: Iterable[CursorNode]) -> LensCursorNode:
    return _link_to_parents(LensCursorNode(lens, parents))


def make_merge_reader_node(parents: Iterable[ReaderNode]) -> MergeReaderNode:
    return _link_to_parents(MergeReaderNode(parents))


def make_merge_cursor_node(parents: Iterable[CursorNode]) -> MergeCursorNode:
    return _link_to_parents(MergeCursorNode(parents))