"""Lenses, signals, dataflow nodes, reactive cursors and a snake game model."""

__version__ = "0.1.0"

__all__ = [
    "cursors",
    "enums",
    "lenses",
    "nodes",
    "signal",
    "snake",
    "watchable",
]