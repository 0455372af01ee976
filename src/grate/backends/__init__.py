from __future__ import annotations

from ..registry import OpenFunc, Registry
from .delimited import open_delimited
from .excel import open_xlsx

# Binary signatures first; delimited text accepts almost anything textual.
BUILTIN_BACKENDS: tuple[tuple[str, OpenFunc], ...] = (
    ("xlsx", open_xlsx),
    ("delimited", open_delimited),
)


def register_builtin(registry: Registry) -> Registry:
    """Register the bundled backends into *registry* and return it."""
    for name, opener in BUILTIN_BACKENDS:
        registry.register(name, opener)
    return registry


__all__ = ["BUILTIN_BACKENDS", "open_delimited", "open_xlsx", "register_builtin"]
