from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Union

from .base import Source
from .errors import DuplicateRegistrationError, UnsupportedFormatError
from .utils.logging import logger


class Match(Enum):
    """Non-source outcomes an opener may return."""

    NOT_IN_FORMAT = "not_in_format"


#: Returned by an opener when the file is not in its format. Compare by identity.
NOT_IN_FORMAT = Match.NOT_IN_FORMAT

Filename = Union[str, Path]
OpenFunc = Callable[[Filename], Union[Source, Match]]


class Registry:
    """Ordered table of format openers tried by :meth:`open`.

    Openers are tried in registration order. An opener returns a
    :class:`~grate.base.Source` when it accepts the file, returns
    :data:`NOT_IN_FORMAT` when the file is not its format, and raises for
    anything else (corrupt data, I/O failure). Registration is expected to
    finish before dispatch starts; the table is never shrunk.
    """

    def __init__(self) -> None:
        self._openers: dict[str, OpenFunc] = {}

    def register(self, name: str, opener: OpenFunc) -> None:
        """Add *opener* under *name*; names must be unique."""
        if not isinstance(name, str) or not name:
            raise ValueError("backend name must be a non-empty string")
        if not callable(opener):
            raise TypeError(f"opener for {name!r} is not callable")
        if name in self._openers:
            raise DuplicateRegistrationError(name)
        self._openers[name] = opener
        logger.debug("Registered backend %s", name)

    def get(self, name: str) -> OpenFunc:
        return self._openers[name]

    def names(self) -> tuple[str, ...]:
        return tuple(self._openers)

    def __contains__(self, name: object) -> bool:
        return name in self._openers

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._openers))

    def __len__(self) -> int:
        return len(self._openers)

    def open(self, filename: Filename) -> Source:
        """Open *filename* with the first backend that accepts it."""
        for name, opener in tuple(self._openers.items()):
            logger.debug("Trying backend %s for %s", name, filename)
            try:
                result = opener(filename)
            except Exception as exc:
                logger.warning("Backend %s failed on %s: %s", name, filename, exc)
                raise
            if result is NOT_IN_FORMAT:
                continue
            if not isinstance(result, Source):
                raise TypeError(f"backend {name!r} returned {result!r} instead of a source")
            logger.debug("Backend %s opened %s", name, filename)
            return result
        raise UnsupportedFormatError(str(filename))


default_registry = Registry()


def register(name: str, opener: OpenFunc) -> None:
    """Register *opener* in the process-wide registry."""
    default_registry.register(name, opener)


def open_source(filename: Filename) -> Source:
    """Open a tabular data file using the process-wide registry."""
    return default_registry.open(filename)


__all__ = [
    "Match",
    "NOT_IN_FORMAT",
    "OpenFunc",
    "Registry",
    "default_registry",
    "register",
    "open_source",
]
