"""Exception types raised by grate and its backends."""

from __future__ import annotations

from typing import Sequence


class GrateError(Exception):
    """Base class for all grate errors."""


class DuplicateRegistrationError(GrateError):
    """A backend name was registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"grate: source {name!r} already registered")
        self.name = name


class UnsupportedFormatError(GrateError):
    """No registered backend recognized the file."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"grate: file format is not known/supported: {filename}")
        self.filename = filename


class CorruptFileError(GrateError):
    """A backend recognized the file but could not read it."""

    def __init__(self, path: str, backend: str, reason: str) -> None:
        super().__init__(f"{backend}: cannot read {path}: {reason}")
        self.path = path
        self.backend = backend
        self.reason = reason


class SourceClosedError(GrateError):
    """Operation attempted on a closed source."""


class CollectionNotFoundError(GrateError, KeyError):
    """The source has no collection with the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"grate: collection {self.name!r} not found"


class CursorError(GrateError):
    """Errors recorded on a collection cursor."""


class CursorStateError(CursorError):
    """Field extraction before the first ``next()`` or after exhaustion."""


class ArityError(CursorError):
    """Number of scan destinations differs from the record's field count."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"scan: record has {expected} fields, got {got} destinations")
        self.expected = expected
        self.got = got


class TypeMismatchError(CursorError):
    """One or more fields could not be converted to the requested kind.

    ``failures`` holds ``(index, kind, value, reason)`` tuples, one per
    failing destination slot.
    """

    def __init__(self, failures: Sequence[tuple]) -> None:
        self.failures = list(failures)
        parts = [
            f"field {idx}: cannot convert {value!r} to {kind}: {reason}"
            for idx, kind, value, reason in self.failures
        ]
        super().__init__("scan: " + "; ".join(parts))


__all__ = [
    "GrateError",
    "DuplicateRegistrationError",
    "UnsupportedFormatError",
    "CorruptFileError",
    "SourceClosedError",
    "CollectionNotFoundError",
    "CursorError",
    "CursorStateError",
    "ArityError",
    "TypeMismatchError",
]
