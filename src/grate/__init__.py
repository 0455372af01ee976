"""Uniform access to tabular data files through pluggable format backends."""

from .base import Collection, Source
from .errors import (
    ArityError,
    CollectionNotFoundError,
    CorruptFileError,
    CursorError,
    CursorStateError,
    DuplicateRegistrationError,
    GrateError,
    SourceClosedError,
    TypeMismatchError,
    UnsupportedFormatError,
)
from .registry import (
    NOT_IN_FORMAT,
    Match,
    OpenFunc,
    Registry,
    default_registry,
    open_source,
    register,
)
from .scan import Dest, Kind
from .backends import register_builtin
from .utils.logging import configure_logging

__version__ = "0.1.0"

configure_logging()
register_builtin(default_registry)

open = open_source

__all__ = [
    "ArityError",
    "Collection",
    "CollectionNotFoundError",
    "CorruptFileError",
    "CursorError",
    "CursorStateError",
    "Dest",
    "DuplicateRegistrationError",
    "GrateError",
    "Kind",
    "Match",
    "NOT_IN_FORMAT",
    "OpenFunc",
    "Registry",
    "Source",
    "SourceClosedError",
    "TypeMismatchError",
    "UnsupportedFormatError",
    "default_registry",
    "open",
    "open_source",
    "register",
    "register_builtin",
]
