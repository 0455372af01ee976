"""DataFrame-backed Source and Collection shared by the bundled backends."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from .errors import (
    ArityError,
    CollectionNotFoundError,
    CursorStateError,
    SourceClosedError,
    TypeMismatchError,
)
from .scan import Dest, convert, format_value, is_missing
from .utils.logging import logger

FrameLoader = Callable[[], pd.DataFrame]

_UNSTARTED = -1


def _drop_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose cells are all missing or empty strings."""
    if df.empty:
        return df
    blank = df.apply(lambda col: col.map(lambda v: is_missing(v) or v == ""))
    return df[~blank.all(axis=1)]


class FrameCollection:
    """Cursor over the rows of a lazily loaded :class:`pandas.DataFrame`.

    Every row is a record, including any header row. The frame is loaded on
    the first :meth:`next` or :meth:`is_empty` call; a loader failure is
    recorded in :meth:`err` and the collection then behaves as empty and
    exhausted.

    :meth:`strings` on an invalid cursor returns ``[]`` and records a
    :class:`~grate.errors.CursorStateError`; :meth:`scan` raises it. There is
    no internal locking, so a collection must have a single owner.
    """

    def __init__(self, loader: FrameLoader, name: str = "") -> None:
        self.name = name
        self._loader = loader
        self._rows: Optional[List[tuple]] = None
        self._pos = _UNSTARTED
        self._err: Optional[Exception] = None
        self._load_error: Optional[Exception] = None

    def _load(self) -> List[tuple]:
        if self._rows is None:
            try:
                df = _drop_blank_rows(self._loader())
            except Exception as exc:  # noqa: BLE001 - surfaced through err()
                logger.debug("Loading collection %s failed: %s", self.name, exc)
                self._load_error = exc
                self._rows = []
            else:
                self._rows = list(df.itertuples(index=False, name=None))
        return self._rows

    def _current(self) -> tuple:
        rows = self._rows
        if rows is None or self._pos == _UNSTARTED:
            raise CursorStateError("next() must be called before reading a record")
        if self._pos >= len(rows):
            raise CursorStateError("collection is exhausted")
        return rows[self._pos]

    def next(self) -> bool:
        rows = self._load()
        if self._load_error is not None:
            self._err = self._load_error
            return False
        self._err = None
        if self._pos < len(rows):
            self._pos += 1
        return self._pos < len(rows)

    def strings(self) -> list[str]:
        self._err = None
        try:
            record = self._current()
        except CursorStateError as exc:
            self._err = exc
            return []
        return [format_value(v) for v in record]

    def scan(self, *dests: Dest) -> None:
        self._err = None
        try:
            for idx, dest in enumerate(dests):
                if not isinstance(dest, Dest):
                    raise TypeError(
                        f"scan destination {idx} is {type(dest).__name__}, expected Dest"
                    )
            record = self._current()
            if len(dests) != len(record):
                raise ArityError(len(record), len(dests))
            values: list[Any] = []
            failures = []
            for idx, (dest, cell) in enumerate(zip(dests, record)):
                try:
                    values.append(convert(cell, dest.kind))
                except (ValueError, TypeError, OverflowError) as exc:
                    failures.append((idx, dest.kind, cell, str(exc)))
            if failures:
                raise TypeMismatchError(failures)
        except (TypeError, CursorStateError, ArityError, TypeMismatchError) as exc:
            self._err = exc
            raise
        for dest, value in zip(dests, values):
            dest.value = value

    def is_empty(self) -> bool:
        rows = self._load()
        if self._load_error is not None:
            self._err = self._load_error
        return len(rows) == 0

    def err(self) -> Exception | None:
        return self._err

    def __repr__(self) -> str:
        return f"FrameCollection(name={self.name!r})"


class FrameSource:
    """Source over named frame loaders, optionally owning a closable handle."""

    def __init__(
        self,
        name: str,
        loaders: Dict[str, FrameLoader],
        closer: Callable[[], None] | None = None,
    ) -> None:
        self.name = name
        self._loaders = dict(loaders)
        self._closer = closer
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise SourceClosedError(f"source {self.name!r} is closed")

    def list(self) -> list[str]:
        self._check_open()
        return list(self._loaders)

    def get(self, name: str) -> FrameCollection:
        self._check_open()
        try:
            loader = self._loaders[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None
        return FrameCollection(loader, name=name)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._closer is not None:
            self._closer()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> FrameSource:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FrameSource(name={self.name!r}, collections={list(self._loaders)!r})"


__all__ = ["FrameCollection", "FrameSource", "FrameLoader"]
