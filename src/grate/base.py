from __future__ import annotations

from typing import Protocol, runtime_checkable

from .scan import Dest


@runtime_checkable
class Collection(Protocol):
    """Forward-only cursor over the records of one table.

    A collection starts unstarted; :meth:`next` moves it to a record and
    eventually to exhaustion. Field extraction is only valid while a record
    is current. Errors are recorded and reported by :meth:`err`.
    """

    def next(self) -> bool:
        ...

    def strings(self) -> list[str]:
        ...

    def scan(self, *dests: Dest) -> None:
        ...

    def is_empty(self) -> bool:
        ...

    def err(self) -> Exception | None:
        ...


@runtime_checkable
class Source(Protocol):
    """An opened tabular file exposing named collections."""

    def list(self) -> list[str]:
        ...

    def get(self, name: str) -> Collection:
        ...

    def close(self) -> None:
        ...


__all__ = ["Collection", "Source"]
