"""Typed destination slots and cell conversion rules for ``Collection.scan``."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable

import numpy as np
import pandas as pd

from .utils.settings import settings

TRUE_STRINGS = frozenset({"1", "t", "true", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"0", "f", "false", "no", "n", "off"})


class Kind(Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    DATETIME = "datetime"

    def __str__(self) -> str:
        return self.value


_TYPE_KINDS = {
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT,
    str: Kind.STRING,
    datetime: Kind.DATETIME,
}


@dataclass
class Dest:
    """A destination slot for one field of a scanned record.

    ``kind`` may be given as a :class:`Kind` or as the matching Python type,
    so ``Dest(int)`` and ``Dest(Kind.INT)`` are equivalent.
    """

    kind: Kind
    value: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, Kind):
            try:
                self.kind = _TYPE_KINDS[self.kind]
            except (KeyError, TypeError):
                raise TypeError(f"unsupported scan destination kind: {self.kind!r}") from None


def is_missing(value: Any) -> bool:
    """Return True for empty cells (None, NaN, NaT, NA)."""
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def format_value(value: Any) -> str:
    """Render a cell the way :meth:`Collection.strings` reports it."""
    if is_missing(value):
        return ""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)):
        value = float(value)
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    if isinstance(value, np.integer):
        return str(int(value))
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.time() == datetime.min.time() and value.tzinfo is None:
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError("not a boolean")


def _to_int(value: Any) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise ValueError("boolean is not an integer")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        if float(value).is_integer():
            return int(value)
        raise ValueError("has a fractional part")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            number = float(text)
            if number.is_integer():
                return int(number)
            raise ValueError("has a fractional part") from None
    raise ValueError("not a number")


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, np.bool_)):
        raise ValueError("boolean is not a number")
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise ValueError("not a number")


def _to_datetime(value: Any, formats: Iterable[str] | None = None) -> datetime:
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if formats is None:
            formats = settings.get_list("DATETIME_FORMATS")
        for fmt in formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        return datetime.fromisoformat(text)
    raise ValueError("not a date/time")


def convert(value: Any, kind: Kind) -> Any:
    """Convert a cell value to *kind*, raising ``ValueError`` if impossible."""
    if kind is Kind.STRING:
        return format_value(value)
    if is_missing(value):
        raise ValueError("empty cell")
    if kind is Kind.BOOL:
        return _to_bool(value)
    if kind is Kind.INT:
        return _to_int(value)
    if kind is Kind.FLOAT:
        return _to_float(value)
    if kind is Kind.DATETIME:
        return _to_datetime(value)
    raise ValueError(f"unknown kind {kind!r}")


__all__ = ["Kind", "Dest", "convert", "format_value", "is_missing"]
