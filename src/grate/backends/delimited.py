from __future__ import annotations

import codecs
import csv
from pathlib import Path

import pandas as pd

from ..errors import CorruptFileError
from ..frame import FrameSource
from ..registry import NOT_IN_FORMAT, Match
from ..utils.logging import logger
from ..utils.settings import AppSettings, settings as default_settings

NAME = "delimited"
EXTENSIONS = (".csv", ".tsv", ".tab", ".txt")
DELIMITERS = ",\t;|"


def _read_head(path: Path, size: int) -> bytes:
    with path.open("rb") as fh:
        return fh.read(size)


def _decode_head(head: bytes, encoding: str) -> str | None:
    """Decode *head* tolerating a multibyte sequence cut at the end."""
    if b"\x00" in head:
        return None
    try:
        return codecs.getincrementaldecoder(encoding)().decode(head, final=False)
    except UnicodeDecodeError:
        return None


def default_delimiter(head: str, suffix: str = "") -> str | None:
    """Return the separator to force, or None to let pandas sniff it.

    pandas sniffs the separator from the first line of the file; a first
    line without any candidate delimiter cannot be sniffed, so the extension
    decides instead.
    """
    lines = [line for line in head.splitlines() if line.strip()]
    if lines and any(sep in lines[0] for sep in DELIMITERS):
        return None
    if suffix in (".tsv", ".tab"):
        return "\t"
    return ","


def read_delimited(path: Path, sep: str | None, encoding: str) -> pd.DataFrame:
    """Read a delimited file keeping every cell as text.

    The first row fixes the column count. Shorter rows are padded with empty
    cells, while a row with more fields than the first one is reported as a
    :class:`~grate.errors.CorruptFileError`.
    """
    try:
        return pd.read_csv(
            path,
            sep=sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=encoding,
            engine="python",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, csv.Error, UnicodeDecodeError) as exc:
        raise CorruptFileError(str(path), NAME, str(exc)) from exc


def open_delimited(
    filename: str | Path, settings: AppSettings | None = None
) -> FrameSource | Match:
    """Open a delimited text file as a single-collection source.

    The file is parsed eagerly so malformed content is reported by ``open``;
    its collection is named after the file name.
    """
    settings = settings or default_settings
    path = Path(filename)
    encoding = settings.get_str("ENCODING")
    head = _decode_head(_read_head(path, settings.get_int("SNIFF_BYTES", 4096)), encoding)
    if head is None:
        return NOT_IN_FORMAT
    suffix = path.suffix.lower()
    if suffix not in EXTENSIONS and not any(sep in head for sep in DELIMITERS):
        return NOT_IN_FORMAT

    sep = default_delimiter(head, suffix)
    logger.debug("Reading %s as delimited text (sep=%r)", path, sep)
    df = read_delimited(path, sep, encoding)
    return FrameSource(path.name, {path.name: lambda: df})


__all__ = ["NAME", "EXTENSIONS", "default_delimiter", "open_delimited", "read_delimited"]
