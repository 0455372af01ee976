from __future__ import annotations

import zipfile
from functools import partial
from pathlib import Path

import pandas as pd

from ..errors import CorruptFileError
from ..frame import FrameSource
from ..registry import NOT_IN_FORMAT, Match
from ..utils.logging import logger

NAME = "xlsx"
ZIP_MAGIC = b"PK\x03\x04"
WORKBOOK_PART = "xl/workbook.xml"


def _is_workbook(path: Path) -> bool:
    """Return True when *path* is an OOXML spreadsheet package.

    Raises :class:`CorruptFileError` if the file claims to be a ZIP archive
    but cannot be read as one.
    """
    with path.open("rb") as fh:
        if fh.read(len(ZIP_MAGIC)) != ZIP_MAGIC:
            return False
    try:
        with zipfile.ZipFile(path) as zf:
            return WORKBOOK_PART in zf.namelist()
    except zipfile.BadZipFile as exc:
        raise CorruptFileError(str(path), NAME, str(exc)) from exc


def _parse_sheet(book: pd.ExcelFile, sheet: str) -> pd.DataFrame:
    return book.parse(sheet, header=None, dtype=object)


def open_xlsx(filename: str | Path) -> FrameSource | Match:
    """Open an ``.xlsx`` workbook; each worksheet becomes a collection.

    Sheets are parsed when their collection is first read.
    """
    path = Path(filename)
    if not _is_workbook(path):
        return NOT_IN_FORMAT
    try:
        book = pd.ExcelFile(path, engine="openpyxl")
    except Exception as exc:  # noqa: BLE001 - any reader failure means a broken workbook
        raise CorruptFileError(str(path), NAME, str(exc)) from exc

    logger.debug("Opened workbook %s with sheets %s", path, book.sheet_names)
    loaders = {sheet: partial(_parse_sheet, book, sheet) for sheet in book.sheet_names}
    return FrameSource(path.name, loaders, closer=book.close)


__all__ = ["NAME", "open_xlsx"]
