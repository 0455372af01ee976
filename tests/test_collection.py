from __future__ import annotations

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from grate import (
    ArityError,
    Collection,
    CollectionNotFoundError,
    CursorStateError,
    Dest,
    Kind,
    SourceClosedError,
    TypeMismatchError,
)
from grate.frame import FrameCollection, FrameSource


def _collection(rows) -> FrameCollection:
    df = pd.DataFrame(rows, dtype=object)
    return FrameCollection(lambda: df, name="t")


def test_frame_collection_satisfies_protocol():
    assert isinstance(_collection([["a"]]), Collection)


def test_iteration_reports_clean_end():
    coll = _collection([["a", "1"], ["b", "2"]])
    seen = []
    while coll.next():
        seen.append(coll.strings())
    assert seen == [["a", "1"], ["b", "2"]]
    assert coll.err() is None
    assert coll.next() is False
    assert coll.err() is None


def test_strings_is_idempotent():
    coll = _collection([["x", 1.5, None]])
    assert coll.next()
    first = coll.strings()
    assert coll.strings() == first == ["x", "1.5", ""]


def test_strings_before_next_records_error():
    coll = _collection([["a"]])
    assert coll.strings() == []
    assert isinstance(coll.err(), CursorStateError)


def test_strings_after_exhaustion_records_error():
    coll = _collection([["a"]])
    assert coll.next()
    assert not coll.next()
    assert coll.strings() == []
    assert isinstance(coll.err(), CursorStateError)


def test_empty_collection():
    coll = FrameCollection(lambda: pd.DataFrame(), name="Sheet1")
    assert coll.is_empty()
    assert coll.next() is False
    assert coll.err() is None
    assert coll.is_empty()


def test_blank_rows_do_not_count_as_records():
    coll = _collection([["", None], [np.nan, ""]])
    assert coll.is_empty()


def test_is_empty_answerable_after_iteration():
    coll = _collection([["a"]])
    while coll.next():
        pass
    assert coll.is_empty() is False


def test_loader_failure_surfaces_through_err():
    failure = OSError("disk went away")

    def loader():
        raise failure

    coll = FrameCollection(loader, name="broken")
    assert coll.next() is False
    assert coll.err() is failure
    assert coll.next() is False
    assert coll.err() is failure


def test_scan_all_kinds():
    when = datetime(2021, 3, 4, 5, 6, 7)
    coll = _collection([[True, 42, 2.5, "text", when]])
    assert coll.next()
    dests = [Dest(bool), Dest(int), Dest(float), Dest(str), Dest(datetime)]
    coll.scan(*dests)
    assert [d.value for d in dests] == [True, 42, 2.5, "text", when]
    assert coll.err() is None


def test_scan_converts_text_cells():
    coll = _collection([["yes", " 7 ", "3.25", "2020-01-02"]])
    assert coll.next()
    flag, count, ratio, day = Dest(Kind.BOOL), Dest(Kind.INT), Dest(Kind.FLOAT), Dest(Kind.DATETIME)
    coll.scan(flag, count, ratio, day)
    assert flag.value is True
    assert count.value == 7
    assert ratio.value == 3.25
    assert day.value == datetime(2020, 1, 2)


def test_scan_mismatch_leaves_destinations_untouched():
    coll = _collection([["12", "abc"]])
    assert coll.next()
    good, bad = Dest(int, value=-1), Dest(float, value=-1.0)
    with pytest.raises(TypeMismatchError) as info:
        coll.scan(good, bad)
    assert good.value == -1
    assert bad.value == -1.0
    assert [f[0] for f in info.value.failures] == [1]
    assert coll.err() is info.value


def test_failed_scan_does_not_invalidate_cursor():
    coll = _collection([["abc"], ["5"]])
    assert coll.next()
    with pytest.raises(TypeMismatchError):
        coll.scan(Dest(int))
    assert coll.next()
    assert coll.err() is None
    dest = Dest(int)
    coll.scan(dest)
    assert dest.value == 5


def test_scan_arity_error():
    coll = _collection([["a", "b"]])
    assert coll.next()
    with pytest.raises(ArityError):
        coll.scan(Dest(str))
    assert isinstance(coll.err(), ArityError)


def test_scan_before_next_raises_state_error():
    coll = _collection([["a"]])
    with pytest.raises(CursorStateError):
        coll.scan(Dest(str))
    assert isinstance(coll.err(), CursorStateError)


def test_source_get_returns_independent_cursors():
    df = pd.DataFrame([["a"], ["b"]])
    src = FrameSource("book", {"Sheet1": lambda: df})
    one, two = src.get("Sheet1"), src.get("Sheet1")
    assert one.next() and one.next()
    assert two.next()
    assert one.strings() == ["b"]
    assert two.strings() == ["a"]


def test_source_missing_collection():
    src = FrameSource("book", {"Sheet1": pd.DataFrame})
    with pytest.raises(CollectionNotFoundError):
        src.get("Sheet2")
    with pytest.raises(KeyError):
        src.get("Sheet2")


def test_source_close_runs_closer_once():
    calls = []
    with FrameSource("book", {"Sheet1": pd.DataFrame}, closer=lambda: calls.append(1)) as src:
        assert src.list() == ["Sheet1"]
    src.close()
    assert calls == [1]
    assert src.closed
    with pytest.raises(SourceClosedError):
        src.list()
    with pytest.raises(SourceClosedError):
        src.get("Sheet1")


@pytest.mark.parametrize("bad", [5, "x", int])
def test_scan_rejects_non_dest_arguments(bad):
    coll = _collection([["7"]])
    assert coll.next()
    with pytest.raises(TypeError):
        coll.scan(bad)
    assert isinstance(coll.err(), TypeError)
    assert coll.strings() == ["7"]
