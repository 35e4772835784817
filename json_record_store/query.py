from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .utils import DateLike, canonical_json, parse_iso_datetime
from .errors import InvalidDateError

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]


def by_id(rec_id: int) -> Predicate:
    def match(rec: Record) -> bool:
        return rec.get("id") == rec_id
    return match


def created_prefix(prefix: str) -> Predicate:
    """
    Hierarchical date filter: "2024", "2024-01", "2024-01-01T00" ...
    Works because `created` is a zero-padded ISO-8601 string.
    """
    def match(rec: Record) -> bool:
        created = rec.get("created")
        return isinstance(created, str) and created.startswith(prefix)
    return match


def data_contains(keyword: str) -> Predicate:
    """
    Substring search over the serialized payload. Key names and JSON punctuation
    are part of the searched text, so {"x": 1} matches "x" as well as "1".
    """
    def match(rec: Record) -> bool:
        return keyword in canonical_json(rec.get("data"))
    return match


def created_between(start: DateLike, end: DateLike) -> Predicate:
    """
    Inclusive range on `created`. Bounds are parsed here, before any record is
    scanned, so a malformed bound raises InvalidDateError.
    """
    lo = parse_iso_datetime(start)
    hi = parse_iso_datetime(end)

    def match(rec: Record) -> bool:
        try:
            ts = parse_iso_datetime(rec.get("created"))
        except InvalidDateError:
            return False
        return lo <= ts <= hi
    return match


def apply(records: Iterable[Record], predicate: Predicate) -> List[Record]:
    return [rec for rec in records if predicate(rec)]


def max_id(records: Iterable[Record]) -> int:
    best = 0
    for rec in records:
        rid = rec.get("id")
        # bool is an int subclass; a stray true/false in the file is not an id
        if isinstance(rid, int) and not isinstance(rid, bool) and rid > best:
            best = rid
    return best
