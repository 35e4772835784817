from __future__ import annotations
import asyncio
import copy
import json
import logging
import os
from typing import Any, List, Optional, Union

from .errors import CorruptFileError, InvalidExtensionError, StoreError
from .events import EventCallback, EventEmitter
from .query import Record, apply, by_id, created_between, created_prefix, data_contains, max_id
from .storage import FileStorage
from .utils import DateLike, dumps, now_iso

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class RecordStore:
    """
    Append-style record store kept in a single JSON array file.

    Records look like {"id": 1, "created": "2024-01-01T00:00:00.000Z", "data": ...}.
    Ids are max(existing) + 1. Every mutation rewrites the whole file; reads are
    served from an in-memory copy of the array once it has been loaded.
    Records handed out are deep copies; editing them never touches the cache.

    Only the constructor raises (bad extension). Every other public operation is
    fail-soft: errors are logged, stored in `last_error`, reported through
    `on_event`, and turned into False / [] / None.

    There is no locking. Two concurrent mutations on the same file can clobber
    each other; the later full-array write wins.
    """

    def __init__(
        self,
        path: PathLike,
        *,
        storage: Optional[FileStorage] = None,
        indent: Optional[int] = 2,
        on_event: Optional[EventCallback] = None,
    ) -> None:
        self.path = self._ensure_json_extension(os.fspath(path))
        self._fs = storage if storage is not None else FileStorage()
        self._indent = indent
        self._events = EventEmitter(on_event)
        self._cache: Optional[List[Record]] = None
        self.last_error: Optional[StoreError] = None
        self._create_file_if_missing()

    # ----- bootstrap -----

    @staticmethod
    def _ensure_json_extension(path: str) -> str:
        if os.path.splitext(path)[1].lower() != ".json":
            raise InvalidExtensionError(path)
        return path

    def _create_file_if_missing(self) -> bool:
        """
        Best-effort: create parent directories and an empty `[]` file.
        Returns True if the file was created. Failures are logged, not raised.
        """
        try:
            if self._fs.exists(self.path):
                log.debug('store file "%s" already exists', self.path)
                return False
            directory = os.path.dirname(self.path)
            if directory and not self._fs.exists(directory):
                self._fs.mkdir(directory)
            self._fs.write_text(self.path, dumps([]))
        except Exception as e:
            self._fail("open", e)
            return False
        log.info('store file "%s" created', self.path)
        self._events.emit("open.created", path=self.path)
        return True

    # ----- cache / error plumbing -----

    @property
    def cached(self) -> bool:
        return self._cache is not None

    def _set_cache(self, records: List[Record]) -> None:
        self._cache = records

    def _invalidate(self) -> None:
        self._cache = None

    def _fail(self, op: str, err: Exception, *, invalidate: bool = True) -> None:
        """
        Single exit for every failure path: wrap, remember, drop the cache, log, emit.
        """
        if isinstance(err, StoreError):
            log.error("%s failed [%s]: %s", op, err.kind.value, err)
        else:
            wrapped = StoreError(f"{type(err).__name__}: {err}")
            wrapped.__cause__ = err
            log.error("%s failed: %s", op, wrapped, exc_info=err)
            err = wrapped
        self.last_error = err
        if invalidate:
            self._invalidate()
        self._events.emit("error", op=op, kind=err.kind.value, msg=str(err))

    async def _load(self) -> List[Record]:
        """
        Cache hit, or read + parse the whole file and populate the cache.
        Raises StoreError subclasses; public callers map them to defaults.
        """
        if self._cache is not None:
            log.debug("serving records from cache")
            self._events.emit("read.cache_hit", count=len(self._cache))
            return self._cache
        text = await asyncio.to_thread(self._fs.read_text, self.path)
        try:
            records = json.loads(text)
        except ValueError as e:
            raise CorruptFileError(f'"{self.path}" is not valid JSON: {e}') from e
        if not isinstance(records, list):
            raise CorruptFileError(f'"{self.path}" must contain a JSON array, got {type(records).__name__}')
        if any(not isinstance(rec, dict) for rec in records):
            raise CorruptFileError(f'"{self.path}" contains non-object records')
        self._set_cache(records)
        self._events.emit("read.disk", count=len(records))
        return records

    async def _commit(self, records: List[Record], *, indent: Optional[int] = None) -> None:
        """
        Serialize the entire array and overwrite the file. The cache is rebuilt
        from the serialized text before the write, so it shares nothing with
        caller-owned payloads; a failed write leaves it to the caller's _fail() to drop.
        """
        text = dumps(records, indent=indent)
        self._set_cache(json.loads(text))
        await asyncio.to_thread(self._fs.write_text, self.path, text)

    # ----- reads -----

    async def get_all_records(self) -> List[Record]:
        self.last_error = None
        try:
            return copy.deepcopy(await self._load())
        except Exception as e:
            self._fail("read", e)
            return []

    async def get_count_json(self) -> int:
        return len(await self.get_all_records())

    async def get_first_record(self) -> Optional[Record]:
        self.last_error = None
        try:
            records = await self._load()
        except Exception as e:
            self._fail("get_first", e)
            return None
        if not records:
            log.info("store is empty, no first record")
            return None
        return copy.deepcopy(records[0])

    async def get_last_record(self) -> Optional[Record]:
        self.last_error = None
        try:
            records = await self._load()
        except Exception as e:
            self._fail("get_last", e)
            return None
        if not records:
            log.info("store is empty, no last record")
            return None
        return copy.deepcopy(records[-1])

    async def find_record_by_id(self, rec_id: int) -> Optional[Record]:
        self.last_error = None
        try:
            found = apply(await self._load(), by_id(rec_id))
        except Exception as e:
            self._fail("find_by_id", e)
            return None
        return copy.deepcopy(found[0]) if found else None

    async def find_records_by_date(self, prefix: str) -> List[Record]:
        """
        Records whose `created` starts with `prefix`: "2024", "2024-01",
        "2024-01-01", "2024-01-01T00" and so on.
        """
        self.last_error = None
        try:
            return copy.deepcopy(apply(await self._load(), created_prefix(prefix)))
        except Exception as e:
            self._fail("find_by_date", e)
            return []

    async def find_records_by_data(self, keyword: str) -> List[Record]:
        self.last_error = None
        try:
            return copy.deepcopy(apply(await self._load(), data_contains(keyword)))
        except Exception as e:
            self._fail("find_by_data", e)
            return []

    async def find_records_by_date_range(self, start: DateLike, end: DateLike) -> List[Record]:
        """
        Records with start <= created <= end. Bounds are ISO-8601 strings or
        datetimes; naive values are read as UTC. A malformed bound is reported
        as InvalidDateError through `last_error` and yields [].
        """
        self.last_error = None
        try:
            predicate = created_between(start, end)
        except Exception as e:
            # bad input, the cached data is still good
            self._fail("find_by_date_range", e, invalidate=False)
            return []
        try:
            return copy.deepcopy(apply(await self._load(), predicate))
        except Exception as e:
            self._fail("find_by_date_range", e)
            return []

    # ----- mutations -----

    async def write_record(self, payload: Any = None) -> bool:
        self.last_error = None
        try:
            records = list(await self._load())
            rec: Record = {
                "id": max_id(records) + 1,
                "created": now_iso(),
                "data": payload,
            }
            records.append(rec)
            await self._commit(records, indent=self._indent)
        except Exception as e:
            self._fail("write", e)
            return False
        log.info('record %s written to "%s"', rec["id"], self.path)
        self._events.emit("write.done", id=rec["id"], count=len(records))
        return True

    async def delete_last_record(self) -> bool:
        """
        True also when the store is already empty (nothing to do is not an error).
        """
        return await self._delete_at(-1, "delete_last")

    async def delete_first_record(self) -> bool:
        """
        True also when the store is already empty (nothing to do is not an error).
        """
        return await self._delete_at(0, "delete_first")

    async def _delete_at(self, index: int, op: str) -> bool:
        self.last_error = None
        try:
            records = list(await self._load())
            if not records:
                log.info("store is empty, nothing to delete")
                self._events.emit("delete.empty", op=op)
                return True
            removed = records.pop(index)
            await self._commit(records, indent=self._indent)
        except Exception as e:
            self._fail(op, e)
            return False
        log.info('record %s deleted from "%s"', removed.get("id"), self.path)
        self._events.emit("delete.done", op=op, id=removed.get("id"), count=len(records))
        return True

    async def delete_record_by_id(self, rec_id: int) -> bool:
        self.last_error = None
        try:
            records = list(await self._load())
            match = by_id(rec_id)
            index = next((i for i, rec in enumerate(records) if match(rec)), None)
            if index is None:
                log.info("record %s not found", rec_id)
                return False
            del records[index]
            await self._commit(records, indent=self._indent)
        except Exception as e:
            self._fail("delete_by_id", e)
            return False
        log.info('record %s deleted from "%s"', rec_id, self.path)
        self._events.emit("delete.done", op="delete_by_id", id=rec_id, count=len(records))
        return True

    async def delete_all_records(self) -> bool:
        # No load: the file is reset regardless of its current contents
        self.last_error = None
        try:
            await self._commit([])
        except Exception as e:
            self._fail("delete_all", e)
            return False
        log.info('all records deleted from "%s"', self.path)
        self._events.emit("delete.done", op="delete_all", count=0)
        return True

    def clear_cache(self) -> None:
        self._invalidate()
        log.debug("cache cleared")
        self._events.emit("cache.cleared")