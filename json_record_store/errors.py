from __future__ import annotations
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    IO = "io"
    CORRUPT = "corrupt"
    SERIALIZATION = "serialization"
    INVALID_DATE = "invalid_date"


class StoreError(Exception):
    """
    Base error of the record store. Every subclass carries an ErrorKind so
    callers inspecting `RecordStore.last_error` can branch without isinstance chains.
    """
    kind: ErrorKind = ErrorKind.IO


class ConfigurationError(StoreError):
    kind = ErrorKind.CONFIGURATION


class InvalidExtensionError(ConfigurationError, ValueError):
    def __init__(self, path: str) -> None:
        super().__init__(f'store file must have a .json extension: "{path}"')
        self.path = path


class StorageError(StoreError):
    kind = ErrorKind.IO

    def __init__(self, msg: str, path: Optional[str] = None) -> None:
        super().__init__(msg)
        self.path = path


class CorruptFileError(StoreError):
    kind = ErrorKind.CORRUPT


class SerializationError(StoreError):
    kind = ErrorKind.SERIALIZATION


class InvalidDateError(StoreError, ValueError):
    kind = ErrorKind.INVALID_DATE
