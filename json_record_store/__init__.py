from .store import RecordStore
from .storage import FileStorage
from .errors import (
    ErrorKind,
    StoreError,
    ConfigurationError,
    InvalidExtensionError,
    StorageError,
    CorruptFileError,
    SerializationError,
    InvalidDateError,
)
from .logging_config import setup_logging

__all__ = [
    "RecordStore",
    "FileStorage",
    "ErrorKind",
    "StoreError",
    "ConfigurationError",
    "InvalidExtensionError",
    "StorageError",
    "CorruptFileError",
    "SerializationError",
    "InvalidDateError",
    "setup_logging",
]
