from __future__ import annotations
import os

from .errors import StorageError


class FileStorage:
    """
    Whole-file filesystem access used by RecordStore.
    No partial reads/writes and no locking: every call touches the complete file.
    Replace with a custom object exposing the same four methods to redirect I/O.
    """
    encoding = "utf-8"

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def mkdir(self, path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create directory: {e}", path) from e

    def read_text(self, path: str) -> str:
        try:
            with open(path, "r", encoding=self.encoding) as f:
                return f.read()
        except OSError as e:
            raise StorageError(f"cannot read file: {e}", path) from e

    def write_text(self, path: str, text: str) -> None:
        try:
            with open(path, "w", encoding=self.encoding) as f:
                f.write(text)
        except OSError as e:
            raise StorageError(f"cannot write file: {e}", path) from e
