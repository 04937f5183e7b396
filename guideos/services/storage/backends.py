"""
Key-Value Backends

Two implementations of KeyValueBackend:

- InMemoryBackend: a dict. Used by tests and throwaway sessions.
- JsonFileBackend: one `<key>.json` file per key in a data directory.

TRADEOFFS (file backend):
- Whole-file rewrites only; collections are small
- No locking: last write wins, same as browser storage
- Writes go to a temp file and are moved into place, so a reader never
  sees half a collection
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from guideos.services.storage.interface import (
    KeyValueBackend,
    StorageReadError,
    StorageWriteError,
)


_SAFE_KEY = re.compile(r"[A-Za-z0-9_.-]+")


class InMemoryBackend(KeyValueBackend):
    """Dict-backed key-value space."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> bool:
        return self._values.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._values)


class JsonFileBackend(KeyValueBackend):
    """
    File-per-key backend.

    Values are stored verbatim; the `.json` suffix reflects what the
    RecordStore writes, not a requirement of this class.
    """

    SUFFIX = ".json"

    def __init__(self, data_dir: Path, write_attempts: int = 3):
        self._data_dir = Path(data_dir)
        self._write_attempts = write_attempts

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """
        File path holding `key`.

        Raises:
            ValueError: If the key is empty, is a dot name or holds
                characters other than letters, digits, `_`, `.` and `-`
        """
        if not _SAFE_KEY.fullmatch(key or "") or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write_atomic(path, value)
        except (OSError, RetryError) as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> bool:
        try:
            self.path_for(key).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {key}: {e}") from e

    def keys(self) -> list[str]:
        if not self._data_dir.is_dir():
            return []
        return sorted(p.stem for p in self._data_dir.glob(f"*{self.SUFFIX}"))

    def _write_atomic(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
