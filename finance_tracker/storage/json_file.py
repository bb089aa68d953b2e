"""
File-backed Blob Store

Each key is stored as one UTF-8 file, `<data_dir>/<key>.json`.

Writes go to a temporary file in the same directory which is then
renamed over the target, so readers see either the old blob or the
new one, never a half-written file. Transient OS errors on write are
retried with exponential backoff before giving up.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from finance_tracker.errors import StorageError
from finance_tracker.storage.interface import BlobStoreInterface


class JsonFileBlobStore(BlobStoreInterface):
    """Blob store keeping one JSON file per key."""

    def __init__(self, data_dir: Path, write_attempts: int = 3):
        self._data_dir = Path(data_dir)
        self._write = retry(
            stop=stop_after_attempt(write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )(self._write_atomic)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        try:
            self._write(path, blob)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def clear(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e

    def _write_atomic(self, path: Path, blob: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
