"""
File Storage Implementation

DESIGN DECISION: One JSON file per key, inside a single data directory.
- The two board blobs stay independent: damaging one file never
  affects the other
- Users can inspect or back up their board with ordinary tools
- Writes go to a temporary file first and are swapped in with
  os.replace, so a crash mid-write leaves the previous blob intact

TRADEOFFS:
- No transactions across keys (the board does not need them)
- Not meant for concurrent writers (single-user board)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from quadboard.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
    StorageWriteError,
    validate_key,
)


class FileKeyValueStore(KeyValueStoreInterface):
    """Substrate storing each key as `<data_dir>/<key>.json`."""

    SUFFIX = ".json"

    def __init__(self, data_dir: Union[str, Path]):
        self._root = Path(data_dir).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        return self._root / f"{validate_key(key)}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_name = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._root,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to delete {path}: {e}") from e
        return True

    def keys(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            path.stem for path in self._root.glob(f"*{self.SUFFIX}")
            if not path.name.startswith(".")
        )
