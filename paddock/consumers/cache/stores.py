"""File-backed cache slot store.

One ``<slot>.json`` file per slot in a directory. The file's mtime is the
last-write time, which is how the widget scripts tracked cache age.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class FileCacheStore:
    """CacheStore implementation over a directory of JSON files."""

    SUFFIX = ".json"

    def __init__(self, directory: Path | str) -> None:
        self._dir = Path(directory)

    def _path(self, slot: str) -> Path:
        if not slot or "/" in slot or "\\" in slot or slot.startswith("."):
            raise ValueError(f"Invalid cache slot name: {slot!r}")
        return self._dir / f"{slot}{self.SUFFIX}"

    def exists(self, slot: str) -> bool:
        return self._path(slot).is_file()

    def read(self, slot: str) -> bytes | None:
        path = self._path(slot)
        if not path.is_file():
            return None
        return path.read_bytes()

    def write(self, slot: str, data: bytes) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(slot)
        # Write-then-rename so a reader never sees a half-written file
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(data)
        tmp.replace(path)
        logger.debug("[CACHE] Wrote %d bytes to %s", len(data), path)

    def last_modified(self, slot: str) -> datetime | None:
        path = self._path(slot)
        if not path.is_file():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime, UTC)

    def delete(self, slot: str) -> bool:
        path = self._path(slot)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def slots(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob(f"*{self.SUFFIX}"))
