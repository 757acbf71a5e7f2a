"""
Reference store: MAC ID -> ordered list of playlist links.

In-memory dict backed by a single JSON file. Every mutation rewrites the whole
file before returning, so memory and disk are equal after each successful call.
"""

import json
import logging
import os
import tempfile
import threading
import time
import uuid
from pathlib import Path

from m3u_backend.domain.errors import NotFound, StorageIOError

logger = logging.getLogger(__name__)


class ReferenceStore:
    def __init__(self, data_file: Path):
        self.data_file = Path(data_file)
        self._data: dict[str, list[str]] = {}
        # Serializa read-modify-write-persist; los endpoints sync corren en un threadpool.
        self._lock = threading.Lock()

    def load(self) -> None:
        """
        Load persisted state. Missing file -> empty store.
        Unreadable or malformed file -> empty store; the bad file is moved aside
        so the next write does not overwrite it.
        """
        with self._lock:
            self._data = {}
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            if not self.data_file.exists():
                logger.info("No data file at %s, starting with an empty store", self.data_file)
                return

            try:
                raw = json.loads(self.data_file.read_text(encoding="utf-8"))
                if not isinstance(raw, dict):
                    raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
            except (OSError, ValueError):
                logger.error("Could not read data file %s, starting empty", self.data_file, exc_info=True)
                self._quarantine()
                return

            for mac_id, value in raw.items():
                # Formato antiguo: un solo link (string) por MAC ID.
                if isinstance(value, str):
                    self._data[mac_id] = [value]
                elif isinstance(value, list) and all(isinstance(v, str) for v in value):
                    self._data[mac_id] = list(value)
                else:
                    logger.warning("Skipping malformed entry for %r in %s", mac_id, self.data_file)
            logger.info("Loaded %d MAC IDs from %s", len(self._data), self.data_file)

    def append(self, mac_id: str, link: str) -> list[str]:
        """Append link to mac_id's list, persist, and return a copy of the updated list."""
        with self._lock:
            existed = mac_id in self._data
            links = self._data.setdefault(mac_id, [])
            links.append(link)
            try:
                self._persist()
            except OSError as e:
                # Rollback para que memoria y disco sigan iguales.
                links.pop()
                if not existed:
                    del self._data[mac_id]
                logger.error("Failed to persist store to %s", self.data_file, exc_info=True)
                raise StorageIOError() from e
            return list(links)

    def get(self, mac_id: str) -> list[str]:
        with self._lock:
            if mac_id not in self._data:
                raise NotFound()
            return list(self._data[mac_id])

    def list_identifiers(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())

    def __contains__(self, mac_id: object) -> bool:
        with self._lock:
            return mac_id in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _persist(self) -> None:
        # Caller holds the lock. Temp file + os.replace: never a half-written data file.
        directory = self.data_file.parent
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.data_file.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.data_file)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def _quarantine(self) -> None:
        target = self.data_file.with_name(f"{self.data_file.name}.corrupt-{int(time.time() * 1000)}")
        if target.exists():
            # Otro arranque con fichero corrupto en el mismo milisegundo.
            target = target.with_name(f"{target.name}-{uuid.uuid4().hex[:8]}")
        try:
            os.replace(self.data_file, target)
            logger.warning("Moved unreadable data file to %s", target)
        except OSError:
            logger.error("Could not move unreadable data file %s aside", self.data_file, exc_info=True)
