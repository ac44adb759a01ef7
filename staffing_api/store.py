"""
File-backed collection store.

Each resource type (clients, providers, offers) lives in its own JSON file
holding a single array of records. Every mutation reads the whole array,
changes it in memory and writes the whole array back.

Two rules keep that safe:
  1. Writes go to a temporary sibling file which is then renamed over the
     original, so readers only ever see a complete, valid array.
  2. The whole read-modify-write cycle runs under a per-collection lock,
     and get_store() hands out exactly one store per collection, so two
     requests mutating the same collection are serialized instead of
     overwriting each other's changes.

The lock only covers threads inside one process. Running several server
processes against the same DATA_DIR brings the lost-update race back.
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any

from staffing_api import config
from staffing_api.errors import NotFound, StorageError

logger = logging.getLogger(__name__)

Record = dict[str, Any]

# Inside CollectionStore the name `list` is the method, so annotate with this.
Records = list[Record]

COLLECTIONS = ("clients", "providers", "offers")


class CollectionStore:
    """CRUD over one JSON array of records."""

    def __init__(self, name: str, file_path: str | Path):
        self.name = name
        self.file_path = Path(file_path)
        self._lock = threading.RLock()

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self._write([])
            logger.info("Created empty collection %s at %s", name, self.file_path)

    # ── Reads ──────────────────────────────────────────────────────

    def list(self) -> Records:
        with self._lock:
            return self._read()

    def get(self, record_id: str) -> Record:
        with self._lock:
            records = self._read()
        for record in records:
            if record.get("id") == record_id:
                return record
        raise NotFound(self.name, record_id)

    def find_by(self, field: str, value: Any) -> Record:
        """Return the first record whose `field` equals `value`."""
        with self._lock:
            records = self._read()
        for record in records:
            if field in record and record[field] == value:
                return record
        raise NotFound(self.name, f"{field}={value}")

    def count(self) -> int:
        with self._lock:
            return len(self._read())

    # ── Mutations ──────────────────────────────────────────────────

    def create(self, fields: dict[str, Any]) -> Record:
        """Append a new record with a freshly generated id.

        An `id` inside `fields` is ignored; ids are always server-assigned.
        """
        with self._lock:
            records = self._read()
            existing = {r.get("id") for r in records}

            record_id = str(uuid.uuid4())
            while record_id in existing:
                record_id = str(uuid.uuid4())

            record = {**_without_id(fields), "id": record_id}
            records.append(record)
            self._write(records)

        logger.info("%s: created %s", self.name, record_id)
        return record

    def update(self, record_id: str, fields: dict[str, Any]) -> Record:
        """Shallow-merge `fields` over the record. Missing fields are kept."""
        with self._lock:
            records = self._read()
            for index, record in enumerate(records):
                if record.get("id") == record_id:
                    updated = {**record, **_without_id(fields), "id": record_id}
                    records[index] = updated
                    self._write(records)
                    break
            else:
                raise NotFound(self.name, record_id)

        logger.info("%s: updated %s (%s)", self.name, record_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    def delete(self, record_id: str) -> None:
        """Remove the record. Deleting an unknown id is a silent no-op."""
        with self._lock:
            records = self._read()
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                logger.debug("%s: delete of unknown id %s ignored", self.name, record_id)
            self._write(remaining)

    # ── File I/O ───────────────────────────────────────────────────

    def _read(self) -> Records:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {self.file_path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {self.file_path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"{self.file_path} does not hold a JSON array")
        if not all(isinstance(r, dict) for r in data):
            raise StorageError(f"{self.file_path} holds entries that are not JSON objects")
        return data

    def _write(self, records: Records) -> None:
        temp_path = self.file_path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False, default=str)
            temp_path.replace(self.file_path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {self.file_path}: {e}") from e


def _without_id(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k != "id"}


# ---------------------------------------------------------------------------
# One store per collection for the whole process.
#
# The lock lives on the store, so handing out a second instance for the
# same file would defeat it. Stores are built lazily so tests can point
# config.DATA_DIR somewhere else and call reset_stores().
# ---------------------------------------------------------------------------

_stores: dict[str, CollectionStore] = {}
_stores_lock = threading.Lock()


def get_store(name: str) -> CollectionStore:
    if name not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{name}'")

    with _stores_lock:
        store = _stores.get(name)
        if store is None:
            store = CollectionStore(name, Path(config.DATA_DIR) / f"{name}.json")
            _stores[name] = store
        return store


def reset_stores() -> None:
    """Forget every cached store (used when DATA_DIR changes)."""
    with _stores_lock:
        _stores.clear()
