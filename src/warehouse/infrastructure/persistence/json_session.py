"""JSON-file-backed change tracking shared by both product stores.

A session reads records from one JSON file, hands out tracked entities
(one instance per key) and stages adds and removes. ``commit()`` applies
every staged change to a fresh read of the file, enforces the unique
indexes and atomically replaces the file. Until then nothing on disk
changes.

Reads go to the file, not to pending changes: an added entity is not
returned by ``find_one`` before it has been committed.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, Generic, TypeVar

from warehouse.shared.exceptions import ConstraintViolationError

T = TypeVar("T")


class JsonSession(Generic[T]):

    def __init__(
        self,
        file_path: Path,
        to_raw: Callable[[T], dict],
        to_domain: Callable[[dict], T],
        unique_fields: tuple[str, ...] = (),
    ) -> None:
        self._file_path = file_path
        self._to_raw = to_raw
        self._to_domain = to_domain
        self._unique_fields = unique_fields
        self._tracked: dict[str, T] = {}
        self._added: set[str] = set()
        self._removed: set[str] = set()
        self._ensure_file()

    # --- Tracked reads --------------------------------------------------------

    def get(self, key: str) -> T | None:
        return self.find_one(lambda raw: raw["id"] == key)

    def find_one(self, match: Callable[[dict], bool]) -> T | None:
        for raw in self._load_raw():
            if match(raw) and raw["id"] not in self._removed:
                return self._track(raw)
        return None

    def all(self) -> list[T]:
        return [
            self._track(raw)
            for raw in self._load_raw()
            if raw["id"] not in self._removed
        ]

    # --- Detached reads -------------------------------------------------------

    def get_detached(self, key: str) -> T | None:
        for raw in self._load_raw():
            if raw["id"] == key:
                return self._to_domain(raw)
        return None

    def all_detached(self) -> list[T]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    # --- Staging --------------------------------------------------------------

    def add(self, key: str, entity: T) -> None:
        self._removed.discard(key)
        self._tracked[key] = entity
        self._added.add(key)

    def remove(self, key: str) -> None:
        self._tracked.pop(key, None)
        self._added.discard(key)
        self._removed.add(key)

    def commit(self) -> None:
        """Persist all staged changes in one file replacement.

        Raises ConstraintViolationError (and writes nothing) if a staged
        insert reuses an existing key or a unique field value. A failed
        commit discards every staged and tracked change so the session
        can be used again.
        """
        try:
            self._write_changes()
        except Exception:
            self._discard_changes()
            raise

        self._added.clear()
        self._removed.clear()

    # --- Internal helpers -----------------------------------------------------

    def _write_changes(self) -> None:
        records = {raw["id"]: raw for raw in self._load_raw()}

        for key in self._removed:
            records.pop(key, None)

        for key, entity in self._tracked.items():
            if key in self._added:
                if key in records:
                    raise ConstraintViolationError(
                        f"A record with id '{key}' already exists"
                    )
            elif key not in records:
                # Deleted by another writer since it was loaded.
                continue
            records[key] = self._to_raw(entity)

        self._check_unique(list(records.values()))
        self._persist_raw(list(records.values()))

    def _discard_changes(self) -> None:
        self._tracked.clear()
        self._added.clear()
        self._removed.clear()

    def _track(self, raw: dict) -> T:
        key = raw["id"]
        if key not in self._tracked:
            self._tracked[key] = self._to_domain(raw)
        return self._tracked[key]

    def _check_unique(self, records: list[dict]) -> None:
        for field in self._unique_fields:
            seen: set = set()
            for raw in records:
                value = raw.get(field)
                if value in seen:
                    raise ConstraintViolationError(
                        f"Unique index on '{field}' violated by value '{value}'"
                    )
                seen.add(value)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(records, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
