"""Durable user stores.

Two interchangeable backends implement :class:`UserStore`:

* :class:`JsonSnapshotStore` keeps every record in memory and rewrites the
  whole table to a single JSON file after each mutation.
* :class:`SqlUserStore` keeps records in a SQLite table through SQLModel and
  commits each mutation, holding failed writes in memory until the next one.

Records handed out by a store are copies; callers mutate them and hand them
back through :meth:`UserStore.put`.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..models import UserRecord
from .errors import StorageIOError

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def load(self) -> None: ...

    def get(self, user_id: str) -> Optional[UserRecord]: ...

    def create(self) -> UserRecord: ...

    def put(self, record: UserRecord) -> None: ...

    def all(self) -> List[UserRecord]: ...

    def count(self) -> int: ...


class JsonSnapshotStore:
    """In-memory table persisted as a full JSON snapshot on every write."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._users: Dict[str, UserRecord] = {}

    def load(self) -> None:
        with self._lock:
            self._users = {}
            try:
                data = self._read_snapshot()
            except StorageIOError:
                logger.exception("Could not load %s; starting with an empty store", self.path)
                return

            for user_id, entry in data.items():
                if not isinstance(entry, dict):
                    logger.warning("Skipping malformed snapshot entry for %s", user_id)
                    continue
                try:
                    self._users[str(user_id)] = UserRecord.from_snapshot(user_id, entry)
                except (TypeError, ValueError, OverflowError):
                    logger.warning("Skipping malformed snapshot entry for %s", user_id)
            logger.info("Loaded %d users from %s", len(self._users), self.path)

    def get(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            record = self._users.get(user_id)
            return record.clone() if record else None

    def create(self) -> UserRecord:
        with self._lock:
            record = UserRecord()
            while record.user_id in self._users:
                record = UserRecord()
            self._users[record.user_id] = record
            self._persist()
            return record.clone()

    def put(self, record: UserRecord) -> None:
        with self._lock:
            self._users[record.user_id] = record.clone()
            self._persist()

    def all(self) -> List[UserRecord]:
        with self._lock:
            return [record.clone() for record in self._users.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _read_snapshot(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise StorageIOError(f"Cannot read snapshot {self.path}") from exc
        except ValueError as exc:
            self._quarantine()
            raise StorageIOError(f"Snapshot {self.path} is not valid JSON") from exc

        if not isinstance(data, dict):
            self._quarantine()
            raise StorageIOError(f"Snapshot {self.path} must contain a JSON object")
        return data

    def _quarantine(self) -> None:
        # keep the unreadable file for inspection instead of overwriting it
        bad = self.path.with_name(self.path.name + ".bad")
        try:
            os.replace(self.path, bad)
        except OSError:
            logger.warning("Could not move unreadable snapshot %s aside", self.path)

    def _write_snapshot(self) -> None:
        payload = {user_id: record.to_snapshot() for user_id, record in self._users.items()}
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageIOError(f"Cannot write snapshot {self.path}") from exc

    def _persist(self) -> None:
        try:
            self._write_snapshot()
        except StorageIOError:
            logger.exception("Snapshot write failed; in-memory state kept until the next write")


class SqlUserStore:
    """User table stored in SQLite via SQLModel.

    Writes that fail to commit stay in memory and are served by reads until a
    later write flushes them.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = threading.RLock()
        self._pending: Dict[str, UserRecord] = {}

    def load(self) -> None:
        try:
            SQLModel.metadata.create_all(self.engine)
            logger.info("Opened user table with %d users", self.count())
        except SQLAlchemyError:
            logger.exception("Could not initialise the user table")

    def get(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            pending = self._pending.get(user_id)
            if pending is not None:
                return pending.clone()
        with Session(self.engine) as session:
            return session.get(UserRecord, user_id)

    def create(self) -> UserRecord:
        with self._lock:
            with Session(self.engine) as session:
                record = UserRecord()
                while (
                    record.user_id in self._pending
                    or session.get(UserRecord, record.user_id) is not None
                ):
                    record = UserRecord()
            self._pending[record.user_id] = record
            self._flush()
            return record.clone()

    def put(self, record: UserRecord) -> None:
        with self._lock:
            self._pending[record.user_id] = record.clone()
            self._flush()

    def all(self) -> List[UserRecord]:
        with self._lock:
            pending = {user_id: record.clone() for user_id, record in self._pending.items()}
        with Session(self.engine) as session:
            stored = session.exec(
                select(UserRecord).order_by(UserRecord.created_at, UserRecord.user_id)
            ).all()
        records = [pending.pop(record.user_id, record) for record in stored]
        # unflushed new users are the most recently created
        records.extend(pending.values())
        return records

    def count(self) -> int:
        return len(self.all())

    def _flush(self) -> None:
        with Session(self.engine) as session:
            for record in self._pending.values():
                session.merge(record.clone())
            try:
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception(
                    "User table write failed; holding %s in memory until the next write",
                    ", ".join(sorted(self._pending)),
                )
                return
        self._pending.clear()


__all__ = ["JsonSnapshotStore", "SqlUserStore", "UserStore"]
