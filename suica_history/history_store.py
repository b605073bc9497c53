import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .models import CardSnapshot
from .settings import resolve_database_path
from .utils import idm_bytes_to_str

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanRecord:
    timestamp: int
    balance: int
    card_id: str
    id: int | None = None


class ScanSink(Protocol):
    def add(self, record: ScanRecord) -> ScanRecord: ...


class ScanHistoryStore:
    """Append-only scan history kept in a single SQLite table.

    The owner creates the store and is responsible for closing it.
    """

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path or resolve_database_path()
        is_uri = self.db_path.startswith("file:")
        if self.db_path != ":memory:" and not is_uri:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._connection: sqlite3.Connection | None = sqlite3.connect(
            self.db_path, uri=is_uri
        )
        self._connection.row_factory = sqlite3.Row
        self._create_schema()

    def __enter__(self) -> "ScanHistoryStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("scan history store is closed")
        return self._connection

    def _create_schema(self) -> None:
        with self.connection:
            self.connection.execute(
                """
                CREATE TABLE IF NOT EXISTS scan_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp INTEGER NOT NULL,
                    balance INTEGER NOT NULL,
                    card_id TEXT NOT NULL
                )
                """
            )

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ScanRecord:
        return ScanRecord(
            id=row["id"],
            timestamp=row["timestamp"],
            balance=row["balance"],
            card_id=row["card_id"],
        )

    def add(self, record: ScanRecord) -> ScanRecord:
        with self.connection:
            cur = self.connection.execute(
                "INSERT INTO scan_history (timestamp, balance, card_id) VALUES (?, ?, ?)",
                (record.timestamp, record.balance, record.card_id),
            )
        log.debug("stored scan %d for %s", cur.lastrowid, record.card_id)
        return ScanRecord(
            id=cur.lastrowid,
            timestamp=record.timestamp,
            balance=record.balance,
            card_id=record.card_id,
        )

    def all(self) -> list[ScanRecord]:
        rows = self.connection.execute(
            "SELECT id, timestamp, balance, card_id FROM scan_history "
            "ORDER BY timestamp DESC, id DESC"
        ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None


def record_scan(
    snapshot: CardSnapshot,
    idm: bytes,
    sink: ScanSink,
    now: int | None = None,
) -> ScanRecord:
    """Store the balance of a decoded snapshot, stamped in epoch milliseconds."""
    timestamp = now if now is not None else int(time.time() * 1000)
    record = ScanRecord(
        timestamp=timestamp,
        balance=snapshot.balance,
        card_id=idm_bytes_to_str(idm),
    )
    return sink.add(record)
