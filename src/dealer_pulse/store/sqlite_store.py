"""SQLite-backed record store, the local fallback for the hosted backend."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .base import TABLE_KEYS, check_table


class ImportRun:
    """Record of one file import."""

    def __init__(
        self,
        id: int,
        file_name: str,
        started_at: datetime,
        finished_at: Optional[datetime],
        status: str,
        report_type: Optional[str] = None,
        rows_read: int = 0,
        records_upserted: int = 0,
        message: Optional[str] = None,
    ):
        self.id = id
        self.file_name = file_name
        self.started_at = started_at
        self.finished_at = finished_at
        self.status = status
        self.report_type = report_type
        self.rows_read = rows_read
        self.records_upserted = records_upserted
        self.message = message

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ImportRun":
        """Build from an import_runs row."""
        finished = row["finished_at"]
        return cls(
            id=row["id"],
            file_name=row["file_name"],
            started_at=datetime.fromisoformat(row["started_at"]),
            finished_at=datetime.fromisoformat(finished) if finished else None,
            status=row["status"],
            report_type=row["report_type"],
            rows_read=row["rows_read"],
            records_upserted=row["records_upserted"],
            message=row["message"],
        )


class SQLiteRecordStore:
    """
    SQLite store with one table per report type.
    Rows are keyed by natural key; re-importing a report overwrites matching rows.
    """

    def __init__(self, db_path: str | Path = "dealer_pulse.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def upsert(self, table: str, records: list[dict], conflict_key: str) -> int:
        """Insert or replace rows by natural key in a single transaction."""
        check_table(table, conflict_key)
        now = datetime.now(timezone.utc).isoformat()
        params = [
            (str(r[conflict_key]), r.get("month"), json.dumps(r, default=str), now)
            for r in records
        ]
        with self._connection() as conn:
            conn.executemany(
                f"""
                INSERT INTO {table} (record_key, month, data, imported_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(record_key) DO UPDATE SET
                    month = excluded.month, data = excluded.data, imported_at = excluded.imported_at
                """,
                params,
            )
            conn.commit()
        return len(params)

    def fetch(self, table: str, month: Optional[str] = None) -> list[dict]:
        """Return stored rows, optionally filtered by month bucket."""
        check_table(table, TABLE_KEYS.get(table, ""))
        with self._connection() as conn:
            if month:
                rows = conn.execute(
                    f"SELECT data FROM {table} WHERE month = ? ORDER BY record_key", (month,)
                ).fetchall()
            else:
                rows = conn.execute(f"SELECT data FROM {table} ORDER BY record_key").fetchall()
        return [json.loads(r["data"]) for r in rows]

    def count(self, table: str, month: Optional[str] = None) -> int:
        """Number of stored rows, optionally in one month bucket."""
        check_table(table, TABLE_KEYS.get(table, ""))
        with self._connection() as conn:
            if month:
                row = conn.execute(f"SELECT COUNT(*) AS n FROM {table} WHERE month = ?", (month,)).fetchone()
            else:
                row = conn.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()
        return int(row["n"])

    def start_run(self, file_name: str) -> ImportRun:
        """Record start of an import. Returns ImportRun with id."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO import_runs (file_name, started_at, status) VALUES (?, ?, 'running')",
                (file_name, now),
            )
            conn.commit()
            run_id = cursor.lastrowid
        return ImportRun(
            id=run_id or 0,
            file_name=file_name,
            started_at=datetime.fromisoformat(now),
            finished_at=None,
            status="running",
        )

    def finish_run(
        self,
        run_id: int,
        *,
        report_type: Optional[str] = None,
        rows_read: int = 0,
        records_upserted: int = 0,
        status: str = "completed",
        message: Optional[str] = None,
    ) -> None:
        """Record completion (or failure) of an import."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE import_runs SET finished_at = ?, status = ?, report_type = ?,
                    rows_read = ?, records_upserted = ?, message = ?
                WHERE id = ?
                """,
                (now, status, report_type, rows_read, records_upserted, message, run_id),
            )
            conn.commit()

    def list_runs(self, limit: int = 20) -> list[ImportRun]:
        """Most recent imports first."""
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM import_runs ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
        return [ImportRun.from_row(r) for r in rows]
