"""Date-keyed point persistence for normalized series."""

import sqlite3
import threading
from collections.abc import Iterable
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog

from ..data.models import Point
from ..errors import PersistenceError
from ..utils.dates import partition_key


@dataclass
class StoredPoint:
    """Stored point with metadata."""
    series: str
    date: str
    value: float
    partition_key: str
    updated_at: str

    def to_point(self) -> Point:
        return Point(date=self.date, value=self.value)


class PointStore:
    """SQLite-based store of canonical points keyed by (series, date)."""

    def __init__(self, db_path: str = "points.db"):
        self.db_path = Path(db_path)
        self.logger = structlog.get_logger(__name__)
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS points (
                    series TEXT NOT NULL,
                    date TEXT NOT NULL,
                    value REAL NOT NULL,
                    partition_key TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (series, date)
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_points_partition ON points(series, partition_key)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection, converting driver errors to PersistenceError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", db_path=str(self.db_path), error=str(e))
            raise PersistenceError(f"Database error: {e}", operation="query", target=str(self.db_path))
        finally:
            if conn:
                conn.close()

    def upsert_points(self, series: str, points: Iterable[Point]) -> int:
        """
        Store points for a series, overwriting existing values for the same date.

        Args:
            series: Series identifier
            points: Canonical points to write

        Returns:
            Number of points written
        """
        now = datetime.now(timezone.utc).isoformat()
        rows = [(series, p.date, p.value, partition_key(p.date), now) for p in points]

        if not rows:
            return 0

        with self._lock:
            with self._get_connection() as conn:
                conn.executemany("""
                    INSERT INTO points (series, date, value, partition_key, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(series, date) DO UPDATE SET
                        value = excluded.value,
                        partition_key = excluded.partition_key,
                        updated_at = excluded.updated_at
                """, rows)
                conn.commit()

        self.logger.info("Points stored", series=series, count=len(rows))
        return len(rows)

    def get_points(self, series: str, date_from: Optional[str] = None,
                   date_to: Optional[str] = None) -> list[Point]:
        """Get a series' points within the inclusive date range, ascending by date."""
        clauses = ["series = ?"]
        args: list[Any] = [series]

        if date_from is not None:
            clauses.append("date >= ?")
            args.append(date_from)
        if date_to is not None:
            clauses.append("date <= ?")
            args.append(date_to)

        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT date, value FROM points WHERE {' AND '.join(clauses)} ORDER BY date",
                args,
            ).fetchall()

        return [Point(date=row["date"], value=row["value"]) for row in rows]

    def get_latest(self, series: str) -> Optional[Point]:
        """Get the most recent point of a series."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT date, value FROM points WHERE series = ?
                ORDER BY date DESC LIMIT 1
            """, (series,)).fetchone()

        if row:
            return Point(date=row["date"], value=row["value"])
        return None

    def get_record(self, series: str, date: str) -> Optional[StoredPoint]:
        """Get the stored row for one date."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT * FROM points WHERE series = ? AND date = ?
            """, (series, date)).fetchone()

        if row:
            return self._row_to_stored_point(row)
        return None

    def get_stats(self) -> dict[str, Any]:
        """Get point counts per series."""
        with self._get_connection() as conn:
            counts = {
                row[0]: row[1]
                for row in conn.execute("SELECT series, COUNT(*) FROM points GROUP BY series")
            }

        return {
            "total_points": sum(counts.values()),
            "points_by_series": counts,
        }

    def _row_to_stored_point(self, row: sqlite3.Row) -> StoredPoint:
        """Convert database row to StoredPoint object."""
        return StoredPoint(
            series=row["series"],
            date=row["date"],
            value=row["value"],
            partition_key=row["partition_key"],
            updated_at=row["updated_at"],
        )
