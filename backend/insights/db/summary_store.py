"""
SQLite summary store - Prepara los cursores que consumen los generadores de graficos

Each row of the `summary` table holds one pre-aggregated snapshot:
- time: ISO 8601 capture time (UTC)
- data: the Summary as UTF-8 JSON bytes
"""
import json
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..errors import InvalidRangeError
from ..schemas.summary import Summary
from ..utils.logger import get_logger

logger = get_logger("summary_store")

SCHEMA = """
CREATE TABLE IF NOT EXISTS summary (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    time TEXT NOT NULL,
    data BLOB NOT NULL
);
CREATE INDEX IF NOT EXISTS summary_time ON summary(time);
"""

LATEST_QUERY = "SELECT time, data FROM summary ORDER BY julianday(time) DESC, id DESC LIMIT 1"

# date() applies the stored offset, so the window is in UTC days like row_date().
# Unparseable times give NULL and are kept so the generator rejects them.
RANGE_QUERY = """
SELECT time, data FROM summary
WHERE date(time) IS NULL OR date(time) BETWEEN :date_from AND :date_to
ORDER BY julianday(time) ASC, id ASC
"""


class SummaryStore:
    """Owns the SQLite connection; hands out cursors that callers only read"""

    def __init__(self, path: Union[str, Path] = ":memory:"):
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        # FastAPI runs sync endpoints in a threadpool
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(SCHEMA)
        logger.debug("Store opened", {"path": self.path})

    def __enter__(self) -> "SummaryStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def test_connection(self) -> bool:
        """Check the connection answers a trivial query"""
        try:
            self._conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            logger.warning("Store connection check failed", {"error": str(e)})
            return False

    def save_summary(
        self,
        summary: Union[Summary, Dict[str, Any]],
        time: Optional[datetime] = None,
    ) -> int:
        """Insert one snapshot; returns its row id"""
        if isinstance(summary, Summary):
            payload = summary.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
        else:
            payload = json.dumps(summary).encode("utf-8")
        ts = time or datetime.now(timezone.utc)
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc)
        with self._conn:
            cur = self._conn.execute(
                "INSERT INTO summary (time, data) VALUES (?, ?)",
                (ts.isoformat(), payload),
            )
        return cur.lastrowid

    def latest(self) -> sqlite3.Cursor:
        """Cursor over the most recent summary (zero or one row)"""
        return self._conn.execute(LATEST_QUERY)

    def between(self, date_from: date, date_to: date) -> sqlite3.Cursor:
        """Cursor over summaries captured from date_from to date_to, both inclusive"""
        if date_from > date_to:
            raise InvalidRangeError(f"date_from {date_from} is after date_to {date_to}")
        params = {"date_from": date_from.isoformat(), "date_to": date_to.isoformat()}
        return self._conn.execute(RANGE_QUERY, params)

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM summary").fetchone()[0]
