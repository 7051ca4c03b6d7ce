"""Advice storage layer using SQLite."""
import json
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional
from agroadvisor.config import settings
from agroadvisor.models.advice import SprayingAdvice


class AdviceStore:
    """Storage for spraying advice results."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database_path
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS spraying_advice (
                    id TEXT PRIMARY KEY,
                    location TEXT NOT NULL,
                    date TEXT NOT NULL,
                    status TEXT NOT NULL,
                    advice TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_location_created
                ON spraying_advice(location, created_at)
            """)
            conn.commit()

    @contextmanager
    def _get_conn(self):
        """Get database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def save_advice(self, advice: SprayingAdvice) -> str:
        """Save an advice result and return its id."""
        advice_id = str(uuid.uuid4())

        with self._get_conn() as conn:
            conn.execute("""
                INSERT INTO spraying_advice (id, location, date, status, advice, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                advice_id,
                advice.location.lower(),
                advice.date,
                advice.status.value,
                advice.model_dump_json(by_alias=True),
                datetime.now(timezone.utc).isoformat(),
            ))
            conn.commit()
        return advice_id

    def get_latest_advice(self, location: str) -> Optional[SprayingAdvice]:
        """Get the most recently stored advice for a location (case-insensitive)."""
        with self._get_conn() as conn:
            row = conn.execute("""
                SELECT advice FROM spraying_advice
                WHERE location = ?
                ORDER BY created_at DESC, rowid DESC
                LIMIT 1
            """, (location.lower(),)).fetchone()

            if not row:
                return None

            return SprayingAdvice(**json.loads(row["advice"]))


# Global instance
_advice_store = None


def get_db() -> AdviceStore:
    """Get the advice store instance."""
    global _advice_store
    if _advice_store is None:
        _advice_store = AdviceStore()
    return _advice_store
