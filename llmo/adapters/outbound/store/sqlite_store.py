"""SQLite adapter for persisting diagnosis records."""

import json
import logging
import sqlite3
from pathlib import Path

from ....core.domain import DiagnosisRecord, HistoryEntry
from ....core.domain.exceptions import StorageError
from ....core.ports.store_port import DiagnosisStorePort

logger = logging.getLogger(__name__)

TABLE_NAME = "analysis_logs"

CREATE_TABLE_SQL = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        url TEXT NOT NULL,
        target_query TEXT NOT NULL,
        page_title TEXT,
        content_preview TEXT,
        similarity_score REAL,
        content_embedding TEXT,
        query_embedding TEXT,
        advice TEXT,
        analysis_source TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

CREATE_INDEX_SQL = f"""
    CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_created_at
    ON {TABLE_NAME}(created_at)
"""


class SQLiteDiagnosisStore(DiagnosisStorePort):
    """Stores diagnoses in a local SQLite file.

    Embeddings are kept as JSON arrays and the analysis as its camelCase JSON
    document in the ``advice`` column.
    """

    def __init__(self, db_path: str | Path = "data/llmo.db") -> None:
        """Initialize the SQLite store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.setup()

    def setup(self, reset: bool = False) -> None:
        """Create the table and index, dropping existing data when ``reset``."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                if reset:
                    logger.warning("Dropping table %s", TABLE_NAME)
                    cursor.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
                cursor.execute(CREATE_TABLE_SQL)
                cursor.execute(CREATE_INDEX_SQL)
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(
                "Failed to initialize database",
                cause=e,
                context={"db_path": str(self.db_path)},
            ) from e

    def persist(self, record: DiagnosisRecord) -> int:
        """Insert a diagnosis record.

        Returns:
            ID of the inserted row.

        Raises:
            StorageError: The insert failed.
        """
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    INSERT INTO {TABLE_NAME} (
                        url, target_query, page_title, content_preview, similarity_score,
                        content_embedding, query_embedding, advice, analysis_source, created_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.url,
                        record.target_query,
                        record.page_title,
                        record.content_preview,
                        record.similarity_score,
                        json.dumps(record.content_embedding),
                        json.dumps(record.query_embedding),
                        json.dumps(record.analysis.to_json_dict(), ensure_ascii=False),
                        record.analysis_source,
                        record.created_at,
                    ),
                )
                conn.commit()
                return cursor.lastrowid or 0
        except sqlite3.Error as e:
            raise StorageError(
                "Failed to insert diagnosis record",
                cause=e,
                context={"url": record.url},
            ) from e

    def recent(self, limit: int = 10) -> list[HistoryEntry]:
        """Return the newest diagnoses first."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    SELECT id, url, target_query, page_title, similarity_score, created_at
                    FROM {TABLE_NAME}
                    ORDER BY created_at DESC, id DESC
                    LIMIT ?
                    """,
                    (limit,),
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageError("Failed to read diagnosis history", cause=e) from e

        return [
            HistoryEntry(
                id=row[0],
                url=row[1],
                target_query=row[2],
                page_title=row[3] or "",
                similarity_score=row[4] or 0.0,
                created_at=str(row[5]),
            )
            for row in rows
        ]

    def ping(self) -> bool:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.warning("SQLite ping failed: %s", e)
            return False
