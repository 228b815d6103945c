"""Query history persistence.

HistorySink is the interface the research pipeline writes to; HistoryRepo
is its SQLite implementation, plus the small read side used to reuse
earlier queries.
"""

import json
from datetime import datetime
from typing import Optional, Dict, Any, List, Protocol
from .db import get_db_connection
from ..schemas.results import ResultItem, ResultSet
import logging

logger = logging.getLogger("history")


class HistorySink(Protocol):
    def record(self, query: str, result_set: ResultSet, timestamp: datetime) -> None:
        ...


class HistoryRepo:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def record(self, query: str, result_set: ResultSet, timestamp: datetime) -> None:
        """Store one query and its merged results in a single transaction."""
        with get_db_connection(self.db_path) as conn:
            cursor = conn.execute(
                """
                INSERT INTO queries (query, created_at, result_count, succeeded, failures)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    query,
                    timestamp.isoformat(),
                    len(result_set.results),
                    json.dumps(result_set.succeeded),
                    json.dumps(result_set.failures),
                )
            )
            query_id = cursor.lastrowid
            conn.executemany(
                """
                INSERT INTO results (query_id, position, source, title, url, content)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (query_id, position, item.source, item.title, item.url, item.content)
                    for position, item in enumerate(result_set.results)
                ]
            )
            conn.commit()
        logger.debug(f"Recorded query {query_id} with {len(result_set.results)} results")

    def list_queries(self, limit: int = 20) -> List[Dict[str, Any]]:
        with get_db_connection(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, query, created_at, result_count FROM queries ORDER BY id DESC LIMIT ?",
                (limit,)
            ).fetchall()
            return [dict(row) for row in rows]

    def search_queries(self, term: str, limit: int = 20) -> List[Dict[str, Any]]:
        """Earlier queries containing `term`, newest first."""
        with get_db_connection(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT id, query, created_at, result_count FROM queries
                WHERE query LIKE ? ESCAPE '\\'
                ORDER BY id DESC LIMIT ?
                """,
                (f"%{_escape_like(term)}%", limit)
            ).fetchall()
            return [dict(row) for row in rows]

    def get_result_set(self, query_id: int) -> Optional[ResultSet]:
        with get_db_connection(self.db_path) as conn:
            row = conn.execute(
                "SELECT query, succeeded, failures FROM queries WHERE id = ?",
                (query_id,)
            ).fetchone()
            if not row:
                return None

            items = conn.execute(
                "SELECT source, title, url, content FROM results WHERE query_id = ? ORDER BY position ASC",
                (query_id,)
            ).fetchall()

            return ResultSet(
                query=row["query"],
                results=[ResultItem(**dict(item)) for item in items],
                succeeded=json.loads(row["succeeded"] or "[]"),
                failures=json.loads(row["failures"] or "{}"),
            )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


history_repo = HistoryRepo()
