"""SQLite 只读客户端。"""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence
from urllib.parse import quote

logger = logging.getLogger(__name__)

QueryParams = Sequence[Any] | Mapping[str, Any]


class DatabaseReadError(RuntimeError):
    """数据库读取失败。"""


@dataclass(slots=True)
class SQLiteReadClient:
    """带锁重试的 SQLite 只读客户端，行以字典返回。"""

    db_path: Path | str
    busy_timeout_ms: int = 3_000
    max_retries: int = 3
    retry_backoff_seconds: float = 0.05
    _db_uri: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        resolved_path = Path(self.db_path).expanduser().resolve()
        self.db_path = resolved_path
        self._db_uri = f"file:{quote(str(resolved_path), safe='/')}?mode=ro"

    def fetch_all(self, sql: str, params: QueryParams | None = None) -> list[dict[str, Any]]:
        """执行只读查询并返回全部行。"""

        bound_params: QueryParams = () if params is None else params
        for attempt in range(self.max_retries + 1):
            try:
                return self._execute_once(sql, bound_params)
            except sqlite3.OperationalError as exc:
                if not self._is_retryable(exc) or attempt >= self.max_retries:
                    raise DatabaseReadError(
                        f"SQLite read failed after {attempt + 1} attempt(s): {exc}"
                    ) from exc
                logger.debug("SQLite busy on attempt %d, retrying: %s", attempt + 1, exc)
                time.sleep(self.retry_backoff_seconds * (attempt + 1))

        raise DatabaseReadError("SQLite read failed unexpectedly.")

    def fetch_one(self, sql: str, params: QueryParams | None = None) -> dict[str, Any] | None:
        """执行只读查询并返回首行。"""

        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def _execute_once(self, sql: str, params: QueryParams) -> list[dict[str, Any]]:
        """执行单次查询。"""

        with sqlite3.connect(self._db_uri, uri=True) as connection:
            connection.row_factory = sqlite3.Row
            connection.execute(f"PRAGMA busy_timeout = {self.busy_timeout_ms};")
            connection.execute("PRAGMA query_only = ON;")
            cursor = connection.execute(sql, params)
            rows = [dict(row) for row in cursor.fetchall()]
            cursor.close()
            return rows

    @staticmethod
    def _is_retryable(exc: sqlite3.OperationalError) -> bool:
        """锁冲突类错误可重试。"""

        message = str(exc).lower()
        return "locked" in message or "busy" in message
