from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy.exc import SQLAlchemyError

from halal_bites.core.database import get_db
from halal_bites.core.exceptions import ConstraintViolation, StoreUnavailable


class BaseRepository:
    """
    Base repository providing DB helpers.

    Guarantees:
    - fetchall() returns List[Dict]
    - fetchone() returns Dict | None
    - constraint violations surface as ConstraintViolation
    - other driver and pool errors surface as StoreUnavailable
    """

    table: str = ""

    @contextmanager
    def cursor(self, commit: bool = False):
        try:
            with get_db() as conn:
                cur = conn.cursor(cursor_factory=RealDictCursor)
                try:
                    yield cur
                    if commit:
                        conn.commit()
                except Exception:
                    conn.rollback()
                    raise
                finally:
                    cur.close()
        except psycopg2.IntegrityError as exc:
            raise ConstraintViolation(f"{self.table or 'database'} write rejected: {exc}") from exc
        except (psycopg2.Error, SQLAlchemyError) as exc:
            raise StoreUnavailable(f"{self.table or 'database'} query failed: {exc}") from exc

    def fetchall(self, query: str, params: tuple | None = None) -> List[Dict[str, Any]]:
        with self.cursor() as cur:
            cur.execute(query, params or ())
            return [dict(row) for row in cur.fetchall()]

    def fetchone(self, query: str, params: tuple | None = None) -> Optional[Dict[str, Any]]:
        with self.cursor() as cur:
            cur.execute(query, params or ())
            row = cur.fetchone()
            return dict(row) if row else None

    def write(self, query: str, params: tuple | None = None) -> Optional[Dict[str, Any]]:
        """Run a single statement in its own transaction; returns the RETURNING row if any."""
        with self.cursor(commit=True) as cur:
            cur.execute(query, params or ())
            row = cur.fetchone() if cur.description else None
            return dict(row) if row else None

    def write_many(self, statements: Iterable[tuple]) -> List[int]:
        """Run several (query, params) statements in one transaction; returns rowcounts."""
        with self.cursor(commit=True) as cur:
            counts = []
            for query, params in statements:
                cur.execute(query, params)
                counts.append(cur.rowcount)
            return counts

    def count(self) -> int:
        row = self.fetchone(f"SELECT COUNT(*) AS count FROM {self.table}")
        return row["count"] if row else 0
