from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from halal_bites.core.config import get_settings

# ============================================================
# DATABASE ENGINE WITH CONNECTION POOLING
# ============================================================


@lru_cache()
def get_engine():
    settings = get_settings()
    return create_engine(
        settings.DATABASE_URL,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


@contextmanager
def get_db():
    """
    Context-managed raw psycopg2 connection from the pool.

    The connection is always returned to the pool; callers commit
    their own writes.
    """
    conn = get_engine().raw_connection()
    try:
        yield conn
    finally:
        conn.close()
