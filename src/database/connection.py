import logging
import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Tuple

import psycopg2
from psycopg2.extensions import connection as PGConnection, cursor as PGCursor

logger = logging.getLogger(__name__)


def _get_db_params() -> Dict[str, Any]:
    """
    Read key-value store connection parameters from environment variables.

    ``DATABASE_URL`` wins when set; otherwise DB_HOST, DB_NAME, DB_USER and
    DB_PASSWORD are required and DB_PORT defaults to 5432.

    Returns:
        Keyword arguments for ``psycopg2.connect``

    Raises:
        ValueError: If neither form is fully configured.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return {"dsn": database_url}

    params = {
        "host": os.getenv("DB_HOST"),
        "dbname": os.getenv("DB_NAME"),
        "user": os.getenv("DB_USER"),
        "password": os.getenv("DB_PASSWORD"),
    }
    if not all(params.values()):
        logger.error(
            "Missing database environment variables (DATABASE_URL or DB_HOST, DB_NAME, DB_USER, DB_PASSWORD)"
        )
        raise ValueError("Missing required database environment variables")

    params["port"] = int(os.getenv("DB_PORT", "5432"))
    return params


def get_connection() -> PGConnection:
    """
    Open a connection to the key-value store database.

    Returns:
        psycopg2 connection instance
    """
    params = _get_db_params()
    logger.debug(f"Connecting to key-value database {params.get('dbname', '<dsn>')}")
    return psycopg2.connect(**params)


@contextmanager
def get_cursor() -> Iterator[Tuple[PGConnection, PGCursor]]:
    """
    Context manager that yields (connection, cursor) and handles commit/rollback.

    Usage:
        with get_cursor() as (conn, cur):
            cur.execute(...)
    """
    conn: PGConnection | None = None
    cur: PGCursor | None = None
    try:
        conn = get_connection()
        cur = conn.cursor()
        yield conn, cur
        conn.commit()
    except Exception:
        if conn:
            conn.rollback()
        logger.exception("Key-value store operation failed")
        raise
    finally:
        if cur:
            cur.close()
        if conn:
            conn.close()
