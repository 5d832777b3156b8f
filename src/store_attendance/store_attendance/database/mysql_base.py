from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import shift_month
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) for one transaction on a short-lived connection.

    Commits when the block exits normally; any exception rolls the whole
    block back and is re-raised.
    """
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        logger.warning("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Half-open [first of month, first of next month) for DATETIME range filters."""
    next_year, next_month = shift_month(year, month, 1)
    return datetime(year, month, 1), datetime(next_year, next_month, 1)
