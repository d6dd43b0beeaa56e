from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

# MySQL error code for a duplicate key on INSERT.
ER_DUP_ENTRY = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def dump_json(value: Optional[dict]) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def load_json(value: Any) -> Optional[dict]:
    """Normalize a JSON column across connector implementations.

    mysql-connector can return JSON as ``str``, ``bytes`` or an already
    decoded ``dict`` depending on the driver flavour.
    """

    if value is None:
        return None
    if isinstance(value, dict):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        if not value.strip():
            return None
        decoded = json.loads(value)
        return decoded if isinstance(decoded, dict) else None
    raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")


def load_optional_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    return bool(value)
