from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT id, name, is_deleted
                    FROM employees
                    WHERE id=%s
                    """,
                    (employee_id,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Failed to load employee: {e}") from e

        if not row:
            return None
        return Employee(
            employee_id=str(row["id"]),
            name=row["name"],
            is_deleted=bool(row.get("is_deleted", False)),
        )
