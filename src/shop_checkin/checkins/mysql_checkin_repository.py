from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import as_utc
from ..core.enums import LateStatus
from ..core.exceptions import DuplicateCheckInError, StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ER_DUP_ENTRY, db_cursor, dump_json, fetchall, fetchone, load_json, load_optional_bool
from .model import CheckInEvent, CheckInReportRow, NewCheckIn
from .repository import CheckInRepository

_COLUMNS = """
    c.id, c.employee_id, c.created_at, c.checkin_date, c.late_status,
    c.penalty_percentage, c.exemption_applied, c.meal_allowance,
    c.user_agent, c.ip_address, c.ip_info, c.is_shop_wifi
"""


def _to_db(value: datetime) -> datetime:
    # created_at is stored as naive UTC.
    return as_utc(value).replace(tzinfo=None)


def _row_to_event(r: Dict[str, Any]) -> CheckInEvent:
    try:
        return CheckInEvent(
            checkin_id=int(r["id"]),
            employee_id=str(r["employee_id"]),
            occurred_at=as_utc(r["created_at"]),
            checkin_date=r["checkin_date"],
            late_status=LateStatus(r["late_status"]),
            penalty_percentage=int(r["penalty_percentage"]),
            exemption_applied=bool(r["exemption_applied"]),
            meal_allowance=int(r["meal_allowance"]),
            client_ip=r.get("ip_address") or "",
            user_agent=r.get("user_agent") or "",
            network_info=load_json(r.get("ip_info")),
            is_trusted_network=load_optional_bool(r.get("is_shop_wifi")),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StorageError(f"Unreadable check-in row {r.get('id')!r}: {e}") from e


class MySQLCheckInRepository(CheckInRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_employee_between(self, employee_id: str, start: datetime, end: datetime) -> Sequence[CheckInEvent]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM checkins c
                    WHERE c.employee_id=%s AND c.created_at >= %s AND c.created_at < %s
                    ORDER BY c.created_at ASC
                    """,
                    (employee_id, _to_db(start), _to_db(end)),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Failed to load check-ins: {e}") from e
        return [_row_to_event(r) for r in rows]

    def get_for_employee_between(self, employee_id: str, start: datetime, end: datetime) -> Optional[CheckInEvent]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM checkins c
                    WHERE c.employee_id=%s AND c.created_at >= %s AND c.created_at < %s
                    ORDER BY c.created_at ASC
                    LIMIT 1
                    """,
                    (employee_id, _to_db(start), _to_db(end)),
                )
                r = fetchone(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Failed to load check-in: {e}") from e
        return _row_to_event(r) if r else None

    def create(self, new: NewCheckIn) -> CheckInEvent:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO checkins(
                        employee_id, created_at, checkin_date, late_status, penalty_percentage,
                        exemption_applied, meal_allowance, user_agent, ip_address, ip_info, is_shop_wifi
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        new.employee_id,
                        _to_db(new.occurred_at),
                        new.checkin_date,
                        new.late_status.value,
                        int(new.penalty_percentage),
                        int(new.exemption_applied),
                        int(new.meal_allowance),
                        new.user_agent,
                        new.client_ip,
                        dump_json(new.network_info),
                        None if new.is_trusted_network is None else int(new.is_trusted_network),
                    ),
                )
                checkin_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if e.errno == ER_DUP_ENTRY:
                raise DuplicateCheckInError(
                    f"Employee {new.employee_id} already checked in on {new.checkin_date.isoformat()}"
                ) from e
            raise StorageError(str(e)) from e
        except mysql.connector.Error as e:
            raise StorageError(str(e)) from e
        return CheckInEvent.from_new(checkin_id, new)

    def list_report_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[CheckInReportRow]:
        clauses: list[str] = []
        params: list[object] = []

        if start is not None:
            clauses.append("c.created_at >= %s")
            params.append(_to_db(start))
        if end is not None:
            clauses.append("c.created_at < %s")
            params.append(_to_db(end))
        if employee_id is not None:
            clauses.append("c.employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses) if clauses else "1=1"

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}, e.name AS employee_name
                    FROM checkins c
                    JOIN employees e ON e.id = c.employee_id
                    WHERE {where}
                    ORDER BY c.created_at DESC
                    """,
                    tuple(params),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StorageError(f"Failed to load check-in report: {e}") from e

        return [CheckInReportRow(checkin=_row_to_event(r), employee_name=r["employee_name"]) for r in rows]
