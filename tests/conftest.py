from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import pytest

from shop_checkin.checkins.model import CheckInEvent, CheckInReportRow, NewCheckIn
from shop_checkin.checkins.service import CheckInService
from shop_checkin.common.business_time import BusinessCalendar
from shop_checkin.core.exceptions import DuplicateCheckInError, StorageError
from shop_checkin.core.result import Unavailable
from shop_checkin.employees.model import Employee
from shop_checkin.network.classifier import NetworkTrustClassifier

SHOP_TZ = timezone(timedelta(hours=7))

SHOP_WIFI_INFO = {
    "ip": "171.96.0.10",
    "asn": {"asn": "AS45758", "name": "Triple T Broadband (3BB)"},
    "company": {"name": "Triple T Broadband Public Company Limited"},
    "privacy": {"vpn": False, "proxy": False, "tor": False, "hosting": False},
}


def local_time(year: int, month: int, day: int, hour: int, minute: int, second: int = 0) -> datetime:
    """Shop-local wall clock time as an aware UTC instant."""
    return datetime(year, month, day, hour, minute, second, tzinfo=SHOP_TZ).astimezone(timezone.utc)


@dataclass
class InMemoryEmployees:
    employees: dict[str, Employee]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.employees.get(employee_id)


class InMemoryCheckIns:
    """Check-in store honouring the (employee, local day) unique key."""

    def __init__(self, employee_names: Optional[dict[str, str]] = None):
        self._rows: list[CheckInEvent] = []
        self._id = 0
        self._lock = threading.Lock()
        self.employee_names = employee_names or {}
        self.history_queries = 0
        self.fail_history = False
        self.fail_create = False

    @property
    def rows(self) -> list[CheckInEvent]:
        return list(self._rows)

    def find_for_employee_between(self, employee_id: str, start: datetime, end: datetime):
        self.history_queries += 1
        if self.fail_history:
            raise StorageError("history read failed")
        items = [r for r in self._rows if r.employee_id == employee_id and start <= r.occurred_at < end]
        return sorted(items, key=lambda r: r.occurred_at)

    def get_for_employee_between(self, employee_id: str, start: datetime, end: datetime):
        for r in sorted(self._rows, key=lambda r: r.occurred_at):
            if r.employee_id == employee_id and start <= r.occurred_at < end:
                return r
        return None

    def create(self, new: NewCheckIn) -> CheckInEvent:
        if self.fail_create:
            raise StorageError("insert failed")
        with self._lock:
            if any(r.employee_id == new.employee_id and r.checkin_date == new.checkin_date for r in self._rows):
                raise DuplicateCheckInError("duplicate")
            self._id += 1
            rec = CheckInEvent.from_new(self._id, new)
            self._rows.append(rec)
            return rec

    def list_report_rows(self, *, start=None, end=None, employee_id=None):
        items = [
            r
            for r in self._rows
            if (start is None or r.occurred_at >= start)
            and (end is None or r.occurred_at < end)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: r.occurred_at, reverse=True)
        return [CheckInReportRow(checkin=r, employee_name=self.employee_names.get(r.employee_id, "")) for r in items]


@dataclass
class FakeIpLookup:
    response: Union[dict, Unavailable] = field(default_factory=lambda: dict(SHOP_WIFI_INFO))
    calls: list[str] = field(default_factory=list)

    def lookup(self, ip: str):
        self.calls.append(ip)
        return self.response


@pytest.fixture
def calendar() -> BusinessCalendar:
    return BusinessCalendar(7)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            "emp-1": Employee(employee_id="emp-1", name="Somchai"),
            "emp-2": Employee(employee_id="emp-2", name="Malee"),
            "emp-gone": Employee(employee_id="emp-gone", name="Former", is_deleted=True),
        }
    )


@pytest.fixture
def checkins_repo() -> InMemoryCheckIns:
    return InMemoryCheckIns({"emp-1": "Somchai", "emp-2": "Malee"})


@pytest.fixture
def ip_lookup() -> FakeIpLookup:
    return FakeIpLookup()


@pytest.fixture
def checkin_service(checkins_repo, employees, ip_lookup, calendar) -> CheckInService:
    return CheckInService(checkins_repo, employees, NetworkTrustClassifier(ip_lookup), calendar=calendar)


@pytest.fixture
def fixed_now() -> datetime:
    # Thursday 2026-10-15, 07:55 shop time.
    return local_time(2026, 10, 15, 7, 55)


@pytest.fixture
def at_local():
    return local_time
