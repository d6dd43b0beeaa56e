from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import CheckInEvent, CheckInReportRow, NewCheckIn


class CheckInRepository(Protocol):
    """Storage contract for check-ins.

    Time bounds are half-open ``[start, end)`` aware UTC instants. Failures
    surface as ``StorageError``; ``create`` raises ``DuplicateCheckInError``
    when the employee already has a row for ``new.checkin_date``.
    """

    def find_for_employee_between(self, employee_id: str, start: datetime, end: datetime) -> Sequence[CheckInEvent]:
        raise NotImplementedError

    def get_for_employee_between(self, employee_id: str, start: datetime, end: datetime) -> Optional[CheckInEvent]:
        raise NotImplementedError

    def create(self, new: NewCheckIn) -> CheckInEvent:
        raise NotImplementedError

    def list_report_rows(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[CheckInReportRow]:
        raise NotImplementedError
