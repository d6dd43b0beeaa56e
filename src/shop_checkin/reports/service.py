from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..checkins.repository import CheckInRepository
from ..common.business_time import BusinessCalendar
from ..core.enums import LateStatus

CSV_FIELDS = [
    "checkin_date",
    "local_time",
    "employee_id",
    "employee_name",
    "late_status",
    "penalty_percentage",
    "exemption_applied",
    "meal_allowance",
    "is_shop_wifi",
    "ip_address",
    "user_agent",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class CheckInReportService:
    def __init__(self, checkins: CheckInRepository, calendar: Optional[BusinessCalendar] = None):
        self._checkins = checkins
        self._calendar = calendar or BusinessCalendar()

    def list_checkins(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> list[dict]:
        """Check-ins joined with employee names, newest first (dashboard feed)."""
        return [r.to_dict() for r in self._query(start=start, end=end, employee_id=employee_id)]

    def build_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        query_rows = self._query(start=start, end=end, employee_id=employee_id)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            c = r.checkin
            out_rows.append(
                {
                    "checkin_date": c.checkin_date.isoformat(),
                    "local_time": self._calendar.to_local(c.occurred_at).strftime("%H:%M"),
                    "employee_id": c.employee_id,
                    "employee_name": r.employee_name,
                    "late_status": c.late_status.value,
                    "penalty_percentage": c.penalty_percentage,
                    "exemption_applied": c.exemption_applied,
                    "meal_allowance": c.meal_allowance,
                    "is_shop_wifi": "" if c.is_trusted_network is None else c.is_trusted_network,
                    "ip_address": c.client_ip,
                    "user_agent": c.user_agent,
                }
            )

            s = summary_map.get(c.employee_id)
            if not s:
                s = {
                    "employee_id": c.employee_id,
                    "employee_name": r.employee_name,
                    "days": 0,
                    "late_status_counts": {status.value: 0 for status in LateStatus},
                    "exemptions_used": 0,
                    "total_meal_allowance": 0,
                    "total_penalty_percentage": 0,
                    "shop_wifi_days": 0,
                }
                summary_map[c.employee_id] = s
            s["days"] += 1
            s["late_status_counts"][c.late_status.value] += 1
            s["exemptions_used"] += int(c.exemption_applied)
            s["total_meal_allowance"] += c.meal_allowance
            s["total_penalty_percentage"] += c.penalty_percentage
            s["shop_wifi_days"] += int(c.is_trusted_network is True)

        summary = sorted(summary_map.values(), key=lambda x: (x["employee_name"], x["employee_id"]))
        return ReportData(rows=out_rows, summary=summary)

    def _query(self, *, start: Optional[date], end: Optional[date], employee_id: Optional[str]):
        start_at = self._calendar.local_midnight(start) if start else None
        end_at = self._calendar.date_range_bounds(end, end)[1] if end else None
        return self._checkins.list_report_rows(start=start_at, end=end_at, employee_id=employee_id)
