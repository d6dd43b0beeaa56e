from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import LateStatus


@dataclass(frozen=True)
class NewCheckIn:
    """Fields computed by the rule engine, ready to insert."""

    employee_id: str
    occurred_at: datetime
    checkin_date: date
    late_status: LateStatus
    penalty_percentage: int
    exemption_applied: bool
    meal_allowance: int
    client_ip: str
    user_agent: str
    network_info: Optional[dict] = None
    is_trusted_network: Optional[bool] = None


@dataclass(frozen=True)
class CheckInEvent:
    """One committed attendance record. Never updated after insert."""

    checkin_id: int
    employee_id: str
    occurred_at: datetime
    checkin_date: date
    late_status: LateStatus
    penalty_percentage: int
    exemption_applied: bool
    meal_allowance: int
    client_ip: str
    user_agent: str
    network_info: Optional[dict] = None
    is_trusted_network: Optional[bool] = None

    @classmethod
    def from_new(cls, checkin_id: int, new: NewCheckIn) -> "CheckInEvent":
        return cls(
            checkin_id=checkin_id,
            employee_id=new.employee_id,
            occurred_at=new.occurred_at,
            checkin_date=new.checkin_date,
            late_status=new.late_status,
            penalty_percentage=new.penalty_percentage,
            exemption_applied=new.exemption_applied,
            meal_allowance=new.meal_allowance,
            client_ip=new.client_ip,
            user_agent=new.user_agent,
            network_info=new.network_info,
            is_trusted_network=new.is_trusted_network,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.checkin_id,
            "employee_id": self.employee_id,
            "created_at": self.occurred_at.isoformat(),
            "checkin_date": self.checkin_date.isoformat(),
            "late_status": self.late_status.value,
            "penalty_percentage": self.penalty_percentage,
            "exemption_applied": self.exemption_applied,
            "meal_allowance": self.meal_allowance,
            "user_agent": self.user_agent,
            "ip_address": self.client_ip,
            "ip_info": self.network_info,
            "is_shop_wifi": self.is_trusted_network,
        }


@dataclass(frozen=True)
class CheckInReportRow:
    """Read-model for listings and exports: a check-in joined with the employee name."""

    checkin: CheckInEvent
    employee_name: str

    def to_dict(self) -> dict[str, Any]:
        out = self.checkin.to_dict()
        out["employees"] = {"id": self.checkin.employee_id, "name": self.employee_name}
        return out
