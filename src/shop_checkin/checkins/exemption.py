from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ..common.business_time import BusinessCalendar
from ..core.enums import LateStatus
from ..core.exceptions import StorageError
from .lateness import LatenessResult
from .model import CheckInEvent
from .repository import CheckInRepository

logger = logging.getLogger(__name__)

NOT_ELIGIBLE = "not_eligible"
ALREADY_USED = "already_used"
PERFECT_DAY_FOUND = "perfect_day_found"
NO_PERFECT_DAY = "no_perfect_day"
HISTORY_UNAVAILABLE = "history_unavailable"


@dataclass(frozen=True)
class ExemptionDecision:
    applied: bool
    reason: str


class ExemptionEvaluator:
    """Weekly forgiveness of the 10% late penalty.

    An employee who already had a perfect arrival this attendance week may
    skip one ``late_10`` penalty per week.
    """

    def __init__(self, checkins: CheckInRepository, calendar: BusinessCalendar):
        self._checkins = checkins
        self._calendar = calendar

    def evaluate(self, employee_id: str, lateness: LatenessResult, now: datetime) -> ExemptionDecision:
        if lateness.status != LateStatus.LATE_10:
            return ExemptionDecision(applied=False, reason=NOT_ELIGIBLE)

        week_start = self._calendar.week_start(now)
        try:
            history = self._checkins.find_for_employee_between(employee_id, week_start, now)
        except StorageError:
            logger.warning("Exemption history unavailable for employee %s", employee_id, exc_info=True)
            return ExemptionDecision(applied=False, reason=HISTORY_UNAVAILABLE)

        if any(c.exemption_applied for c in history):
            return ExemptionDecision(applied=False, reason=ALREADY_USED)

        if self._has_perfect_arrival(history):
            return ExemptionDecision(applied=True, reason=PERFECT_DAY_FOUND)
        return ExemptionDecision(applied=False, reason=NO_PERFECT_DAY)

    def _has_perfect_arrival(self, history: Iterable[CheckInEvent]) -> bool:
        # 08:00 sharp still counts here, unlike the lateness tiers.
        for c in history:
            local = self._calendar.to_local(c.occurred_at)
            if local.hour < 8 or (local.hour == 8 and local.minute == 0):
                return True
        return False
