from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.business_time import BusinessCalendar
from ..common.datetime_utils import as_utc, utc_now
from ..common.validators import require_non_empty
from ..core.constants import MAX_USER_AGENT_LENGTH
from ..core.enums import CheckInResultStatus
from ..core.exceptions import DuplicateCheckInError, NotFoundError, StorageError
from ..employees.repository import EmployeeRepository
from ..network.classifier import NetworkAssessment, NetworkTrustClassifier
from .exemption import ExemptionDecision, ExemptionEvaluator
from .lateness import LatenessResult, classify_lateness
from .meal_allowance import MealAllowanceCalculator, StandardMealAllowanceCalculator
from .model import CheckInEvent, NewCheckIn
from .repository import CheckInRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInOutcome:
    status: CheckInResultStatus
    checkin: CheckInEvent
    lateness: Optional[LatenessResult] = None
    exemption_applied: bool = False
    meal_allowance: int = 0
    is_shop_wifi: Optional[bool] = None

    @property
    def created(self) -> bool:
        return self.status == CheckInResultStatus.SUCCESS


class CheckInService:
    """Record at most one check-in per employee per local business day.

    Flow: validate employee, replay an existing record for today, classify
    lateness, evaluate the weekly exemption and the network trust in
    parallel, compute the meal allowance, then insert.
    """

    def __init__(
        self,
        checkins: CheckInRepository,
        employees: EmployeeRepository,
        network: NetworkTrustClassifier,
        *,
        calendar: Optional[BusinessCalendar] = None,
        exemption_evaluator: Optional[ExemptionEvaluator] = None,
        meal_allowance: Optional[MealAllowanceCalculator] = None,
    ):
        self._checkins = checkins
        self._employees = employees
        self._network = network
        self._calendar = calendar or BusinessCalendar()
        self._exemptions = exemption_evaluator or ExemptionEvaluator(checkins, self._calendar)
        self._meal_allowance = meal_allowance or StandardMealAllowanceCalculator()

    def check_in(
        self,
        employee_id: object,
        *,
        client_ip: str,
        user_agent: str = "",
        now: Optional[datetime] = None,
    ) -> CheckInOutcome:
        employee_id = require_non_empty(employee_id, "Employee ID is required")
        now = as_utc(now) if now else utc_now()

        employee = self._employees.get_by_id(employee_id)
        if not employee or employee.is_deleted:
            raise NotFoundError("Employee not found")

        day_start, day_end = self._calendar.day_bounds(now)
        existing = self._checkins.get_for_employee_between(employee_id, day_start, day_end)
        if existing:
            logger.info("Employee %s already checked in (checkin %s)", employee_id, existing.checkin_id)
            return CheckInOutcome(status=CheckInResultStatus.ALREADY_CHECKED_IN, checkin=existing)

        lateness = classify_lateness(self._calendar.minutes_of_day(now))
        exemption, network = self._evaluate_in_parallel(employee_id, lateness, client_ip, now)
        meal_allowance = self._meal_allowance.allowance_for(lateness.status)

        new = NewCheckIn(
            employee_id=employee_id,
            occurred_at=now,
            checkin_date=self._calendar.local_date(now),
            late_status=lateness.status,
            penalty_percentage=0 if exemption.applied else lateness.penalty,
            exemption_applied=exemption.applied,
            meal_allowance=meal_allowance,
            client_ip=client_ip,
            user_agent=(user_agent or "")[:MAX_USER_AGENT_LENGTH],
            network_info=network.network_info,
            is_trusted_network=network.is_trusted,
        )

        try:
            checkin = self._checkins.create(new)
        except DuplicateCheckInError:
            logger.info("Concurrent check-in for employee %s on %s; replaying stored record", employee_id, new.checkin_date)
            return self._replay_after_race(employee_id, day_start, day_end)
        except StorageError:
            logger.error("Failed to record check-in for employee %s", employee_id, exc_info=True)
            raise

        logger.info(
            "Check-in %s recorded for employee %s: %s penalty=%s exemption=%s",
            checkin.checkin_id,
            employee_id,
            lateness.status.value,
            checkin.penalty_percentage,
            exemption.reason,
        )
        return CheckInOutcome(
            status=CheckInResultStatus.SUCCESS,
            checkin=checkin,
            lateness=lateness,
            exemption_applied=exemption.applied,
            meal_allowance=meal_allowance,
            is_shop_wifi=network.is_trusted,
        )

    def _evaluate_in_parallel(
        self, employee_id: str, lateness: LatenessResult, client_ip: str, now: datetime
    ) -> tuple[ExemptionDecision, NetworkAssessment]:
        with ThreadPoolExecutor(max_workers=2) as pool:
            exemption_future = pool.submit(self._exemptions.evaluate, employee_id, lateness, now)
            network_future = pool.submit(self._network.assess, client_ip)
            return exemption_future.result(), network_future.result()

    def _replay_after_race(self, employee_id: str, day_start: datetime, day_end: datetime) -> CheckInOutcome:
        existing = self._checkins.get_for_employee_between(employee_id, day_start, day_end)
        if not existing:
            raise StorageError("Check-in rejected as duplicate but no record was found")
        return CheckInOutcome(status=CheckInResultStatus.ALREADY_CHECKED_IN, checkin=existing)
