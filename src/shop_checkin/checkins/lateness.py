from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    LATE_10_BEFORE_MINUTES,
    LATE_10_PENALTY,
    LATE_15_PENALTY,
    ON_TIME_BEFORE_MINUTES,
    PERFECT_ON_TIME_BEFORE_MINUTES,
)
from ..core.enums import LateStatus


@dataclass(frozen=True)
class LatenessResult:
    status: LateStatus
    penalty: int
    message: str

    def to_dict(self) -> dict:
        return {"status": self.status.value, "penalty": self.penalty, "message": self.message}


def classify_lateness(minutes_of_day: int) -> LatenessResult:
    """Map a local arrival (minutes since midnight) to a lateness tier.

    The penalty is the default for the tier, before any weekly exemption.
    """
    if minutes_of_day < PERFECT_ON_TIME_BEFORE_MINUTES:
        return LatenessResult(LateStatus.PERFECT_ON_TIME, 0, "Perfect on time")
    if minutes_of_day < ON_TIME_BEFORE_MINUTES:
        return LatenessResult(LateStatus.ON_TIME, 0, "On time")
    if minutes_of_day < LATE_10_BEFORE_MINUTES:
        return LatenessResult(LateStatus.LATE_10, LATE_10_PENALTY, "Late (10% penalty)")
    return LatenessResult(LateStatus.LATE_15, LATE_15_PENALTY, "Late (15% penalty)")
