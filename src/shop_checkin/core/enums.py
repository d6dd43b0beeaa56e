from __future__ import annotations

from enum import Enum


class LateStatus(str, Enum):
    """Arrival classification stored on every check-in."""

    PERFECT_ON_TIME = "perfect_on_time"
    ON_TIME = "on_time"
    LATE_10 = "late_10"
    LATE_15 = "late_15"


class CheckInResultStatus(str, Enum):
    SUCCESS = "success"
    ALREADY_CHECKED_IN = "already_checked_in"
