from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.constants import DEFAULT_MEAL_ALLOWANCE
from ..core.enums import LateStatus


class MealAllowanceCalculator(ABC):
    """Calculator interface (Strategy Pattern for allowances)."""

    @abstractmethod
    def allowance_for(self, status: LateStatus) -> int:
        raise NotImplementedError


class StandardMealAllowanceCalculator(MealAllowanceCalculator):
    """Standard rule: only a perfect on-time arrival earns the allowance."""

    def __init__(self, amount: int = DEFAULT_MEAL_ALLOWANCE):
        self._amount = int(amount)

    def allowance_for(self, status: LateStatus) -> int:
        if status == LateStatus.PERFECT_ON_TIME:
            return self._amount
        return 0
