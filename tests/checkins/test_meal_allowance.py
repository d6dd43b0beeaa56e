from shop_checkin.checkins.meal_allowance import StandardMealAllowanceCalculator
from shop_checkin.core.enums import LateStatus


def test_only_perfect_arrival_earns_allowance():
    calc = StandardMealAllowanceCalculator()

    assert calc.allowance_for(LateStatus.PERFECT_ON_TIME) == 50
    assert calc.allowance_for(LateStatus.ON_TIME) == 0
    assert calc.allowance_for(LateStatus.LATE_10) == 0
    assert calc.allowance_for(LateStatus.LATE_15) == 0


def test_allowance_amount_is_configurable():
    assert StandardMealAllowanceCalculator(amount=80).allowance_for(LateStatus.PERFECT_ON_TIME) == 80
