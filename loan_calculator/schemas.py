from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import List

from pydantic import BaseModel, PositiveInt, StrictInt, condecimal


MONEY_DIGITS = 18
Money = condecimal(max_digits=MONEY_DIGITS, decimal_places=2)

TWOPLACES = Decimal("0.01")
MONEY_LIMIT = Decimal(10) ** (MONEY_DIGITS - 2) - Decimal("0.005")


def to_money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def fits_money(value: float) -> bool:
    return abs(value) < MONEY_LIMIT


class AmortizationRequest(BaseModel):
    principal: float
    annual_interest_rate: float  # percentage, e.g. 18.99 means 18.99%
    term_months: StrictInt


class RemainingBalanceRequest(BaseModel):
    monthly_payment: float
    annual_interest_rate: float
    current_month: StrictInt
    original_term_months: StrictInt


class ScheduleItem(BaseModel):
    month: PositiveInt
    payment: Money
    principal: Money
    interest: Money
    balance: Money


class AmortizationOut(BaseModel):
    monthly_payment: Money
    total_payment: Money
    total_interest: Money
    schedule: List[ScheduleItem]


class RemainingBalanceOut(BaseModel):
    original_principal: Money
    remaining_balance: Money
    remaining_payments: int
    total_remaining: Money
    schedule: List[ScheduleItem]
