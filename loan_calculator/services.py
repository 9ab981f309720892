from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Tuple

from loan_calculator.config import MAX_ANNUAL_RATE_PERCENT, MONTHS_PER_YEAR


MAX_GROWTH_EXPONENT = -math.log(sys.float_info.epsilon)


class InvalidInput(ValueError):
    """Raised when loan figures cannot be amortized. Nothing is computed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class ScheduleEntry:
    month: int
    payment: float
    principal_portion: float
    interest_portion: float
    balance_after: float


@dataclass(frozen=True)
class AmortizationResult:
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: Tuple[ScheduleEntry, ...]


@dataclass(frozen=True)
class RemainingBalanceResult:
    remaining_balance: float
    remaining_payments: int
    total_remaining: float
    schedule: Tuple[ScheduleEntry, ...]
    original_principal: float


def _require_amount(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInput(f"{name} must be a number")
    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidInput(f"{name} must be a finite number")
    if amount <= 0:
        raise InvalidInput(f"{name} must be greater than zero")
    return amount


def _require_months(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be a whole number of months")
    if value <= 0:
        raise InvalidInput(f"{name} must be greater than zero")
    return value


def _require_monthly_rate(annual_rate_percent) -> float:
    if isinstance(annual_rate_percent, bool) or not isinstance(annual_rate_percent, (int, float, Decimal)):
        raise InvalidInput("annual rate must be a number")
    percent = float(annual_rate_percent)
    if not math.isfinite(percent) or percent <= 0 or percent >= MAX_ANNUAL_RATE_PERCENT:
        raise InvalidInput("rate out of range")
    monthly_rate = to_monthly_rate(percent)
    if not 0 < monthly_rate < 1:
        raise InvalidInput("rate out of range")
    return monthly_rate


def to_monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def amortization_step(balance: float, monthly_rate: float, payment: float) -> Tuple[float, float, float]:
    """Apply one payment to ``balance``.

    Returns ``(new_balance, interest, principal)``. The new balance is never
    clamped, so it is safe to feed straight into the next period.
    """
    interest = balance * monthly_rate
    principal = payment - interest
    return balance - principal, interest, principal


def _require_growth(monthly_rate: float, term_months: int) -> float:
    """Return ``(1 + r) ** n - 1`` for a term the schedule can still amortize.

    Past ``MAX_GROWTH_EXPONENT`` the principal portion of the first payment
    falls below float resolution of the balance.
    """
    try:
        exponent = term_months * math.log1p(monthly_rate)
    except OverflowError:
        raise InvalidInput("term too long for rate")
    if exponent > MAX_GROWTH_EXPONENT:
        raise InvalidInput("term too long for rate")
    return math.expm1(exponent)


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    principal = _require_amount(principal, "principal")
    monthly_rate = _require_monthly_rate(annual_rate_percent)
    n = _require_months(term_months, "term")

    growth = _require_growth(monthly_rate, n)
    return principal * (monthly_rate / growth) * (1 + growth)


def reconstruct_principal(payment: float, annual_rate_percent: float, term_months: int) -> float:
    """Principal that ``payment`` fully repays over ``term_months`` at the given rate."""
    payment = _require_amount(payment, "payment")
    monthly_rate = _require_monthly_rate(annual_rate_percent)
    n = _require_months(term_months, "original term")

    growth = _require_growth(monthly_rate, n)
    return payment * (growth / monthly_rate) / (1 + growth)


def _build_schedule(
    balance: float, monthly_rate: float, payment: float, first_month: int, last_month: int
) -> Tuple[ScheduleEntry, ...]:
    schedule: List[ScheduleEntry] = []
    for month in range(first_month, last_month + 1):
        balance, interest, principal = amortization_step(balance, monthly_rate, payment)
        # Only the reported balance is floored; the running balance stays exact
        schedule.append(
            ScheduleEntry(
                month=month,
                payment=payment,
                principal_portion=principal,
                interest_portion=interest,
                balance_after=max(0.0, balance),
            )
        )
    return tuple(schedule)


def compute_amortization(principal, annual_rate_percent, term_months) -> AmortizationResult:
    principal = _require_amount(principal, "principal")
    monthly_rate = _require_monthly_rate(annual_rate_percent)
    n = _require_months(term_months, "term")

    monthly_payment = compute_monthly_payment(principal, annual_rate_percent, n)
    schedule = _build_schedule(principal, monthly_rate, monthly_payment, 1, n)

    total_payment = monthly_payment * n
    return AmortizationResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        schedule=schedule,
    )


def compute_remaining_balance(
    payment, annual_rate_percent, current_month, original_term_months
) -> RemainingBalanceResult:
    """Project the rest of a loan from its fixed payment and how far along it is.

    The original principal is recovered by inverting the annuity formula, the
    balance is rolled forward through ``current_month`` payments, and the
    schedule covers months ``current_month + 1`` through the original term.
    """
    payment = _require_amount(payment, "payment")
    monthly_rate = _require_monthly_rate(annual_rate_percent)
    current = _require_months(current_month, "current month")
    n = _require_months(original_term_months, "original term")
    if current >= n:
        raise InvalidInput("current month must be less than original term")

    original_principal = reconstruct_principal(payment, annual_rate_percent, n)

    balance = original_principal
    for _ in range(current):
        balance, _interest, _principal = amortization_step(balance, monthly_rate, payment)

    remaining_payments = n - current
    return RemainingBalanceResult(
        remaining_balance=max(0.0, balance),
        remaining_payments=remaining_payments,
        total_remaining=payment * remaining_payments,
        schedule=_build_schedule(balance, monthly_rate, payment, current + 1, n),
        original_principal=original_principal,
    )
