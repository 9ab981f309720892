from __future__ import annotations

import logging
from typing import Iterable, List

from fastapi import APIRouter, HTTPException, status

from loan_calculator.schemas import (
    AmortizationOut,
    AmortizationRequest,
    RemainingBalanceOut,
    RemainingBalanceRequest,
    ScheduleItem,
    fits_money,
    to_money,
)
from loan_calculator.services import (
    InvalidInput,
    ScheduleEntry,
    compute_amortization,
    compute_remaining_balance,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def assert_displayable(*amounts: float) -> None:
    if not all(fits_money(amount) for amount in amounts):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Amounts too large to display")


def schedule_items(schedule: Iterable[ScheduleEntry]) -> List[ScheduleItem]:
    return [
        ScheduleItem(
            month=entry.month,
            payment=to_money(entry.payment),
            principal=to_money(entry.principal_portion),
            interest=to_money(entry.interest_portion),
            balance=to_money(entry.balance_after),
        )
        for entry in schedule
    ]


@router.post("/amortization", response_model=AmortizationOut)
def amortization(payload: AmortizationRequest):
    try:
        result = compute_amortization(
            principal=payload.principal,
            annual_rate_percent=payload.annual_interest_rate,
            term_months=payload.term_months,
        )
    except InvalidInput as exc:
        logger.warning("Rejected amortization request %s: %s", payload.model_dump(), exc.reason)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.reason)
    assert_displayable(payload.principal, result.total_payment)

    logger.info(
        "Amortized %s over %d months at %s%%",
        payload.principal,
        payload.term_months,
        payload.annual_interest_rate,
    )
    return AmortizationOut(
        monthly_payment=to_money(result.monthly_payment),
        total_payment=to_money(result.total_payment),
        total_interest=to_money(result.total_interest),
        schedule=schedule_items(result.schedule),
    )


@router.post("/remaining-balance", response_model=RemainingBalanceOut)
def remaining_balance(payload: RemainingBalanceRequest):
    try:
        result = compute_remaining_balance(
            payment=payload.monthly_payment,
            annual_rate_percent=payload.annual_interest_rate,
            current_month=payload.current_month,
            original_term_months=payload.original_term_months,
        )
    except InvalidInput as exc:
        logger.warning("Rejected remaining-balance request %s: %s", payload.model_dump(), exc.reason)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.reason)
    assert_displayable(result.original_principal, result.total_remaining)

    logger.info(
        "Projected %d remaining payments of %s from month %d",
        result.remaining_payments,
        payload.monthly_payment,
        payload.current_month,
    )
    return RemainingBalanceOut(
        original_principal=to_money(result.original_principal),
        remaining_balance=to_money(result.remaining_balance),
        remaining_payments=result.remaining_payments,
        total_remaining=to_money(result.total_remaining),
        schedule=schedule_items(result.schedule),
    )
