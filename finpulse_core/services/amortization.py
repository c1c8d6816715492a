from __future__ import annotations

import logging
import math
from typing import Optional

from finpulse_core.domain.models import DebtSimulation


logger = logging.getLogger(__name__)


def monthly_rate(annual_rate: float) -> float:
    return annual_rate / 100 / 12


def monthly_interest(balance: float, annual_rate: float) -> float:
    return balance * monthly_rate(annual_rate)


def payoff_months(balance: float, annual_rate: float, monthly_payment: float) -> Optional[int]:
    """
    Closed-form number of months to clear `balance` with a fixed payment.

    Returns None when the payment never clears the balance (it does not cover
    the accruing interest, or there is no payment at all).
    """
    if balance <= 0:
        return 0
    if monthly_payment <= 0:
        return None

    r = monthly_rate(annual_rate)
    if r == 0:
        return math.ceil(balance / monthly_payment)

    interest = balance * r
    if monthly_payment <= interest:
        logger.debug("Payment %.2f does not cover interest %.2f", monthly_payment, interest)
        return None

    months = math.log(1 + interest / (monthly_payment - interest)) / math.log(1 + r)
    return math.ceil(months)


def simulate_fixed_payments(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    num_months: int,
) -> DebtSimulation:
    """
    Month-by-month amortization for at most `num_months` payments.
    Stops early once the balance is cleared, or when the payment no longer
    reduces principal (balance stays frozen).
    """
    r = monthly_rate(annual_rate)
    remaining = max(balance, 0.0)
    total_interest = 0.0
    total_paid = 0.0

    for _ in range(max(num_months, 0)):
        if remaining <= 0:
            break
        interest = remaining * r
        principal = min(monthly_payment - interest, remaining)
        if principal <= 0:
            break
        remaining -= principal
        total_interest += interest
        total_paid += monthly_payment

    return DebtSimulation(
        remaining_balance=max(0.0, remaining),
        total_interest_paid=total_interest,
        total_paid=total_paid,
    )
