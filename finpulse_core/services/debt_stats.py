from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from finpulse_core.domain.models import (
    PRIORITIES,
    CategoryBreakdown,
    DebtEntry,
    DebtLedger,
    DebtPayment,
    DebtStats,
    PayoffProjection,
    PriorityBreakdown,
)
from finpulse_core.services import metrics
from finpulse_core.services.amortization import payoff_months


logger = logging.getLogger(__name__)


def add_months(start: dt.date, months: int) -> dt.date:
    """Calendar month addition; the day is clamped to the end of a shorter month."""
    return (pd.Timestamp(start) + pd.DateOffset(months=months)).date()


def project_payoff(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    today: dt.date,
) -> PayoffProjection:
    """Treat a balance as one pseudo-debt and estimate months, interest and payoff date."""
    if balance <= 0 or monthly_payment <= 0:
        return PayoffProjection(months=0, total_interest=0.0, payoff_date=today)

    months = payoff_months(balance, annual_rate, monthly_payment)
    if months is None:
        logger.warning(
            "Payments of %.2f never clear %.2f at %.2f%%; no payoff date",
            monthly_payment,
            balance,
            annual_rate,
        )
        return PayoffProjection(months=None, total_interest=None, payoff_date=None)

    total_interest = 0.0 if annual_rate == 0 else monthly_payment * months - balance
    return PayoffProjection(
        months=months,
        total_interest=total_interest,
        payoff_date=add_months(today, months),
    )


def _year_to_date(payments: Iterable[DebtPayment], year: int) -> List[DebtPayment]:
    return [p for p in payments if p.date.year == year]


def _category_breakdown(ledger: DebtLedger, active: List[DebtEntry], total: float) -> List[CategoryBreakdown]:
    rows: List[CategoryBreakdown] = []
    for category in ledger.categories:
        members = [d for d in active if d.category_id == category.id]
        category_debt = metrics.total_debt(members)
        if category_debt <= 0:
            continue
        rows.append(
            CategoryBreakdown(
                category_id=category.id,
                category_name=category.name,
                total_debt=category_debt,
                monthly_payment=metrics.monthly_debt_payments(members),
                percentage=category_debt / total * 100 if total > 0 else 0.0,
                average_rate=metrics.weighted_average_rate(members),
            )
        )
    rows.sort(key=lambda row: row.total_debt, reverse=True)
    return rows


def _priority_breakdown(active: List[DebtEntry]) -> Dict[str, PriorityBreakdown]:
    breakdown = {priority: PriorityBreakdown() for priority in PRIORITIES}
    for debt in active:
        bucket = breakdown[debt.priority]
        bucket.count += 1
        bucket.total_debt += debt.current_balance
        bucket.monthly_payment += debt.monthly_payment
    return breakdown


def compute_debt_stats(
    ledger: DebtLedger,
    assumed_monthly_income: float,
    today: Optional[dt.date] = None,
) -> DebtStats:
    """
    Portfolio snapshot of the active debts:
    - Totals and year-to-date interest/principal paid (calendar year of `today`)
    - Balance-weighted average rate
    - Payoff projection treating the whole portfolio as one blended debt
    - Breakdown by category (non-empty only, largest first) and by priority
    """
    today = today or dt.date.today()
    active = ledger.active_debts

    total = metrics.total_debt(active)
    total_payments = metrics.monthly_debt_payments(active)
    average_rate = metrics.weighted_average_rate(active)

    ytd = _year_to_date(ledger.payments, today.year)
    interest_paid = sum(p.interest_amount for p in ytd)
    principal_paid = sum(p.principal_amount for p in ytd)

    dti = total_payments / assumed_monthly_income * 100 if assumed_monthly_income > 0 else 0.0

    stats = DebtStats(
        total_debt=total,
        total_monthly_payments=total_payments,
        total_interest_paid=float(interest_paid),
        total_principal_paid=float(principal_paid),
        average_interest_rate=average_rate,
        debt_to_income_ratio=dti,
        payoff_projection=project_payoff(total, average_rate, total_payments, today),
        by_category=_category_breakdown(ledger, active, total),
        by_priority=_priority_breakdown(active),
    )
    logger.debug(
        "Debt stats: %d active debts, total %.2f, avg rate %.2f%%",
        len(active),
        total,
        average_rate,
    )
    return stats
