from __future__ import annotations

import logging
from typing import List, Tuple

from finpulse_core.domain.models import FinancialSnapshot, HealthReport
from finpulse_core.services import metrics


logger = logging.getLogger(__name__)

# (threshold, points), checked top to bottom
SAVINGS_RATE_BANDS: Tuple[Tuple[float, int], ...] = ((20, 25), (10, 15), (5, 10))
DEBT_TO_ASSET_BANDS: Tuple[Tuple[float, int], ...] = ((30, 25), (50, 15), (70, 10))
EMERGENCY_MONTHS_BANDS: Tuple[Tuple[float, int], ...] = ((6, 25), (3, 15), (1, 10))
STATUS_BANDS: Tuple[Tuple[int, str], ...] = ((80, "Excellent"), (60, "Good"), (40, "Fair"))
DEFAULT_STATUS = "Needs improvement"


def _at_least(value: float, bands) -> int:
    for threshold, points in bands:
        if value >= threshold:
            return points
    return 0


def _at_most(value: float, bands) -> int:
    for threshold, points in bands:
        if value <= threshold:
            return points
    return 0


def score_bands(
    net_worth: float,
    savings_rate: float,
    debt_to_asset_ratio: float,
    emergency_fund_months: float,
) -> int:
    """
    Composite 0-100 score: four independent 25-point bands.
    - Net worth positive: 25, no partial credit
    - Savings rate >= 20/10/5 %: 25/15/10
    - Debt-to-asset <= 30/50/70 %: 25/15/10
    - Emergency fund >= 6/3/1 months: 25/15/10
    """
    score = 25 if net_worth > 0 else 0
    score += _at_least(savings_rate, SAVINGS_RATE_BANDS)
    score += _at_most(debt_to_asset_ratio, DEBT_TO_ASSET_BANDS)
    score += _at_least(emergency_fund_months, EMERGENCY_MONTHS_BANDS)
    return score


def status_for(score: int) -> str:
    for threshold, label in STATUS_BANDS:
        if score >= threshold:
            return label
    return DEFAULT_STATUS


def _recommendations(status: str, savings_rate: float, emergency_fund_months: float) -> List[str]:
    if status == "Excellent":
        return ["Keep up the current habits; your finances are in great shape."]
    if status == "Good":
        tips = ["Your finances are in good shape, with room to improve."]
    elif status == "Fair":
        tips = ["Consider raising your savings rate."]
    else:
        tips = [
            "Your finances need attention: review spending and reduce debt first.",
            "Build a monthly budget and track it against actual expenses.",
        ]
    if emergency_fund_months < 3:
        tips.append("Prioritize building an emergency fund of at least 3 months of expenses.")
    if savings_rate < 10 and status != "Fair":
        tips.append("Aim to save at least 10% of your monthly income.")
    return tips


def assess_financial_health(snapshot: FinancialSnapshot) -> HealthReport:
    net_worth = metrics.net_worth(snapshot)
    savings_rate = metrics.savings_rate(snapshot)
    debt_ratio = metrics.debt_to_asset_ratio(snapshot)
    fund_months = metrics.emergency_fund_months(snapshot)

    score = score_bands(net_worth, savings_rate, debt_ratio, fund_months)
    status = status_for(score)
    logger.debug("Health score %d (%s)", score, status)

    return HealthReport(
        score=score,
        status=status,
        net_worth=net_worth,
        savings_rate=savings_rate,
        debt_to_asset_ratio=debt_ratio,
        monthly_savings=metrics.monthly_savings(snapshot),
        emergency_fund_months=fund_months,
        recommendations=_recommendations(status, savings_rate, fund_months),
    )
