from __future__ import annotations

import math

from finpulse_core.domain.models import EmergencyFundMetrics


EMERGENCY_PLANS = {
    "conservative": 8,
    "moderate": 6,
    "aggressive": 3,
}


def plan_months(plan: str) -> int:
    try:
        return EMERGENCY_PLANS[plan]
    except KeyError as exc:
        raise ValueError(f"Unknown emergency plan {plan!r}; expected one of {sorted(EMERGENCY_PLANS)}") from exc


def emergency_fund_metrics(
    monthly_expenses: float,
    current_fund: float,
    months: int,
    monthly_contribution: float = 0.0,
) -> EmergencyFundMetrics:
    target = monthly_expenses * months
    progress = current_fund / target * 100 if target > 0 else 0.0
    remaining = max(0.0, target - current_fund)
    return EmergencyFundMetrics(
        target_amount=target,
        progress_percentage=progress,
        remaining=remaining,
        current_months=current_fund / monthly_expenses if monthly_expenses > 0 else 0.0,
        months_to_complete=math.ceil(remaining / monthly_contribution) if monthly_contribution > 0 else 0,
        is_complete=progress >= 100,
    )
