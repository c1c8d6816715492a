from __future__ import annotations

import logging
from typing import List

from finpulse_core.domain.models import FinancialSnapshot, ProjectionPoint
from finpulse_core.services import metrics
from finpulse_core.services.amortization import simulate_fixed_payments


logger = logging.getLogger(__name__)


def generate_projections(snapshot: FinancialSnapshot, years: int = 15) -> List[ProjectionPoint]:
    """
    Yearly projection over `years`:
    - Debts are amortized month by month with their current fixed payments.
    - Savings grow linearly (monthly savings * elapsed months, no interest).
    - Net worth is current net worth plus accumulated savings; the amortized
      debt figure is reported alongside but not folded back into net worth.
    """
    savings_per_month = metrics.monthly_savings(snapshot)
    current_net_worth = metrics.net_worth(snapshot)
    initial_debt = metrics.total_debt(snapshot.debts)
    active_debts = [d for d in snapshot.debts if d.is_active]

    points: List[ProjectionPoint] = []
    for year in range(1, years + 1):
        months = year * 12
        projected_debt = 0.0
        for debt in active_debts:
            sim = simulate_fixed_payments(debt.amount, debt.interest_rate, debt.monthly_payment, months)
            projected_debt += sim.remaining_balance
        projected_savings = savings_per_month * months
        points.append(
            ProjectionPoint(
                year=year,
                net_worth=current_net_worth + projected_savings,
                total_debt=projected_debt,
                savings=projected_savings,
                initial_debt=initial_debt,
            )
        )

    logger.debug("Generated %d projection points", len(points))
    return points
