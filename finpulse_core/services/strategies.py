from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from finpulse_core.domain.models import (
    DebtEntry,
    DebtLedger,
    DebtStats,
    PlannedPayment,
    StrategyComparison,
    StrategyResult,
)
from finpulse_core.services import metrics
from finpulse_core.services.amortization import payoff_months


logger = logging.getLogger(__name__)

# Blended ranking weights: interest normalized against 30%, balance inverted around 10k.
RATE_WEIGHT = 0.6
BALANCE_WEIGHT = 0.4
RATE_SCALE = 30.0
BALANCE_SCALE = 10_000.0


def payable_debts(ledger: DebtLedger) -> List[DebtEntry]:
    return [d for d in ledger.debts if d.is_active and d.current_balance > 0]


def _ranked_plan(
    name: str,
    description: str,
    ordered: Sequence[DebtEntry],
    extra_payment: float,
    base_payments: float,
    reasoning: Callable[[int, DebtEntry], str],
) -> StrategyResult:
    """
    Only the first debt in `ordered` receives the extra payment; the rest keep
    their current payment. Portfolio time is the slowest debt, interest the sum
    of (payment * months - balance) per debt.
    """
    plan: List[PlannedPayment] = []
    total_time: Optional[float] = 0
    total_interest: Optional[float] = 0.0

    for index, debt in enumerate(ordered):
        suggested = debt.monthly_payment + (extra_payment if index == 0 else 0.0)
        months = payoff_months(debt.current_balance, debt.interest_rate, suggested)
        if months is None:
            logger.warning("%s: debt %s never pays off at %.2f/month", name, debt.id, suggested)
            total_time = None
            total_interest = None
        elif total_time is not None and total_interest is not None:
            total_time = max(total_time, months)
            total_interest += max(0.0, suggested * months - debt.current_balance)

        plan.append(
            PlannedPayment(
                debt_id=debt.id,
                debt_name=debt.creditor_name,
                priority=index + 1,
                suggested_payment=suggested,
                current_payment=debt.monthly_payment,
                reasoning=reasoning(index, debt),
            )
        )

    return StrategyResult(
        name=name,
        description=description,
        total_time_months=total_time,
        total_interest=total_interest,
        total_monthly_payment=base_payments + extra_payment,
        payment_plan=plan,
    )


def avalanche(ledger: DebtLedger, extra_payment: float) -> StrategyResult:
    ordered = sorted(payable_debts(ledger), key=lambda d: d.interest_rate, reverse=True)

    def reasoning(index: int, debt: DebtEntry) -> str:
        if index == 0:
            return f"Top priority: highest interest rate ({debt.interest_rate}%)"
        return f"Priority {index + 1}: rate {debt.interest_rate}%"

    return _ranked_plan(
        "Avalanche",
        "Pay off the debts with the highest interest rates first",
        ordered,
        extra_payment,
        metrics.monthly_debt_payments(ledger.active_debts),
        reasoning,
    )


def snowball(ledger: DebtLedger, extra_payment: float) -> StrategyResult:
    ordered = sorted(payable_debts(ledger), key=lambda d: d.current_balance)

    def reasoning(index: int, debt: DebtEntry) -> str:
        if index == 0:
            return f"Top priority: smallest balance ({debt.current_balance:,.2f})"
        return f"Priority {index + 1}: balance {debt.current_balance:,.2f}"

    return _ranked_plan(
        "Snowball",
        "Pay off the debts with the smallest balances first",
        ordered,
        extra_payment,
        metrics.monthly_debt_payments(ledger.active_debts),
        reasoning,
    )


def fixed_term(ledger: DebtLedger, target_months: int) -> StrategyResult:
    """Spread whatever is missing to clear everything in `target_months` proportionally to balance."""
    if target_months <= 0:
        raise ValueError("target_months must be positive")

    debts = payable_debts(ledger)
    total = metrics.total_debt(debts)
    required = total / target_months
    additional = max(0.0, required - metrics.monthly_debt_payments(ledger.active_debts))

    plan = []
    for index, debt in enumerate(debts):
        share = debt.current_balance / total if total > 0 else 0.0
        plan.append(
            PlannedPayment(
                debt_id=debt.id,
                debt_name=debt.creditor_name,
                priority=index + 1,
                suggested_payment=debt.monthly_payment + additional * share,
                current_payment=debt.monthly_payment,
                reasoning=f"Proportional payment to clear the balance in {target_months} months",
            )
        )

    return StrategyResult(
        name="Fixed term",
        description=f"Clear every debt in {target_months} months",
        total_time_months=target_months,
        total_interest=max(0.0, required * target_months - total),
        total_monthly_payment=required,
        payment_plan=plan,
        monthly_increase=additional,
    )


def blended_score(debt: DebtEntry) -> float:
    rate_score = debt.interest_rate / RATE_SCALE
    balance_score = BALANCE_SCALE / debt.current_balance if debt.current_balance > 0 else 0.0
    return RATE_WEIGHT * rate_score + BALANCE_WEIGHT * balance_score


def _mean(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return (a + b) / 2


def blended(
    ledger: DebtLedger,
    extra_payment: float,
    avalanche_result: Optional[StrategyResult] = None,
    snowball_result: Optional[StrategyResult] = None,
) -> StrategyResult:
    """
    Rank by a mix of interest rate and small balance. Time and interest are
    not simulated: they are the mean of the avalanche and snowball totals.
    """
    avalanche_result = avalanche_result or avalanche(ledger, extra_payment)
    snowball_result = snowball_result or snowball(ledger, extra_payment)
    ordered = sorted(payable_debts(ledger), key=blended_score, reverse=True)

    plan = []
    for index, debt in enumerate(ordered):
        plan.append(
            PlannedPayment(
                debt_id=debt.id,
                debt_name=debt.creditor_name,
                priority=index + 1,
                suggested_payment=debt.monthly_payment + (extra_payment if index == 0 else 0.0),
                current_payment=debt.monthly_payment,
                reasoning=(
                    f"Best balance between rate ({debt.interest_rate}%) and remaining balance"
                    if index == 0
                    else f"Priority {index + 1} in the blended ranking"
                ),
            )
        )

    return StrategyResult(
        name="Blended",
        description="Combines interest savings with quick wins on small balances",
        total_time_months=_mean(avalanche_result.total_time_months, snowball_result.total_time_months),
        total_interest=_mean(avalanche_result.total_interest, snowball_result.total_interest),
        total_monthly_payment=metrics.monthly_debt_payments(ledger.active_debts) + extra_payment,
        payment_plan=plan,
    )


def compare_strategies(ledger: DebtLedger, extra_payment: float, target_months: int) -> List[StrategyResult]:
    avalanche_result = avalanche(ledger, extra_payment)
    snowball_result = snowball(ledger, extra_payment)
    return [
        avalanche_result,
        snowball_result,
        fixed_term(ledger, target_months),
        blended(ledger, extra_payment, avalanche_result, snowball_result),
    ]


def savings_versus_current(strategy: StrategyResult, stats: DebtStats) -> StrategyComparison:
    """Interest and months saved relative to the current payoff projection; None when either side never pays off."""
    current = stats.payoff_projection
    interest_savings = None
    if current.total_interest is not None and strategy.total_interest is not None:
        interest_savings = current.total_interest - strategy.total_interest
    time_savings = None
    if current.months is not None and strategy.total_time_months is not None:
        time_savings = current.months - strategy.total_time_months
    return StrategyComparison(
        strategy=strategy.name,
        interest_savings=interest_savings,
        time_savings=time_savings,
    )
