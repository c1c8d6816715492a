from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Sequence, Union

import numpy as np

from finpulse_core.domain.models import (
    Account,
    Debt,
    DebtEntry,
    Expense,
    FinancialSnapshot,
    Income,
    Trend,
)


# Calendar averages: 52 weeks / 12 months and 26 fortnights / 12 months.
_MONTHLY_FACTORS = {
    "monthly": 1.0,
    "weekly": 4.33,
    "biweekly": 2.17,
    "one-time": 0.0,
}

_YEARLY_FACTORS = {
    "monthly": 12.0,
    "yearly": 1.0,
    "weekly": 52.0,
    "biweekly": 26.0,
    "one-time": 1.0,
}


def to_monthly(amount: float, frequency: str) -> float:
    if frequency == "yearly":
        return amount / 12
    return amount * _MONTHLY_FACTORS.get(frequency, 1.0)


def to_yearly(amount: float, frequency: str) -> float:
    return amount * _YEARLY_FACTORS.get(frequency, 1.0)


def total_balance(accounts: Iterable[Account]) -> float:
    return sum(a.balance for a in accounts if a.is_active)


def monthly_income(incomes: Iterable[Income]) -> float:
    return sum(to_monthly(i.amount, i.frequency) for i in incomes if i.is_active)


def monthly_expenses(expenses: Iterable[Expense]) -> float:
    return sum(to_monthly(e.amount, e.frequency) for e in expenses if e.is_active)


def total_debt(debts: Iterable[Union[Debt, DebtEntry]]) -> float:
    """Σ amount for simple debts, Σ current_balance for ledger entries; active only."""
    total = 0.0
    for debt in debts:
        if not debt.is_active:
            continue
        total += debt.current_balance if isinstance(debt, DebtEntry) else debt.amount
    return total


def monthly_debt_payments(debts: Iterable[Union[Debt, DebtEntry]]) -> float:
    return sum(d.monthly_payment for d in debts if d.is_active)


def monthly_savings(snapshot: FinancialSnapshot) -> float:
    return (
        monthly_income(snapshot.incomes)
        - monthly_expenses(snapshot.expenses)
        - monthly_debt_payments(snapshot.debts)
    )


def net_worth(snapshot: FinancialSnapshot) -> float:
    return total_balance(snapshot.accounts) - total_debt(snapshot.debts)


def savings_rate(snapshot: FinancialSnapshot) -> float:
    income = monthly_income(snapshot.incomes)
    if income == 0:
        return 0.0
    return monthly_savings(snapshot) / income * 100


def debt_to_asset_ratio(snapshot: FinancialSnapshot) -> float:
    assets = total_balance(snapshot.accounts)
    debt = total_debt(snapshot.debts)
    if assets == 0:
        return 100.0 if debt > 0 else 0.0
    return debt / assets * 100


def expenses_by_category(expenses: Iterable[Expense]) -> Dict[str, float]:
    grouped: Dict[str, float] = defaultdict(float)
    for expense in expenses:
        if expense.is_active:
            grouped[expense.category] += to_monthly(expense.amount, expense.frequency)
    return dict(grouped)


def emergency_fund_balance(accounts: Iterable[Account]) -> float:
    return total_balance(a for a in accounts if a.type == "savings")


def emergency_fund_months(snapshot: FinancialSnapshot) -> float:
    expenses = monthly_expenses(snapshot.expenses)
    if expenses <= 0:
        return 0.0
    return emergency_fund_balance(snapshot.accounts) / expenses


def weighted_average_rate(debts: Sequence[DebtEntry]) -> float:
    """Balance-weighted mean interest rate; 0 when there is no balance."""
    balances = np.array([d.current_balance for d in debts], dtype=float)
    if balances.size == 0 or balances.sum() <= 0:
        return 0.0
    rates = np.array([d.interest_rate for d in debts], dtype=float)
    return float(np.average(rates, weights=balances))


def percent_change(value: float, previous: float) -> Trend:
    """Direction and size of the move from `previous` to `value` (moves under 1% are neutral)."""
    if not previous:
        return Trend(direction="neutral", percentage=0.0)
    change = (value - previous) / previous * 100
    if abs(change) < 1:
        return Trend(direction="neutral", percentage=0.0)
    return Trend(direction="up" if change > 0 else "down", percentage=abs(change))
