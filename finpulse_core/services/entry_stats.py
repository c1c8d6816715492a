from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional

import pandas as pd

from finpulse_core.domain.models import (
    BudgetStatus,
    EssentialSplit,
    ExpenseCategory,
    ExpenseCategoryBreakdown,
    ExpenseEntry,
    ExpenseStats,
    IncomeEntry,
    IncomeSource,
    IncomeStats,
    PeriodTotals,
    SourceBreakdown,
)


logger = logging.getLogger(__name__)


def growth_rate(current: float, previous: float) -> float:
    """Percent change against the previous period; starting from nothing counts as +100%."""
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def _frame(rows: List[dict]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=["key", "amount", "date", "essential"])
    df["amount"] = df["amount"].astype(float)
    df["month"] = pd.to_datetime(df["date"]).dt.to_period("M")
    return df


def _period_totals(df: pd.DataFrame, today: dt.date) -> PeriodTotals:
    this_month = pd.Timestamp(today).to_period("M")
    years = df["month"].dt.year

    totals = {
        "this_month": df.loc[df["month"] == this_month, "amount"].sum(),
        "last_month": df.loc[df["month"] == this_month - 1, "amount"].sum(),
        "this_year": df.loc[years == today.year, "amount"].sum(),
        "last_year": df.loc[years == today.year - 1, "amount"].sum(),
    }
    totals = {k: float(v) for k, v in totals.items()}
    return PeriodTotals(
        **totals,
        average_monthly=totals["this_year"] / today.month,
        monthly_growth=growth_rate(totals["this_month"], totals["last_month"]),
        yearly_growth=growth_rate(totals["this_year"], totals["last_year"]),
    )


def _this_year(df: pd.DataFrame, today: dt.date) -> pd.DataFrame:
    return df[df["month"].dt.year == today.year]


def income_stats(
    entries: Iterable[IncomeEntry],
    sources: Iterable[IncomeSource],
    today: Optional[dt.date] = None,
) -> IncomeStats:
    """
    Period totals and growth for dated income entries, plus this year's
    split by source (sources without income this year are left out).
    """
    today = today or dt.date.today()
    df = _frame([{"key": e.source_id, "amount": e.amount, "date": e.date, "essential": False} for e in entries])
    totals = _period_totals(df, today)

    by_key = _this_year(df, today).groupby("key")["amount"].sum()
    breakdown = []
    for source in sources:
        total = float(by_key.get(source.id, 0.0))
        if total <= 0:
            continue
        breakdown.append(
            SourceBreakdown(
                source_id=source.id,
                source_name=source.name,
                total=total,
                percentage=total / totals.this_year * 100 if totals.this_year > 0 else 0.0,
            )
        )
    breakdown.sort(key=lambda b: b.total, reverse=True)

    logger.debug("Income this year %.2f across %d sources", totals.this_year, len(breakdown))
    return IncomeStats(totals=totals, by_source=breakdown)


def expense_stats(
    entries: Iterable[ExpenseEntry],
    categories: Iterable[ExpenseCategory],
    today: Optional[dt.date] = None,
) -> ExpenseStats:
    """
    Period totals and growth for dated expense entries, this year's split by
    category with budget usage, the overall yearly budget status and the
    essential vs non-essential split.

    Monthly budget limits are compared against yearly spend, so a category's
    budget is `budget_limit * 12`.
    """
    today = today or dt.date.today()
    categories = list(categories)
    df = _frame(
        [{"key": e.category_id, "amount": e.amount, "date": e.date, "essential": e.is_essential} for e in entries]
    )
    totals = _period_totals(df, today)
    spent = totals.this_year

    year_df = _this_year(df, today)
    by_key = year_df.groupby("key")["amount"].sum()
    breakdown = []
    for category in categories:
        total = float(by_key.get(category.id, 0.0))
        if total <= 0:
            continue
        breakdown.append(
            ExpenseCategoryBreakdown(
                category_id=category.id,
                category_name=category.name,
                total=total,
                percentage=total / spent * 100 if spent > 0 else 0.0,
                budget_usage=total / (category.budget_limit * 12) * 100 if category.budget_limit else None,
            )
        )
    breakdown.sort(key=lambda b: b.total, reverse=True)

    total_budget = sum(c.budget_limit or 0.0 for c in categories) * 12
    budget = BudgetStatus(
        total_budget=total_budget,
        total_spent=spent,
        remaining=total_budget - spent,
        percentage_used=spent / total_budget * 100 if total_budget > 0 else 0.0,
    )

    essential = float(year_df.loc[year_df["essential"].astype(bool), "amount"].sum())
    split = EssentialSplit(
        essential=essential,
        non_essential=spent - essential,
        essential_percentage=essential / spent * 100 if spent > 0 else 0.0,
    )

    if budget.remaining < 0:
        logger.info("Spending %.2f is over the yearly budget %.2f", spent, total_budget)
    return ExpenseStats(totals=totals, by_category=breakdown, budget_status=budget, essential_split=split)
