import pytest

from finpulse_core.domain.models import Account, Debt, DebtEntry, Expense, FinancialSnapshot, Income
from finpulse_core.services import metrics


def _snapshot(**overrides) -> FinancialSnapshot:
    data = dict(
        accounts=(
            Account(id="a1", name="Checking", balance=4000.0, type="checking"),
            Account(id="a2", name="Savings", balance=6000.0, type="savings"),
        ),
        incomes=(Income(id="i1", description="Salary", amount=5000.0),),
        expenses=(
            Expense(id="e1", description="Rent", amount=2000.0, category="housing"),
            Expense(id="e2", description="Insurance", amount=12000.0, frequency="yearly", category="insurance"),
        ),
        debts=(Debt(id="d1", description="Car", amount=1000.0, interest_rate=0.0, monthly_payment=500.0),),
    )
    data.update(overrides)
    return FinancialSnapshot(**data)


@pytest.mark.parametrize("amount", [100.0, 1234.56, 0.0])
@pytest.mark.parametrize("frequency", ["monthly", "yearly"])
def test_monthly_yearly_round_trip(amount, frequency):
    yearly = metrics.to_yearly(amount, frequency)
    assert metrics.to_monthly(yearly, "yearly") == pytest.approx(metrics.to_monthly(amount, frequency))


def test_frequency_conversions():
    assert metrics.to_monthly(1200, "yearly") == 100
    assert metrics.to_monthly(100, "weekly") == pytest.approx(433)
    assert metrics.to_monthly(100, "biweekly") == pytest.approx(217)
    assert metrics.to_monthly(500, "one-time") == 0
    assert metrics.to_yearly(500, "one-time") == 500
    assert metrics.to_yearly(100, "weekly") == 5200


def test_aggregates():
    snap = _snapshot()
    assert metrics.total_balance(snap.accounts) == 10000
    assert metrics.monthly_income(snap.incomes) == 5000
    assert metrics.monthly_expenses(snap.expenses) == 3000
    assert metrics.monthly_debt_payments(snap.debts) == 500
    assert metrics.monthly_savings(snap) == 1500
    assert metrics.net_worth(snap) == 9000
    assert metrics.savings_rate(snap) == pytest.approx(30.0)
    assert metrics.debt_to_asset_ratio(snap) == pytest.approx(10.0)
    assert metrics.emergency_fund_months(snap) == pytest.approx(2.0)


def test_inactive_records_are_ignored():
    snap = _snapshot(
        accounts=(
            Account(id="a1", name="Checking", balance=1000.0),
            Account(id="a2", name="Closed", balance=500.0, is_active=False),
        ),
        incomes=(
            Income(id="i1", description="Salary", amount=2000.0),
            Income(id="i2", description="Old job", amount=900.0, is_active=False),
        ),
    )
    assert metrics.total_balance(snap.accounts) == 1000
    assert metrics.monthly_income(snap.incomes) == 2000


def test_savings_rate_without_income_is_zero():
    assert metrics.savings_rate(_snapshot(incomes=())) == 0


def test_debt_to_asset_ratio_without_assets():
    assert metrics.debt_to_asset_ratio(_snapshot(accounts=())) == 100
    assert metrics.debt_to_asset_ratio(_snapshot(accounts=(), debts=())) == 0


def test_emergency_fund_months_without_expenses():
    assert metrics.emergency_fund_months(_snapshot(expenses=())) == 0


def test_total_debt_for_ledger_entries_uses_active_balances():
    entries = [
        DebtEntry(id="x", category_id="c", creditor_name="X", original_amount=2000, current_balance=1500,
                  interest_rate=10, monthly_payment=100),
        DebtEntry(id="y", category_id="c", creditor_name="Y", original_amount=900, current_balance=900,
                  interest_rate=5, monthly_payment=50, is_active=False),
    ]
    assert metrics.total_debt(entries) == 1500
    assert metrics.monthly_debt_payments(entries) == 100


def test_expenses_by_category_normalizes_and_groups():
    expenses = [
        Expense(id="1", description="Groceries", amount=400, category="food"),
        Expense(id="2", description="Restaurants", amount=1200, frequency="yearly", category="food"),
        Expense(id="3", description="Rent", amount=900, category="housing"),
    ]
    assert metrics.expenses_by_category(expenses) == {"food": pytest.approx(500), "housing": 900}


def test_weighted_average_rate():
    debts = [
        DebtEntry(id="a", category_id="c", creditor_name="A", original_amount=1000, current_balance=1000,
                  interest_rate=10, monthly_payment=50),
        DebtEntry(id="b", category_id="c", creditor_name="B", original_amount=3000, current_balance=3000,
                  interest_rate=20, monthly_payment=90),
    ]
    assert metrics.weighted_average_rate(debts) == pytest.approx(17.5)
    assert metrics.weighted_average_rate([]) == 0


def test_percent_change():
    trend = metrics.percent_change(110, 100)
    assert trend.direction == "up"
    assert trend.percentage == pytest.approx(10)

    trend = metrics.percent_change(90, 100)
    assert trend.direction == "down"
    assert trend.percentage == pytest.approx(10)

    assert metrics.percent_change(100.5, 100).direction == "neutral"
    flat = metrics.percent_change(50, 0)
    assert (flat.direction, flat.percentage) == ("neutral", 0.0)
