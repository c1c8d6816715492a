import datetime as dt

import pytest

from finpulse_core.domain.models import DebtCategory, DebtEntry, DebtLedger, DebtPayment
from finpulse_core.services.debt_stats import add_months, compute_debt_stats, project_payoff


TODAY = dt.date(2026, 1, 31)


def _debt(debt_id, balance, rate, payment, category="cards", priority="medium", active=True):
    return DebtEntry(
        id=debt_id,
        category_id=category,
        creditor_name=debt_id.title(),
        original_amount=max(balance, 1.0) * 2,
        current_balance=balance,
        interest_rate=rate,
        monthly_payment=payment,
        priority=priority,
        is_active=active,
    )


def _ledger(*debts, payments=()):
    categories = (
        DebtCategory(id="cards", name="Credit cards"),
        DebtCategory(id="loans", name="Loans"),
        DebtCategory(id="empty", name="Nothing here"),
    )
    return DebtLedger(categories=categories, debts=tuple(debts), payments=tuple(payments))


def test_totals_and_weighted_rate():
    ledger = _ledger(
        _debt("card", 1000, 10, 100, priority="high"),
        _debt("loan", 3000, 20, 200, category="loans"),
        _debt("closed", 500, 30, 50, active=False),
    )
    stats = compute_debt_stats(ledger, assumed_monthly_income=3000, today=TODAY)

    assert stats.total_debt == 4000
    assert stats.total_monthly_payments == 300
    assert stats.average_interest_rate == pytest.approx(17.5)
    assert stats.debt_to_income_ratio == pytest.approx(10.0)


def test_blended_payoff_projection():
    ledger = _ledger(_debt("card", 1000, 10, 100), _debt("loan", 3000, 20, 200, category="loans"))
    projection = compute_debt_stats(ledger, 3000, today=TODAY).payoff_projection

    assert projection.months == 15
    assert projection.total_interest == pytest.approx(300 * 15 - 4000)
    # Jan 31 + 15 months lands on the last day of April
    assert projection.payoff_date == dt.date(2027, 4, 30)


def test_payoff_projection_without_debt_or_payments():
    empty = compute_debt_stats(_ledger(), 3000, today=TODAY).payoff_projection
    assert (empty.months, empty.total_interest, empty.payoff_date) == (0, 0.0, TODAY)

    unpaid = compute_debt_stats(_ledger(_debt("card", 1000, 10, 0)), 3000, today=TODAY).payoff_projection
    assert (unpaid.months, unpaid.total_interest, unpaid.payoff_date) == (0, 0.0, TODAY)


def test_payoff_projection_at_zero_rate():
    projection = project_payoff(1000, 0, 300, TODAY)
    assert projection.months == 4
    assert projection.total_interest == 0


def test_payoff_projection_never_converges():
    stats = compute_debt_stats(_ledger(_debt("card", 10000, 24, 100)), 3000, today=TODAY)
    assert stats.payoff_projection.never
    assert stats.payoff_projection.total_interest is None
    assert stats.debt_free_date is None


def test_year_to_date_payments_only():
    payments = [
        DebtPayment(id="p1", debt_id="card", amount=100, date=dt.date(2026, 1, 5),
                    principal_amount=80, interest_amount=20),
        DebtPayment(id="p2", debt_id="card", amount=100, date=dt.date(2025, 12, 5),
                    principal_amount=70, interest_amount=30),
    ]
    stats = compute_debt_stats(_ledger(_debt("card", 1000, 10, 100), payments=payments), 3000, today=TODAY)
    assert stats.total_interest_paid == 20
    assert stats.total_principal_paid == 80


def test_category_breakdown_skips_empty_and_sorts_by_debt():
    ledger = _ledger(
        _debt("card", 1000, 10, 100),
        _debt("loan-a", 2000, 6, 150, category="loans"),
        _debt("loan-b", 1000, 12, 50, category="loans"),
    )
    rows = compute_debt_stats(ledger, 3000, today=TODAY).by_category

    assert [r.category_id for r in rows] == ["loans", "cards"]
    loans = rows[0]
    assert loans.total_debt == 3000
    assert loans.monthly_payment == 200
    assert loans.percentage == pytest.approx(75)
    assert loans.average_rate == pytest.approx(8.0)


def test_priority_breakdown_is_a_fixed_partition():
    ledger = _ledger(
        _debt("a", 1000, 10, 100, priority="high"),
        _debt("b", 500, 10, 40, priority="high"),
        _debt("c", 800, 10, 60, priority="low"),
    )
    by_priority = compute_debt_stats(ledger, 3000, today=TODAY).by_priority

    assert set(by_priority) == {"high", "medium", "low"}
    assert by_priority["high"].count == 2
    assert by_priority["high"].total_debt == 1500
    assert by_priority["high"].monthly_payment == 140
    assert by_priority["medium"].count == 0
    assert by_priority["low"].total_debt == 800


def test_debt_to_income_without_income_is_zero():
    stats = compute_debt_stats(_ledger(_debt("card", 1000, 10, 100)), 0, today=TODAY)
    assert stats.debt_to_income_ratio == 0


def test_add_months():
    assert add_months(dt.date(2026, 1, 15), 1) == dt.date(2026, 2, 15)
    assert add_months(dt.date(2026, 1, 31), 1) == dt.date(2026, 2, 28)
    assert add_months(dt.date(2026, 11, 10), 14) == dt.date(2028, 1, 10)
