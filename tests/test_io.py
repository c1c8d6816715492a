import datetime as dt
import json
from pathlib import Path

import pytest

from finpulse_core.domain.models import DebtEntry, ExpenseCategory, IncomeSource, Portfolio
from finpulse_core.io.config import load_engine_config
from finpulse_core.io.snapshot import build_record, load_payments_csv, load_portfolio, portfolio_from_dict
from finpulse_core.io.store import InMemorySnapshotStore, JsonSnapshotStore


DATA = Path(__file__).parent / "data"


def test_load_portfolio_accepts_camel_case():
    portfolio = load_portfolio(DATA / "snapshot.json")
    finances, ledger = portfolio.finances, portfolio.ledger

    assert len(finances.accounts) == 3
    assert finances.accounts[2].is_active is False
    assert finances.debts[0].monthly_payment == 500

    card = ledger.find_debt("card-1")
    assert card.creditor_name == "Visa Gold"
    assert card.minimum_payment == 45
    assert card.start_date == dt.date(2023, 6, 1)
    assert card.debt_type == "revolving"
    assert ledger.payments[0].date == dt.date(2026, 2, 10)
    assert [c.id for c in ledger.categories] == ["cat-cards", "cat-loans", "cat-mortgage"]


def test_unknown_section_is_rejected():
    with pytest.raises(ValueError):
        portfolio_from_dict({"goals": []})


def test_missing_required_field_is_rejected():
    with pytest.raises(ValueError):
        portfolio_from_dict({"accounts": [{"id": "a", "balance": 10}]})


def test_missing_snapshot_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_portfolio(tmp_path / "nope.json")


def test_load_payments_csv():
    payments = load_payments_csv(DATA / "payments.csv")
    assert [p.id for p in payments] == ["p1", "p2"]
    assert payments[0].payment_type == "mixed"
    assert payments[0].date == dt.date(2026, 1, 10)
    assert payments[0].interest_amount == pytest.approx(35.25)
    assert payments[1].description == ""


def test_blank_split_cells_count_as_zero(tmp_path: Path):
    path = tmp_path / "payments.csv"
    path.write_text(
        "id,debt_id,amount,date,payment_type,principal_amount,interest_amount\n"
        "1,d,100,2026-01-01,principal,100,\n"
        "2,d,40,2026-02-01,interest,,40\n"
    )
    first, second = load_payments_csv(path)
    assert (first.principal_amount, first.interest_amount) == (100, 0)
    assert (second.principal_amount, second.interest_amount) == (0, 40)


def test_blank_payment_amount_is_rejected(tmp_path: Path):
    path = tmp_path / "payments.csv"
    path.write_text(
        "id,debt_id,amount,date,payment_type,principal_amount,interest_amount\n"
        "1,d,100,2026-01-01,principal,100,0\n"
        "2,d,,2026-02-01,principal,0,0\n"
    )
    with pytest.raises(ValueError, match=r"lines \[3\]"):
        load_payments_csv(path)


def test_load_payments_csv_missing_columns(tmp_path: Path):
    path = tmp_path / "bad.csv"
    path.write_text("id,amount\n1,10\n")
    with pytest.raises(ValueError):
        load_payments_csv(path)


def test_load_engine_config():
    config = load_engine_config(DATA / "config.json")
    assert config.projection_years == 5
    assert config.assumed_monthly_income == 4000
    assert config.target_months == 24
    assert config.emergency_plan == "conservative"
    assert config.log_level == "WARNING"


def test_engine_config_defaults_and_validation(tmp_path: Path):
    path = tmp_path / "config.json"
    path.write_text("{}")
    config = load_engine_config(path)
    assert (config.projection_years, config.extra_payment, config.target_months) == (15, 100.0, 36)

    path.write_text(json.dumps({"target_months": 0}))
    with pytest.raises(ValueError):
        load_engine_config(path)


def test_json_store_round_trip(tmp_path: Path):
    store = JsonSnapshotStore(tmp_path / "state" / "snapshot.json")
    assert store.load() == Portfolio()

    portfolio = load_portfolio(DATA / "snapshot.json")
    store.save(portfolio)
    assert store.load() == portfolio


def test_in_memory_store():
    store = InMemorySnapshotStore()
    portfolio = load_portfolio(DATA / "snapshot.json")
    store.save(portfolio)
    assert store.load() is portfolio


def test_load_portfolio_reads_entry_journal():
    journal = load_portfolio(DATA / "snapshot.json").journal
    assert [s.id for s in journal.income_sources] == ["src-salary", "src-side"]
    assert journal.income_sources[1].default_amount == 300.0
    assert journal.income_entries[0].date == dt.date(2026, 6, 1)
    assert journal.income_entries[0].is_recurring is True
    assert journal.expense_categories[0].budget_limit == 2100.0
    assert journal.expense_categories[1].budget_limit is None
    assert [e.is_essential for e in journal.expense_entries] == [True, False]


def test_build_record_coerces_by_field_type():
    # date-looking or numeric values in str fields stay strings
    source = build_record(IncomeSource, {"id": 7, "name": 2026, "defaultAmount": "150", "isActive": "no"})
    assert (source.id, source.name) == ("7", "2026")
    assert source.default_amount == 150.0
    assert source.is_active is False

    category = build_record(ExpenseCategory, {"id": "c", "name": "Food", "budgetLimit": None})
    assert category.budget_limit is None

    debt = build_record(
        DebtEntry,
        {
            "id": "d",
            "categoryId": "c",
            "creditorName": "Bank",
            "originalAmount": "100",
            "currentBalance": 50,
            "interestRate": "5",
            "monthlyPayment": 10,
            "dueDate": "2026-03-01T00:00:00Z",
            "description": "2026-01-01 refinance",
        },
    )
    assert debt.due_date == dt.date(2026, 3, 1)
    assert debt.description == "2026-01-01 refinance"
    assert debt.original_amount == 100.0


def test_negative_simple_debt_is_rejected():
    with pytest.raises(ValueError):
        portfolio_from_dict(
            {"debts": [{"id": "d", "description": "x", "amount": -500, "interestRate": 0, "monthlyPayment": 0}]}
        )
