from __future__ import annotations

import dataclasses
import datetime as dt
import json
import re
import types
import typing
from pathlib import Path
from typing import Any, Dict, Iterable, List, Type, TypeVar, Union

import pandas as pd

from finpulse_core.domain.models import (
    Account,
    Debt,
    DebtCategory,
    DebtEntry,
    DebtLedger,
    DebtPayment,
    EntryJournal,
    Expense,
    ExpenseCategory,
    ExpenseEntry,
    FinancialSnapshot,
    Income,
    IncomeEntry,
    IncomeSource,
    Portfolio,
)


T = TypeVar("T")

REQUIRED_PAYMENT_COLUMNS = {
    "id",
    "debt_id",
    "amount",
    "date",
    "payment_type",
    "principal_amount",
    "interest_amount",
}

# blank cells in these columns mean "nothing split out"
OPTIONAL_AMOUNT_COLUMNS = ("principal_amount", "interest_amount")

# snapshot key -> record type
SECTIONS = {
    "accounts": Account,
    "incomes": Income,
    "expenses": Expense,
    "debts": Debt,
    "debt_categories": DebtCategory,
    "debt_entries": DebtEntry,
    "debt_payments": DebtPayment,
    "income_sources": IncomeSource,
    "income_entries": IncomeEntry,
    "expense_categories": ExpenseCategory,
    "expense_entries": ExpenseEntry,
}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _parse_date(value: Any) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


def _field_type(hint: Any) -> Any:
    """Strip `Optional[...]` so the coercion below sees the concrete type."""
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def build_record(cls: Type[T], raw: Dict[str, Any]) -> T:
    """Build a record from a raw mapping; camelCase keys are accepted and unknown keys ignored."""
    hints = {name: _field_type(hint) for name, hint in typing.get_type_hints(cls).items()}
    names = {f.name for f in dataclasses.fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _snake(key)
        if name not in names or value is None:
            continue
        target = hints[name]
        if target is dt.date:
            value = _parse_date(value)
        elif target is float:
            value = float(value)
        elif target is bool:
            value = value if isinstance(value, bool) else str(value).strip().lower() in ("1", "true", "yes")
        elif target is str:
            value = str(value)
        kwargs[name] = value
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ValueError(f"Invalid {cls.__name__} record {raw!r}: {exc}") from exc


def _build_all(cls: Type[T], rows: Iterable[Dict[str, Any]]) -> tuple:
    return tuple(build_record(cls, row) for row in rows or [])


def portfolio_from_dict(data: Dict[str, Any]) -> Portfolio:
    normalized = {_snake(k): v for k, v in data.items()}
    unknown = set(normalized) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown snapshot sections: {sorted(unknown)}")
    finances = FinancialSnapshot(
        accounts=_build_all(Account, normalized.get("accounts")),
        incomes=_build_all(Income, normalized.get("incomes")),
        expenses=_build_all(Expense, normalized.get("expenses")),
        debts=_build_all(Debt, normalized.get("debts")),
    )
    ledger = DebtLedger(
        categories=_build_all(DebtCategory, normalized.get("debt_categories")),
        debts=_build_all(DebtEntry, normalized.get("debt_entries")),
        payments=_build_all(DebtPayment, normalized.get("debt_payments")),
    )
    journal = EntryJournal(
        income_sources=_build_all(IncomeSource, normalized.get("income_sources")),
        income_entries=_build_all(IncomeEntry, normalized.get("income_entries")),
        expense_categories=_build_all(ExpenseCategory, normalized.get("expense_categories")),
        expense_entries=_build_all(ExpenseEntry, normalized.get("expense_entries")),
    )
    return Portfolio(finances=finances, ledger=ledger, journal=journal)


def portfolio_to_dict(portfolio: Portfolio) -> Dict[str, List[Dict[str, Any]]]:
    finances, ledger, journal = portfolio.finances, portfolio.ledger, portfolio.journal
    return to_jsonable(
        {
            "accounts": finances.accounts,
            "incomes": finances.incomes,
            "expenses": finances.expenses,
            "debts": finances.debts,
            "debt_categories": ledger.categories,
            "debt_entries": ledger.debts,
            "debt_payments": ledger.payments,
            "income_sources": journal.income_sources,
            "income_entries": journal.income_entries,
            "expense_categories": journal.expense_categories,
            "expense_entries": journal.expense_entries,
        }
    )


def to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, (dt.date, dt.datetime)):
        return obj.isoformat()
    return obj


def load_portfolio(path: str | Path) -> Portfolio:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot {path} must contain a JSON object")
    return portfolio_from_dict(data)


def load_payments_csv(csv_path: str | Path) -> List[DebtPayment]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype={"id": str, "debt_id": str})
    missing = REQUIRED_PAYMENT_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in payments CSV: {missing}")

    blank = df[sorted(REQUIRED_PAYMENT_COLUMNS - set(OPTIONAL_AMOUNT_COLUMNS))].isna().any(axis=1)
    if blank.any():
        rows = [int(i) + 2 for i in df.index[blank]]
        raise ValueError(f"Payments CSV has blank required values on lines {rows}")

    df[list(OPTIONAL_AMOUNT_COLUMNS)] = df[list(OPTIONAL_AMOUNT_COLUMNS)].fillna(0.0)
    df["date"] = pd.to_datetime(df["date"]).dt.date
    df["payment_type"] = df["payment_type"].str.lower()
    if "description" in df.columns:
        df["description"] = df["description"].fillna("")
    return [build_record(DebtPayment, row) for row in df.to_dict(orient="records")]
