from __future__ import annotations

import dataclasses
import logging
from typing import Tuple

from finpulse_core.domain.models import DebtEntry, DebtLedger, DebtPayment
from finpulse_core.services.amortization import monthly_interest


logger = logging.getLogger(__name__)


def split_payment(debt: DebtEntry, amount: float, payment_type: str) -> Tuple[float, float]:
    """
    Split a payment into (principal, interest).
    Mixed payments cover one month of interest on the current balance first.
    """
    if payment_type in ("principal", "extra"):
        return amount, 0.0
    if payment_type == "interest":
        return 0.0, amount
    if payment_type == "mixed":
        interest = min(amount, monthly_interest(debt.current_balance, debt.interest_rate))
        return amount - interest, interest
    raise ValueError(f"Unknown payment type: {payment_type}")


def _adjust_balance(ledger: DebtLedger, debt_id: str, principal_delta: float) -> Tuple[DebtEntry, ...]:
    """Reduce a debt's balance by `principal_delta` (negative restores), kept within [0, original]."""
    updated = []
    for debt in ledger.debts:
        if debt.id == debt_id:
            balance = min(max(0.0, debt.current_balance - principal_delta), debt.original_amount)
            debt = dataclasses.replace(debt, current_balance=balance)
        updated.append(debt)
    return tuple(updated)


def record_payment(ledger: DebtLedger, payment: DebtPayment) -> DebtLedger:
    if ledger.find_debt(payment.debt_id) is None:
        logger.warning("Payment %s references unknown debt %s; ignored", payment.id, payment.debt_id)
        return ledger
    return dataclasses.replace(
        ledger,
        debts=_adjust_balance(ledger, payment.debt_id, payment.principal_amount),
        payments=ledger.payments + (payment,),
    )


def update_payment(ledger: DebtLedger, payment_id: str, **changes) -> DebtLedger:
    current = ledger.find_payment(payment_id)
    if current is None:
        logger.warning("Unknown payment %s; nothing to update", payment_id)
        return ledger

    revised = dataclasses.replace(current, **changes)
    payments = tuple(revised if p.id == payment_id else p for p in ledger.payments)
    debts = ledger.debts
    if "principal_amount" in changes:
        difference = revised.principal_amount - current.principal_amount
        debts = _adjust_balance(ledger, current.debt_id, difference)
    return dataclasses.replace(ledger, debts=debts, payments=payments)


def delete_payment(ledger: DebtLedger, payment_id: str) -> DebtLedger:
    payment = ledger.find_payment(payment_id)
    if payment is None:
        logger.warning("Unknown payment %s; nothing to delete", payment_id)
        return ledger
    return dataclasses.replace(
        ledger,
        debts=_adjust_balance(ledger, payment.debt_id, -payment.principal_amount),
        payments=tuple(p for p in ledger.payments if p.id != payment_id),
    )


def delete_debt(ledger: DebtLedger, debt_id: str) -> DebtLedger:
    """Remove a debt together with its payment history."""
    return dataclasses.replace(
        ledger,
        debts=tuple(d for d in ledger.debts if d.id != debt_id),
        payments=tuple(p for p in ledger.payments if p.debt_id != debt_id),
    )


def add_debt(ledger: DebtLedger, debt: DebtEntry) -> DebtLedger:
    """Append a debt; it must belong to a known category and carry a fresh id."""
    if ledger.find_category(debt.category_id) is None:
        logger.warning("Debt %s references unknown category %s; ignored", debt.id, debt.category_id)
        return ledger
    if ledger.find_debt(debt.id) is not None:
        raise ValueError(f"Debt id {debt.id} already exists")
    return dataclasses.replace(ledger, debts=ledger.debts + (debt,))


def update_debt(ledger: DebtLedger, debt_id: str, **changes) -> DebtLedger:
    """
    Apply field changes to one debt. The revised record is validated again,
    so changes that break its invariants raise ValueError.
    """
    current = ledger.find_debt(debt_id)
    if current is None:
        logger.warning("Unknown debt %s; nothing to update", debt_id)
        return ledger
    if "id" in changes and changes["id"] != debt_id:
        raise ValueError("A debt's id cannot be changed")
    category_id = changes.get("category_id", current.category_id)
    if ledger.find_category(category_id) is None:
        logger.warning("Debt %s cannot move to unknown category %s; ignored", debt_id, category_id)
        return ledger

    revised = dataclasses.replace(current, **changes)
    return dataclasses.replace(ledger, debts=tuple(revised if d.id == debt_id else d for d in ledger.debts))
