from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
import uuid
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from finpulse_core.domain.models import DebtPayment, EngineConfig, Portfolio
from finpulse_core.io import config as config_io
from finpulse_core.io import snapshot as snapshot_io
from finpulse_core.io.store import JsonSnapshotStore
from finpulse_core.log import setup_logging
from finpulse_core.services import debt_stats, emergency, entry_stats, health, ledger, metrics, projections, strategies

app = typer.Typer(help="Personal finance metrics, projections and debt payoff strategies.")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)"),
):
    setup_logging(log_level)


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload, out: Optional[Path], label: str) -> None:
    payload = snapshot_io.to_jsonable(payload)
    if out:
        _save_json(out, payload)
        typer.echo(f"{label} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _load_portfolio(path: Path) -> Portfolio:
    try:
        return snapshot_io.load_portfolio(path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--snapshot") from exc


def _parse_date_option(value: Optional[str], param_hint: str) -> Optional[dt.date]:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected a YYYY-MM-DD date, got {value!r}", param_hint=param_hint) from exc


def _resolve_config(path: Optional[Path], **overrides) -> EngineConfig:
    try:
        config = config_io.load_engine_config(path) if path else EngineConfig()
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if path:
        logging.getLogger().setLevel(config.log_level)
    changes = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **changes) if changes else config


def _summary(portfolio: Portfolio) -> dict:
    finances = portfolio.finances
    return {
        "total_balance": metrics.total_balance(finances.accounts),
        "monthly_income": metrics.monthly_income(finances.incomes),
        "monthly_expenses": metrics.monthly_expenses(finances.expenses),
        "monthly_debt_payments": metrics.monthly_debt_payments(finances.debts),
        "monthly_savings": metrics.monthly_savings(finances),
        "total_debt": metrics.total_debt(finances.debts),
        "net_worth": metrics.net_worth(finances),
        "savings_rate": metrics.savings_rate(finances),
        "debt_to_asset_ratio": metrics.debt_to_asset_ratio(finances),
        "emergency_fund_months": metrics.emergency_fund_months(finances),
        "expenses_by_category": metrics.expenses_by_category(finances.expenses),
    }


def _months_label(months) -> str:
    if months is None:
        return "never"
    years, rest = divmod(round(months), 12)
    if years and rest:
        return f"{years}y {rest}m"
    return f"{years}y" if years else f"{rest}m"


def _money(value) -> str:
    return "—" if value is None else f"{value:,.2f}"


@app.command()
def summary(
    snapshot: Path = typer.Option(..., help="Snapshot JSON with accounts, incomes, expenses and debts"),
    out: Optional[Path] = typer.Option(None, help="Output path for the metrics JSON"),
):
    """Aggregate metrics: balances, monthly flows, net worth and ratios."""
    _emit(_summary(_load_portfolio(snapshot)), out, "Summary")


@app.command("health")
def health_cmd(
    snapshot: Path = typer.Option(..., help="Snapshot JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for the health report JSON"),
):
    """Financial-health score (0-100) and status."""
    report = health.assess_financial_health(_load_portfolio(snapshot).finances)
    _emit(report, out, "Health report")


@app.command()
def project(
    snapshot: Path = typer.Option(..., help="Snapshot JSON"),
    config: Optional[Path] = typer.Option(None, help="Engine config JSON"),
    years: Optional[int] = typer.Option(None, min=1, help="Projection horizon in years"),
    out: Optional[Path] = typer.Option(None, help="Output path for the projection JSON"),
):
    """Yearly projection of net worth, debt and savings."""
    conf = _resolve_config(config, projection_years=years)
    points = projections.generate_projections(_load_portfolio(snapshot).finances, conf.projection_years)
    _emit(points, out, "Projection")


@app.command("debt-stats")
def debt_stats_cmd(
    snapshot: Path = typer.Option(..., help="Snapshot JSON with debt_entries, debt_categories, debt_payments"),
    config: Optional[Path] = typer.Option(None, help="Engine config JSON"),
    assumed_income: Optional[float] = typer.Option(None, help="Monthly income used for the debt-to-income ratio"),
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD), default today"),
    out: Optional[Path] = typer.Option(None, help="Output path for the stats JSON"),
):
    """Portfolio debt statistics and blended payoff projection."""
    conf = _resolve_config(config, assumed_monthly_income=assumed_income)
    ref = _parse_date_option(today, "--today")
    stats = debt_stats.compute_debt_stats(_load_portfolio(snapshot).ledger, conf.assumed_monthly_income, ref)
    payload = snapshot_io.to_jsonable(stats)
    payload["debt_free_date"] = snapshot_io.to_jsonable(stats.debt_free_date)
    _emit(payload, out, "Debt stats")


@app.command("strategies")
def strategies_cmd(
    snapshot: Path = typer.Option(..., help="Snapshot JSON"),
    config: Optional[Path] = typer.Option(None, help="Engine config JSON"),
    extra_payment: Optional[float] = typer.Option(None, help="Extra monthly budget for debt repayment"),
    target_months: Optional[int] = typer.Option(None, min=1, help="Target months for the fixed-term strategy"),
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD), default today"),
    out: Optional[Path] = typer.Option(None, help="Output path for the strategies JSON"),
):
    """Compare avalanche, snowball, fixed-term and blended repayment strategies."""
    conf = _resolve_config(config, extra_payment=extra_payment, target_months=target_months)
    debt_ledger = _load_portfolio(snapshot).ledger
    ref = _parse_date_option(today, "--today")
    stats = debt_stats.compute_debt_stats(debt_ledger, conf.assumed_monthly_income, ref)
    results = strategies.compare_strategies(debt_ledger, conf.extra_payment, conf.target_months)
    payload = []
    for result in results:
        entry = snapshot_io.to_jsonable(result)
        entry["versus_current"] = snapshot_io.to_jsonable(strategies.savings_versus_current(result, stats))
        payload.append(entry)
    _emit(payload, out, "Strategies")


@app.command("emergency")
def emergency_cmd(
    snapshot: Path = typer.Option(..., help="Snapshot JSON"),
    config: Optional[Path] = typer.Option(None, help="Engine config JSON"),
    plan: Optional[str] = typer.Option(None, help="conservative|moderate|aggressive"),
    contribution: float = typer.Option(0.0, help="Planned monthly contribution"),
    out: Optional[Path] = typer.Option(None, help="Output path for the emergency fund JSON"),
):
    """Emergency-fund target and progress, funded by savings accounts."""
    conf = _resolve_config(config, emergency_plan=plan)
    try:
        months = emergency.plan_months(conf.emergency_plan)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--plan") from exc
    finances = _load_portfolio(snapshot).finances
    result = emergency.emergency_fund_metrics(
        metrics.monthly_expenses(finances.expenses),
        metrics.emergency_fund_balance(finances.accounts),
        months,
        contribution,
    )
    _emit(result, out, "Emergency fund")


@app.command("entry-stats")
def entry_stats_cmd(
    snapshot: Path = typer.Option(..., help="Snapshot JSON with income and expense entries"),
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD), default today"),
    out: Optional[Path] = typer.Option(None, help="Output path for the entry statistics JSON"),
):
    """Monthly and yearly totals, growth and breakdowns of dated income and expense entries."""
    ref = _parse_date_option(today, "--today")
    journal = _load_portfolio(snapshot).journal
    payload = {
        "income": entry_stats.income_stats(journal.income_entries, journal.income_sources, ref),
        "expenses": entry_stats.expense_stats(journal.expense_entries, journal.expense_categories, ref),
    }
    _emit(payload, out, "Entry stats")


@app.command()
def pay(
    snapshot: Path = typer.Option(..., help="Snapshot JSON, updated in place"),
    debt_id: str = typer.Option(..., help="Debt entry id"),
    amount: float = typer.Option(..., min=0.0, help="Payment amount"),
    payment_type: str = typer.Option("mixed", help="principal|interest|mixed|extra"),
    date: Optional[str] = typer.Option(None, help="Payment date (YYYY-MM-DD), default today"),
):
    """Record a debt payment and reduce the debt's balance by its principal part."""
    paid_on = _parse_date_option(date, "--date") or dt.date.today()
    store = JsonSnapshotStore(snapshot)
    portfolio = _load_portfolio(snapshot)
    debt = portfolio.ledger.find_debt(debt_id)
    if debt is None:
        raise typer.BadParameter(f"Unknown debt id {debt_id}", param_hint="--debt-id")
    try:
        principal, interest = ledger.split_payment(debt, amount, payment_type)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--payment-type") from exc

    payment = DebtPayment(
        id=uuid.uuid4().hex,
        debt_id=debt_id,
        amount=amount,
        date=paid_on,
        payment_type=payment_type,
        principal_amount=principal,
        interest_amount=interest,
    )
    updated = ledger.record_payment(portfolio.ledger, payment)
    store.save(dataclasses.replace(portfolio, ledger=updated))
    balance = updated.find_debt(debt_id).current_balance
    typer.echo(f"Recorded {amount:,.2f} ({principal:,.2f} principal, {interest:,.2f} interest); balance {balance:,.2f}")


@app.command()
def report(
    snapshot: Path = typer.Option(..., help="Snapshot JSON"),
    config: Optional[Path] = typer.Option(None, help="Engine config JSON"),
):
    """Console report: health, projection and strategy comparison."""
    conf = _resolve_config(config)
    portfolio = _load_portfolio(snapshot)
    console = Console()

    result = health.assess_financial_health(portfolio.finances)
    console.print(f"[bold cyan]Financial health:[/bold cyan] {result.score}/100 ({result.status})")
    console.print(
        f"Net worth {_money(result.net_worth)} | savings rate {result.savings_rate:.1f}% | "
        f"debt/assets {result.debt_to_asset_ratio:.1f}% | emergency fund {result.emergency_fund_months:.1f} months"
    )
    for tip in result.recommendations:
        console.print(f"- {tip}")

    table = Table(title=f"{conf.projection_years}-year projection")
    for column in ("Year", "Net worth", "Debt", "Savings"):
        table.add_column(column, justify="right")
    for point in projections.generate_projections(portfolio.finances, conf.projection_years):
        table.add_row(str(point.year), _money(point.net_worth), _money(point.total_debt), _money(point.savings))
    console.print(table)

    if portfolio.ledger.debts:
        stats = debt_stats.compute_debt_stats(portfolio.ledger, conf.assumed_monthly_income)
        console.print(
            f"Debt {_money(stats.total_debt)} at {stats.average_interest_rate:.2f}% | "
            f"payoff in {_months_label(stats.payoff_projection.months)}"
        )
        table = Table(title=f"Strategies (+{conf.extra_payment:,.2f}/month)")
        for column in ("Strategy", "Time", "Interest", "Monthly", "Saves"):
            table.add_column(column, justify="right")
        for strategy in strategies.compare_strategies(portfolio.ledger, conf.extra_payment, conf.target_months):
            versus = strategies.savings_versus_current(strategy, stats)
            table.add_row(
                strategy.name,
                _months_label(strategy.total_time_months),
                _money(strategy.total_interest),
                _money(strategy.total_monthly_payment),
                _money(versus.interest_savings),
            )
        console.print(table)


if __name__ == "__main__":
    app()
