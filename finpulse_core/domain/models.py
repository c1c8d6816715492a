from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Dict, List, Optional, Tuple


FREQUENCIES = ("monthly", "yearly", "weekly", "biweekly", "one-time")
ACCOUNT_TYPES = ("checking", "savings", "investment")
PRIORITIES = ("high", "medium", "low")
DEBT_TYPES = ("fixed", "revolving", "installment")
PAYMENT_TYPES = ("principal", "interest", "mixed", "extra")


@dataclasses.dataclass(frozen=True)
class Account:
    id: str
    name: str
    balance: float
    type: str = "checking"  # checking | savings | investment
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class Income:
    id: str
    description: str
    amount: float
    frequency: str = "monthly"
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: float
    frequency: str = "monthly"
    category: str = "other"
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class Debt:
    """Simple debt; `amount` is the live balance being amortized."""

    id: str
    description: str
    amount: float
    interest_rate: float  # percent per year
    monthly_payment: float
    is_active: bool = True

    def __post_init__(self) -> None:
        if min(self.amount, self.interest_rate, self.monthly_payment) < 0:
            raise ValueError(f"Debt {self.id}: amount, rate and payment must be non-negative")


@dataclasses.dataclass(frozen=True)
class DebtCategory:
    id: str
    name: str
    description: str = ""
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class DebtEntry:
    id: str
    category_id: str
    creditor_name: str
    original_amount: float
    current_balance: float
    interest_rate: float
    monthly_payment: float
    minimum_payment: Optional[float] = None
    priority: str = "medium"
    debt_type: str = "fixed"
    is_active: bool = True
    start_date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: str = ""

    def __post_init__(self) -> None:
        if min(self.original_amount, self.current_balance, self.interest_rate, self.monthly_payment) < 0:
            raise ValueError(f"Debt {self.id}: amounts and rates must be non-negative")
        if self.current_balance > self.original_amount:
            raise ValueError(f"Debt {self.id}: current balance exceeds original amount")
        if self.minimum_payment is not None and self.minimum_payment > self.monthly_payment:
            raise ValueError(f"Debt {self.id}: minimum payment exceeds monthly payment")
        if self.priority not in PRIORITIES:
            raise ValueError(f"Debt {self.id}: unknown priority {self.priority!r}")
        if self.debt_type not in DEBT_TYPES:
            raise ValueError(f"Debt {self.id}: unknown debt type {self.debt_type!r}")


@dataclasses.dataclass(frozen=True)
class DebtPayment:
    id: str
    debt_id: str
    amount: float
    date: dt.date
    payment_type: str = "mixed"
    principal_amount: float = 0.0
    interest_amount: float = 0.0
    description: str = ""


@dataclasses.dataclass(frozen=True)
class IncomeSource:
    id: str
    name: str
    category: str = "other"  # salary | freelance | business | investments | other
    description: str = ""
    default_amount: Optional[float] = None
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class IncomeEntry:
    """A dated receipt from one income source."""

    id: str
    source_id: str
    amount: float
    date: dt.date
    description: str = ""
    is_recurring: bool = False


@dataclasses.dataclass(frozen=True)
class ExpenseCategory:
    id: str
    name: str
    budget_limit: Optional[float] = None  # per month
    description: str = ""
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class ExpenseEntry:
    """A dated spend booked against one expense category."""

    id: str
    category_id: str
    amount: float
    date: dt.date
    description: str = ""
    is_recurring: bool = False
    is_essential: bool = False


@dataclasses.dataclass(frozen=True)
class FinancialSnapshot:
    accounts: Tuple[Account, ...] = ()
    incomes: Tuple[Income, ...] = ()
    expenses: Tuple[Expense, ...] = ()
    debts: Tuple[Debt, ...] = ()


@dataclasses.dataclass(frozen=True)
class DebtLedger:
    categories: Tuple[DebtCategory, ...] = ()
    debts: Tuple[DebtEntry, ...] = ()
    payments: Tuple[DebtPayment, ...] = ()

    def find_category(self, category_id: str) -> Optional[DebtCategory]:
        return next((c for c in self.categories if c.id == category_id), None)

    def find_debt(self, debt_id: str) -> Optional[DebtEntry]:
        return next((d for d in self.debts if d.id == debt_id), None)

    def find_payment(self, payment_id: str) -> Optional[DebtPayment]:
        return next((p for p in self.payments if p.id == payment_id), None)

    @property
    def active_debts(self) -> List[DebtEntry]:
        return [d for d in self.debts if d.is_active]


@dataclasses.dataclass(frozen=True)
class EntryJournal:
    income_sources: Tuple[IncomeSource, ...] = ()
    income_entries: Tuple[IncomeEntry, ...] = ()
    expense_categories: Tuple[ExpenseCategory, ...] = ()
    expense_entries: Tuple[ExpenseEntry, ...] = ()


@dataclasses.dataclass(frozen=True)
class Portfolio:
    """Everything the user has recorded: the finances snapshot, the debt ledger and the dated entry journal."""

    finances: FinancialSnapshot = dataclasses.field(default_factory=FinancialSnapshot)
    ledger: DebtLedger = dataclasses.field(default_factory=DebtLedger)
    journal: EntryJournal = dataclasses.field(default_factory=EntryJournal)


@dataclasses.dataclass(frozen=True)
class EngineConfig:
    projection_years: int = 15
    assumed_monthly_income: float = 3000.0
    extra_payment: float = 100.0
    target_months: int = 36
    emergency_plan: str = "moderate"
    log_level: str = "INFO"


# -------------------------------
# Derived results
# -------------------------------


@dataclasses.dataclass
class DebtSimulation:
    remaining_balance: float
    total_interest_paid: float
    total_paid: float


@dataclasses.dataclass
class ProjectionPoint:
    year: int
    net_worth: float
    total_debt: float
    savings: float
    initial_debt: float


@dataclasses.dataclass
class HealthReport:
    score: int
    status: str
    net_worth: float
    savings_rate: float
    debt_to_asset_ratio: float
    monthly_savings: float
    emergency_fund_months: float
    recommendations: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class PayoffProjection:
    months: Optional[int]  # None: the payments never clear the balance
    total_interest: Optional[float]
    payoff_date: Optional[dt.date]

    @property
    def never(self) -> bool:
        return self.months is None


@dataclasses.dataclass
class CategoryBreakdown:
    category_id: str
    category_name: str
    total_debt: float
    monthly_payment: float
    percentage: float
    average_rate: float


@dataclasses.dataclass
class PriorityBreakdown:
    count: int = 0
    total_debt: float = 0.0
    monthly_payment: float = 0.0


@dataclasses.dataclass
class DebtStats:
    total_debt: float
    total_monthly_payments: float
    total_interest_paid: float
    total_principal_paid: float
    average_interest_rate: float
    debt_to_income_ratio: float
    payoff_projection: PayoffProjection
    by_category: List[CategoryBreakdown]
    by_priority: Dict[str, PriorityBreakdown]

    @property
    def debt_free_date(self) -> Optional[dt.date]:
        return self.payoff_projection.payoff_date


@dataclasses.dataclass
class PlannedPayment:
    debt_id: str
    debt_name: str
    priority: int
    suggested_payment: float
    current_payment: float
    reasoning: str


@dataclasses.dataclass
class StrategyResult:
    name: str
    description: str
    total_time_months: Optional[float]
    total_interest: Optional[float]
    total_monthly_payment: float
    payment_plan: List[PlannedPayment]
    monthly_increase: Optional[float] = None


@dataclasses.dataclass
class StrategyComparison:
    strategy: str
    interest_savings: Optional[float]
    time_savings: Optional[float]


@dataclasses.dataclass
class EmergencyFundMetrics:
    target_amount: float
    progress_percentage: float
    remaining: float
    current_months: float
    months_to_complete: int
    is_complete: bool


@dataclasses.dataclass
class Trend:
    direction: str  # up | down | neutral
    percentage: float


@dataclasses.dataclass
class PeriodTotals:
    this_month: float
    last_month: float
    this_year: float
    last_year: float
    average_monthly: float  # this year's total over the months elapsed
    monthly_growth: float
    yearly_growth: float


@dataclasses.dataclass
class SourceBreakdown:
    source_id: str
    source_name: str
    total: float
    percentage: float


@dataclasses.dataclass
class ExpenseCategoryBreakdown:
    category_id: str
    category_name: str
    total: float
    percentage: float
    budget_usage: Optional[float] = None  # percent of the yearly budget; None without a limit


@dataclasses.dataclass
class BudgetStatus:
    total_budget: float
    total_spent: float
    remaining: float
    percentage_used: float


@dataclasses.dataclass
class EssentialSplit:
    essential: float
    non_essential: float
    essential_percentage: float


@dataclasses.dataclass
class IncomeStats:
    totals: PeriodTotals
    by_source: List[SourceBreakdown]


@dataclasses.dataclass
class ExpenseStats:
    totals: PeriodTotals
    by_category: List[ExpenseCategoryBreakdown]
    budget_status: BudgetStatus
    essential_split: EssentialSplit
