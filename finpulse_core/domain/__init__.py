from finpulse_core.domain.models import (  # noqa: F401
    Account,
    BudgetStatus,
    CategoryBreakdown,
    Debt,
    DebtCategory,
    DebtEntry,
    DebtLedger,
    DebtPayment,
    DebtSimulation,
    DebtStats,
    EmergencyFundMetrics,
    EngineConfig,
    EntryJournal,
    EssentialSplit,
    Expense,
    ExpenseCategory,
    ExpenseCategoryBreakdown,
    ExpenseEntry,
    ExpenseStats,
    FinancialSnapshot,
    HealthReport,
    Income,
    IncomeEntry,
    IncomeSource,
    IncomeStats,
    PayoffProjection,
    PeriodTotals,
    PlannedPayment,
    Portfolio,
    PriorityBreakdown,
    ProjectionPoint,
    SourceBreakdown,
    StrategyComparison,
    StrategyResult,
    Trend,
)

__all__ = [
    "Account",
    "BudgetStatus",
    "CategoryBreakdown",
    "Debt",
    "DebtCategory",
    "DebtEntry",
    "DebtLedger",
    "DebtPayment",
    "DebtSimulation",
    "DebtStats",
    "EmergencyFundMetrics",
    "EngineConfig",
    "EntryJournal",
    "EssentialSplit",
    "Expense",
    "ExpenseCategory",
    "ExpenseCategoryBreakdown",
    "ExpenseEntry",
    "ExpenseStats",
    "FinancialSnapshot",
    "HealthReport",
    "Income",
    "IncomeEntry",
    "IncomeSource",
    "IncomeStats",
    "PayoffProjection",
    "PeriodTotals",
    "PlannedPayment",
    "Portfolio",
    "PriorityBreakdown",
    "ProjectionPoint",
    "SourceBreakdown",
    "StrategyComparison",
    "StrategyResult",
    "Trend",
]
