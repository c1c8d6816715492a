from finpulse_core.services.amortization import monthly_interest, payoff_months, simulate_fixed_payments  # noqa: F401
from finpulse_core.services.debt_stats import compute_debt_stats  # noqa: F401
from finpulse_core.services.emergency import emergency_fund_metrics  # noqa: F401
from finpulse_core.services.entry_stats import expense_stats, income_stats  # noqa: F401
from finpulse_core.services.health import assess_financial_health  # noqa: F401
from finpulse_core.services.projections import generate_projections  # noqa: F401
from finpulse_core.services.strategies import compare_strategies, savings_versus_current  # noqa: F401

__all__ = [
    "monthly_interest",
    "payoff_months",
    "simulate_fixed_payments",
    "compute_debt_stats",
    "emergency_fund_metrics",
    "expense_stats",
    "income_stats",
    "assess_financial_health",
    "generate_projections",
    "compare_strategies",
    "savings_versus_current",
]
