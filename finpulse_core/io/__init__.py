from finpulse_core.io.config import load_engine_config  # noqa: F401
from finpulse_core.io.snapshot import (  # noqa: F401
    load_payments_csv,
    load_portfolio,
    portfolio_from_dict,
    portfolio_to_dict,
)
from finpulse_core.io.store import InMemorySnapshotStore, JsonSnapshotStore, SnapshotStore  # noqa: F401

__all__ = [
    "load_engine_config",
    "load_payments_csv",
    "load_portfolio",
    "portfolio_from_dict",
    "portfolio_to_dict",
    "SnapshotStore",
    "InMemorySnapshotStore",
    "JsonSnapshotStore",
]
