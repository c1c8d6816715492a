"""
Snapshot persistence.

The calculation services never call a store: the application loads a
portfolio, passes it to the services and saves whatever the ledger
operations return.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from finpulse_core.domain.models import Portfolio
from finpulse_core.io.snapshot import load_portfolio, portfolio_to_dict


logger = logging.getLogger(__name__)


class SnapshotStore(ABC):
    @abstractmethod
    def load(self) -> Portfolio:
        """Return the stored portfolio, or an empty one when nothing was saved yet."""

    @abstractmethod
    def save(self, portfolio: Portfolio) -> None:
        """Replace the stored portfolio."""


class InMemorySnapshotStore(SnapshotStore):
    def __init__(self, portfolio: Portfolio | None = None):
        self._portfolio = portfolio or Portfolio()

    def load(self) -> Portfolio:
        return self._portfolio

    def save(self, portfolio: Portfolio) -> None:
        self._portfolio = portfolio


class JsonSnapshotStore(SnapshotStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Portfolio:
        if not self.path.exists():
            logger.info("No snapshot at %s; starting empty", self.path)
            return Portfolio()
        return load_portfolio(self.path)

    def save(self, portfolio: Portfolio) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(portfolio_to_dict(portfolio), f, indent=2)
        tmp.replace(self.path)
        logger.debug("Saved snapshot to %s", self.path)
