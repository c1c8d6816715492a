from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from finpulse_core.domain.models import EngineConfig


def load_engine_config(path: str | Path) -> EngineConfig:
    data = _read_json(path)
    config = EngineConfig(
        projection_years=int(data.get("projection_years", 15)),
        assumed_monthly_income=float(data.get("assumed_monthly_income", 3000.0)),
        extra_payment=float(data.get("extra_payment", 100.0)),
        target_months=int(data.get("target_months", 36)),
        emergency_plan=str(data.get("emergency_plan", "moderate")),
        log_level=str(data.get("log_level", "INFO")).upper(),
    )
    if config.projection_years < 1:
        raise ValueError("projection_years must be at least 1")
    if config.target_months < 1:
        raise ValueError("target_months must be at least 1")
    return config


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
