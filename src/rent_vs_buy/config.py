from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .schemas import DEFAULT_SCENARIO, ScenarioInputs

logger = logging.getLogger(__name__)

# Key names used by the browser form's saved state.
CAMEL_CASE_KEYS: Dict[str, str] = {
    "years": "years",
    "homePrice": "home_price",
    "downPaymentPct": "down_payment_pct",
    "mortgageRatePct": "mortgage_rate_pct",
    "mortgageTermYears": "mortgage_term_years",
    "buyClosingCostPct": "buy_closing_cost_pct",
    "sellCostPct": "sell_cost_pct",
    "propertyTaxRatePct": "property_tax_rate_pct",
    "homeInsuranceAnnual": "home_insurance_annual",
    "maintenanceRatePct": "maintenance_rate_pct",
    "hoaMonthly": "hoa_monthly",
    "homeAppreciationPct": "home_appreciation_pct",
    "rentMonthly": "rent_monthly",
    "rentGrowthPct": "rent_growth_pct",
    "rentersInsuranceMonthly": "renters_insurance_monthly",
    "investmentReturnPct": "investment_return_pct",
}

FIELD_NAMES = frozenset(f.name for f in fields(ScenarioInputs))


class ScenarioConfigError(ValueError):
    """Raised when a scenario file or mapping cannot be turned into inputs."""


def scenario_from_mapping(
    data: Mapping[str, Any], base: ScenarioInputs = DEFAULT_SCENARIO
) -> ScenarioInputs:
    """
    Overlay ``data`` on ``base``.

    Keys may be snake_case field names or the camelCase names of the web form.
    Values are not range-checked here; the engine clamps them.
    """
    overrides: Dict[str, float] = {}
    for key, value in data.items():
        name = key if key in FIELD_NAMES else CAMEL_CASE_KEYS.get(key)
        if name is None:
            raise ScenarioConfigError(f"Unknown scenario field '{key}'")
        overrides[name] = _to_number(key, value)
    return replace(base, **overrides)


def load_scenario_file(
    path: Union[str, Path], base: ScenarioInputs = DEFAULT_SCENARIO
) -> ScenarioInputs:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScenarioConfigError(f"Could not read scenario file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ScenarioConfigError(f"Scenario file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ScenarioConfigError(f"Scenario file {path} must contain a JSON object")

    logger.info("Loaded scenario from %s (%d fields)", path, len(data))
    return scenario_from_mapping(data, base=base)


def scenario_to_dict(inputs: ScenarioInputs) -> Dict[str, float]:
    return asdict(inputs)


def _to_number(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ScenarioConfigError(f"Scenario field '{key}' must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise ScenarioConfigError(
                f"Could not convert scenario field '{key}' value '{value}' to a number"
            ) from exc
    raise ScenarioConfigError(f"Scenario field '{key}' must be a number, got {value!r}")
