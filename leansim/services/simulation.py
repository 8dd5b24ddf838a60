# leansim/services/simulation.py
# -----------------------------------------------------------------------------
# simulate(): inputs -> metrics -> health verdict -> recommendations -> result
# - all-or-nothing: invalid inputs raise before anything is computed
# - rounding happens once, here, when the result record is assembled
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Union

from loguru import logger
from pydantic import ValidationError

from leansim.core.config import HealthThresholds, settings
from leansim.core.errors import FieldIssue, InvalidInputError
from leansim.schemas.simulation import (
    Figure,
    FinancialInputs,
    SimulationResult,
    is_reachable,
)
from leansim.services.health import classify
from leansim.services.metrics import compute
from leansim.services.recommendations import generate

MONEY_DIGITS = 2
RATIO_DIGITS = 4
# small ratios keep this many significant digits instead
RATIO_SIGNIFICANT = 3

NUMERIC_FIELDS = (
    "average_price",
    "cost_per_unit",
    "fixed_costs",
    "customer_acquisition_cost",
    "monthly_new_customers",
    "average_customer_lifetime",
)


def demo_inputs() -> FinancialInputs:
    """The sample business seeded for first-time users."""
    return FinancialInputs(
        average_price=100,
        cost_per_unit=30,
        fixed_costs=2000,
        customer_acquisition_cost=50,
        monthly_new_customers=100,
        average_customer_lifetime=24,
        calculation_notes="Demo data",
    )


def _check_constructed(inputs: FinancialInputs) -> None:
    # model_construct() skips validation; re-check the numeric contract
    issues = []
    for name in NUMERIC_FIELDS:
        alias = FinancialInputs.model_fields[name].alias or name
        value = getattr(inputs, name, None)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(FieldIssue(alias, "Input should be a valid number"))
        elif not math.isfinite(value):
            issues.append(FieldIssue(alias, "Input should be a finite number"))
        elif value < 0:
            issues.append(FieldIssue(alias, "Input should be greater than or equal to 0"))
    if issues:
        raise InvalidInputError(issues)


def coerce_inputs(inputs: Union[FinancialInputs, Mapping[str, Any]]) -> FinancialInputs:
    if isinstance(inputs, FinancialInputs):
        _check_constructed(inputs)
        return inputs
    try:
        return FinancialInputs.model_validate(inputs)
    except ValidationError as e:
        raise InvalidInputError.from_validation_error(e) from e


def _round(value: Figure, digits: int) -> Figure:
    return round(value, digits) if is_reachable(value) else value


def _round_ratio(value: Figure) -> Figure:
    if not is_reachable(value) or value == 0:
        return value
    digits = RATIO_SIGNIFICANT - 1 - math.floor(math.log10(abs(value)))
    return round(value, max(RATIO_DIGITS, digits))


def simulate(
    inputs: Union[FinancialInputs, Mapping[str, Any]],
    thresholds: Optional[HealthThresholds] = None,
) -> SimulationResult:
    """
    Run the full financial simulation for one input record.

    `inputs` may be a FinancialInputs or a mapping keyed by camelCase or
    snake_case field names. Raises InvalidInputError for missing, negative or
    non-finite fields; every other input yields a complete result.
    """
    fi = coerce_inputs(inputs)

    metrics = compute(fi)
    verdict = classify(metrics, thresholds)
    recommendations = generate(metrics, verdict)

    result = SimulationResult(
        unit_margin=round(metrics.unit_margin, MONEY_DIGITS),
        monthly_revenue=round(metrics.monthly_revenue, MONEY_DIGITS),
        monthly_profit=round(metrics.monthly_profit, MONEY_DIGITS),
        ltv=round(metrics.ltv, MONEY_DIGITS),
        cac=round(metrics.cac, MONEY_DIGITS),
        cac_ltv_ratio=_round_ratio(metrics.cac_ltv_ratio),
        break_even_units=_round(metrics.break_even_units, MONEY_DIGITS),
        break_even_months=_round(metrics.break_even_months, MONEY_DIGITS),
        profitability_health=verdict.profitability_health,
        ltv_cac_health=verdict.ltv_cac_health,
        overall_health=verdict.overall_health,
        recommendations=recommendations,
        calculation_version=settings.CALCULATION_VERSION,
        calculation_notes=fi.calculation_notes,
    )
    logger.debug(
        "simulation v{} overall={} recommendations={}",
        result.calculation_version,
        result.overall_health.value,
        len(result.recommendations),
    )
    return result
