# leansim/services/metrics.py
# -----------------------------------------------------------------------------
# Metrics calculator: unit economics and break-even from raw inputs
# - pure and total for non-negative inputs; no rounding here
# - degenerate divisions return UNREACHABLE instead of raising or producing inf
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass

from leansim.schemas.simulation import UNREACHABLE, Figure, FinancialInputs, is_reachable


@dataclass(frozen=True, slots=True)
class Metrics:
    inputs: FinancialInputs
    unit_margin: float
    monthly_revenue: float
    monthly_profit: float
    ltv: float
    cac: float
    cac_ltv_ratio: Figure
    break_even_units: Figure
    break_even_months: Figure


def compute(inputs: FinancialInputs) -> Metrics:
    price = inputs.average_price
    unit_cost = inputs.cost_per_unit
    customers = inputs.monthly_new_customers

    unit_margin = price - unit_cost
    # revenue of the cohort acquired this month, not of the installed base
    monthly_revenue = price * customers
    monthly_profit = monthly_revenue - unit_cost * customers - inputs.fixed_costs

    # one unit per customer per month over the customer's lifetime
    ltv = unit_margin * inputs.average_customer_lifetime
    cac = inputs.customer_acquisition_cost
    cac_ltv_ratio: Figure = cac / ltv if ltv > 0 else UNREACHABLE

    break_even_units: Figure = (
        inputs.fixed_costs / unit_margin if unit_margin > 0 else UNREACHABLE
    )
    if is_reachable(break_even_units) and customers > 0:
        break_even_months: Figure = break_even_units / customers
    else:
        break_even_months = UNREACHABLE

    return Metrics(
        inputs=inputs,
        unit_margin=unit_margin,
        monthly_revenue=monthly_revenue,
        monthly_profit=monthly_profit,
        ltv=ltv,
        cac=cac,
        cac_ltv_ratio=cac_ltv_ratio,
        break_even_units=break_even_units,
        break_even_months=break_even_months,
    )
