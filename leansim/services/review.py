# leansim/services/review.py
# -----------------------------------------------------------------------------
# Advisory checks on submitted inputs
# - never blocks a simulation; the form layer decides how to show these
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List

from leansim.schemas.simulation import FinancialInputs, InputAdvisory

# plausible upper bounds for a small business
FINANCIAL_LIMITS = {
    "average_price": 1_000_000,
    "cost_per_unit": 1_000_000,
    "fixed_costs": 10_000_000,
    "customer_acquisition_cost": 100_000,
    "monthly_new_customers": 1_000_000,
    "average_customer_lifetime": 120,
}

MIN_MARGIN_RATE = 0.05
MAX_CAC_LTV_RATIO = 0.5


def _alias(name: str) -> str:
    return FinancialInputs.model_fields[name].alias or name


def review_inputs(inputs: FinancialInputs) -> List[InputAdvisory]:
    out: List[InputAdvisory] = []

    for name, limit in FINANCIAL_LIMITS.items():
        if getattr(inputs, name) > limit:
            out.append(
                InputAdvisory(
                    field=_alias(name),
                    message=f"Value is above the usual maximum of {limit:,}.",
                )
            )

    if inputs.average_customer_lifetime == 0:
        out.append(
            InputAdvisory(
                field=_alias("average_customer_lifetime"),
                message="A lifetime of 0 months means customers are worth nothing.",
            )
        )

    price = inputs.average_price
    cost = inputs.cost_per_unit
    if price > 0 and cost >= price:
        out.append(
            InputAdvisory(
                field=_alias("cost_per_unit"),
                message="Cost per unit is at or above the average price.",
            )
        )
    elif price > 0 and cost > 0 and (price - cost) / price < MIN_MARGIN_RATE:
        out.append(
            InputAdvisory(
                field=_alias("cost_per_unit"),
                message=(
                    f"Unit margin is below {MIN_MARGIN_RATE:.0%} of the price. "
                    "Check your prices and costs."
                ),
            )
        )

    ltv = (price - cost) * inputs.average_customer_lifetime
    cac = inputs.customer_acquisition_cost
    if cac > 0 and ltv > 0 and cac / ltv > MAX_CAC_LTV_RATIO:
        out.append(
            InputAdvisory(
                field=_alias("customer_acquisition_cost"),
                message=(
                    "Acquisition cost looks high compared with customer lifetime "
                    "value. Consider cheaper channels or raising customer value."
                ),
            )
        )

    return out
