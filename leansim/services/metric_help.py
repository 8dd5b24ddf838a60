# leansim/services/metric_help.py
# -----------------------------------------------------------------------------
# Plain-language help for each result metric, keyed by its serialized name
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from leansim.schemas.simulation import Health


@dataclass(frozen=True, slots=True)
class MetricHelp:
    label: str
    description: str
    tips: List[str] = field(default_factory=list)
    interpretation: Dict[Health, str] = field(default_factory=dict)


METRIC_HELP: Dict[str, MetricHelp] = {
    "unitMargin": MetricHelp(
        label="Unit margin",
        description=(
            "What each sale leaves after its variable cost: price minus cost per "
            "unit. A negative margin loses money on every sale."
        ),
        tips=[
            "A high margin gives room to grow",
            "If it is negative, raise prices or cut variable costs",
            "Compare with competitors in your sector",
        ],
        interpretation={
            Health.GOOD: "A healthy margin funds reinvestment in growth",
            Health.FAIR: "A thin margin; optimize costs or prices",
            Health.POOR: "Insufficient or negative margin; revisit the business model",
        },
    ),
    "monthlyRevenue": MetricHelp(
        label="Monthly revenue",
        description=(
            "Sales from the customers acquired in a month: average price times "
            "new customers per month."
        ),
        tips=["Revenue from returning customers is not counted"],
    ),
    "monthlyProfit": MetricHelp(
        label="Monthly profit",
        description=(
            "What is left each month after variable and fixed costs. Positive "
            "means the business pays for itself."
        ),
        tips=[
            "If it is negative, sell more or spend less",
            "Keep a reserve for weaker months",
        ],
        interpretation={
            Health.GOOD: "Profitable and sustainable",
            Health.FAIR: "Tight profitability; optimize operations",
            Health.POOR: "Monthly losses; changes are urgent",
        },
    ),
    "ltv": MetricHelp(
        label="LTV (customer lifetime value)",
        description=(
            "Total margin a customer brings over the months they stay: unit "
            "margin times average customer lifetime."
        ),
        tips=[
            "A high LTV justifies spending more to win customers",
            "Better experiences keep customers longer",
        ],
        interpretation={
            Health.GOOD: "High value per customer supports sustainable growth",
            Health.FAIR: "Moderate value; look for ways to improve retention",
            Health.POOR: "Low value; improve the offer or retention",
        },
    ),
    "cac": MetricHelp(
        label="CAC (customer acquisition cost)",
        description="What it costs, on average, to win one new customer.",
        tips=["Organic channels and referrals lower CAC"],
    ),
    "cacLtvRatio": MetricHelp(
        label="CAC/LTV ratio",
        description=(
            "Acquisition cost as a share of lifetime value. Below 0.33 means a "
            "customer is worth more than three times what they cost to win."
        ),
        tips=[
            "Aim for an LTV at least three times CAC",
            "At 1.0 or above, every new customer loses money",
        ],
        interpretation={
            Health.GOOD: "Acquisition is an excellent investment",
            Health.FAIR: "Acquisition pays back, with little room to spare",
            Health.POOR: "Acquisition does not pay back",
        },
    ),
    "breakEvenUnits": MetricHelp(
        label="Break-even units",
        description=(
            "Units that must be sold to cover one month of fixed costs. It is "
            "unreachable when each sale does not make a margin."
        ),
    ),
    "breakEvenMonths": MetricHelp(
        label="Break-even months",
        description=(
            "Months of new-customer sales needed to cover fixed costs. It is "
            "unreachable with no margin or no new customers."
        ),
        interpretation={
            Health.GOOD: "Fixed costs are covered quickly",
            Health.FAIR: "Break-even takes a while; speed it up",
            Health.POOR: "Break-even is out of reach with current numbers",
        },
    ),
}


def help_for(metric: str) -> MetricHelp:
    return METRIC_HELP[metric]


def interpret(metric: str, health: Health) -> str:
    """Interpretation for a metric in a health category, or its description."""
    entry = help_for(metric)
    return entry.interpretation.get(health, entry.description)
