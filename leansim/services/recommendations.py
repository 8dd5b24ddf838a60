# leansim/services/recommendations.py
# -----------------------------------------------------------------------------
# Recommendation generator
# - RULES is evaluated top to bottom; each applicable rule yields one item
# - output is stably sorted critical -> warning -> positive, so ties keep the
#   declaration order below
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List

from leansim.schemas.simulation import (
    Health,
    HealthVerdict,
    Recommendation,
    RecommendationStatus,
    RecommendationType,
    is_reachable,
)
from leansim.services.formatting import (
    format_duration,
    format_money,
    format_ratio,
)
from leansim.services.metrics import Metrics

# advisory constants, not classification thresholds
IDEAL_LTV_CAC = 3.0
SAFE_CAC_SHARE_OF_LTV = 0.8
REINVESTMENT_SHARE = 0.7
FIXED_COST_CUT_SHARE = 0.3
SLOW_BREAK_EVEN_MONTHS = 24
SHORT_LIFETIME_MONTHS = 12
LIFETIME_STRETCH = 1.5

Predicate = Callable[[Metrics, HealthVerdict], bool]
Template = Callable[[Metrics, HealthVerdict], str]


@dataclass(frozen=True, slots=True)
class Rule:
    type: RecommendationType
    status: RecommendationStatus
    title: str
    applies: Predicate
    message: Template

    def build(self, metrics: Metrics, verdict: HealthVerdict) -> Recommendation:
        return Recommendation(
            type=self.type,
            title=self.title,
            message=self.message(metrics, verdict),
            status=self.status,
        )


# ── profitability ────────────────────────────────────────────────────────────
def _negative_margin(m: Metrics, v: HealthVerdict) -> str:
    cost = format_money(m.inputs.cost_per_unit)
    if m.unit_margin == 0:
        return (
            f"Each sale only covers its variable cost ({cost}), so nothing is "
            f"left for fixed costs. Raise the price above {cost} or cut variable costs."
        )
    return (
        f"Each sale loses {format_money(-m.unit_margin)} (price "
        f"{format_money(m.inputs.average_price)} against a variable cost of {cost}). "
        f"No sales volume can cover fixed costs: raise the price above {cost} "
        f"or cut variable costs."
    )


def _significant_loss(m: Metrics, v: HealthVerdict) -> str:
    loss = -m.monthly_profit
    fixed = m.inputs.fixed_costs
    customers = m.inputs.monthly_new_customers
    if customers == 0:
        return (
            f"There are no new customers yet, so the {format_money(fixed)} of fixed "
            f"costs are lost every month. Covering them takes "
            f"{math.ceil(m.break_even_units)} sales a month."
        )
    extra_units = math.ceil(loss / m.unit_margin)
    growth = extra_units / customers * 100
    cut = loss / fixed * 100
    return (
        f"Losing {format_money(loss)} a month. To break even, cut fixed costs by "
        f"{cut:.0f}% (from {format_money(fixed)} to {format_money(fixed - loss)}) "
        f"or sell {extra_units} more units a month ({growth:.0f}% growth)."
    )


def _small_loss(m: Metrics, v: HealthVerdict) -> str:
    loss = -m.monthly_profit
    margin = format_money(m.unit_margin)
    if loss == 0:
        return (
            f"You are exactly at break-even. Every extra sale adds {margin} "
            f"to monthly profit."
        )
    return (
        f"A small loss of {format_money(loss)} a month with a positive unit margin "
        f"of {margin}. {math.ceil(loss / m.unit_margin)} more sales a month make "
        f"the business profitable."
    )


def _slow_payoff(m: Metrics, v: HealthVerdict) -> str:
    return (
        f"Profitable at {format_money(m.monthly_profit)} a month, but covering fixed "
        f"costs takes {format_duration(m.break_even_months)} of new-customer sales. "
        f"Higher prices or more customers a month shorten it."
    )


def _healthy_profit(m: Metrics, v: HealthVerdict) -> str:
    margin_pct = m.monthly_profit / m.monthly_revenue * 100
    return (
        f"Your model earns a {margin_pct:.1f}% profit on sales "
        f"({format_money(m.monthly_profit)} of {format_money(m.monthly_revenue)} a "
        f"month). It stays viable as long as the sales forecast holds."
    )


# ── acquisition ──────────────────────────────────────────────────────────────
def _acquisition_broken(m: Metrics, v: HealthVerdict) -> str:
    if m.ltv <= 0:
        return (
            f"A customer is worth {format_money(m.ltv)} over their lifetime, so the "
            f"{format_money(m.cac)} spent acquiring each one can never be recovered."
        )
    ratio = format_ratio(m.ltv, m.cac)
    if m.cac > m.ltv:
        ceiling = math.floor(m.ltv * SAFE_CAC_SHARE_OF_LTV)
        return (
            f"Critical ratio of {ratio}:1: you lose {format_money(m.cac - m.ltv)} on "
            f"every customer acquired. Cut CAC to at most {format_money(ceiling)} or "
            f"pause acquisition until the model improves."
        )
    return (
        f"A ratio of {ratio}:1 is too low for acquisition to pay off. Cut CAC below "
        f"{format_money(math.ceil(m.ltv / IDEAL_LTV_CAC))} or raise LTV through "
        f"better retention."
    )


def _acquisition_fair(m: Metrics, v: HealthVerdict) -> str:
    ltv_gap = max(0, math.ceil(m.cac * IDEAL_LTV_CAC - m.ltv))
    target_cac = math.floor(m.ltv / IDEAL_LTV_CAC)
    return (
        f"A ratio of {format_ratio(m.ltv, m.cac)}:1 is acceptable but short of the "
        f"{IDEAL_LTV_CAC:.0f}:1 benchmark. Raise LTV by {format_money(ltv_gap)} or "
        f"cut CAC to {format_money(target_cac)}."
    )


def _acquisition_good(m: Metrics, v: HealthVerdict) -> str:
    if m.cac == 0:
        return (
            "Customers arrive at no acquisition cost (organic channels, referrals). "
            "Scaling those channels is the fastest way to grow."
        )
    payback = format_duration(m.cac / m.unit_margin)
    return (
        f"Excellent ratio of {format_ratio(m.ltv, m.cac)}:1. You recover the "
        f"{format_money(m.cac)} CAC in {payback}, so there is room to invest more "
        f"in marketing."
    )


# ── retention ────────────────────────────────────────────────────────────────
def _no_lifetime(m: Metrics, v: HealthVerdict) -> str:
    months = max(1, math.ceil(m.cac / m.unit_margin))
    return (
        f"Customers leave before generating any value (LTV {format_money(m.ltv)}). "
        f"Keeping them at least {format_duration(months)} recovers what it costs to "
        f"acquire them."
    )


def _short_lifetime(m: Metrics, v: HealthVerdict) -> str:
    lifetime = m.inputs.average_customer_lifetime
    target = math.ceil(lifetime * LIFETIME_STRETCH)
    gain = m.unit_margin * (target - lifetime)
    return (
        f"Raising average customer lifetime from {lifetime:g} to "
        f"{target} months would add {format_money(gain)} to LTV."
    )


# ── overall ──────────────────────────────────────────────────────────────────
def _slow_break_even(m: Metrics) -> bool:
    months = m.break_even_months
    if not is_reachable(months) or months <= 0:
        return False
    limit = max(SLOW_BREAK_EVEN_MONTHS, m.inputs.average_customer_lifetime * 2)
    return months > limit


def _accelerate_break_even(m: Metrics, v: HealthVerdict) -> str:
    customers = m.inputs.monthly_new_customers
    gap = m.break_even_units - customers
    return (
        f"Break-even in {math.ceil(m.break_even_months)} months is too far out. Grow "
        f"sales by {gap / customers * 100:.0f}% ({math.ceil(gap)} more units a month) "
        f"or cut fixed costs by "
        f"{format_money(math.ceil(m.inputs.fixed_costs * FIXED_COST_CUT_SHARE))}."
    )


def _viable(m: Metrics, v: HealthVerdict) -> str:
    reinvest = m.monthly_profit * REINVESTMENT_SHARE
    share = f"{REINVESTMENT_SHARE * 100:.0f}%"
    if m.cac == 0:
        return (
            f"Healthy business. Reinvesting {format_money(reinvest)} a month "
            f"({share} of profit) in the channels that bring customers for free "
            f"accelerates growth."
        )
    return (
        f"Healthy business. Reinvesting {format_money(reinvest)} a month ({share} of "
        f"profit) would acquire {math.floor(reinvest / m.cac)} extra customers a month."
    )


RULES: List[Rule] = [
    Rule(
        RecommendationType.PRICING,
        RecommendationStatus.CRITICAL,
        "Unit price below cost",
        lambda m, v: m.unit_margin <= 0,
        _negative_margin,
    ),
    Rule(
        RecommendationType.VIABILITY,
        RecommendationStatus.CRITICAL,
        "Significant monthly losses",
        lambda m, v: v.profitability_health is Health.POOR
        and m.unit_margin > 0
        and m.monthly_profit < 0,
        _significant_loss,
    ),
    Rule(
        RecommendationType.VIABILITY,
        RecommendationStatus.WARNING,
        "Close to profitability",
        lambda m, v: v.profitability_health is Health.FAIR and m.monthly_profit <= 0,
        _small_loss,
    ),
    Rule(
        RecommendationType.VIABILITY,
        RecommendationStatus.WARNING,
        "Slow to cover fixed costs",
        lambda m, v: v.profitability_health is Health.FAIR and m.monthly_profit > 0,
        _slow_payoff,
    ),
    Rule(
        RecommendationType.VIABILITY,
        RecommendationStatus.POSITIVE,
        "Economic viability",
        lambda m, v: v.profitability_health is Health.GOOD,
        _healthy_profit,
    ),
    Rule(
        RecommendationType.ACQUISITION,
        RecommendationStatus.CRITICAL,
        "Customer acquisition does not pay back",
        lambda m, v: v.ltv_cac_health is Health.POOR,
        _acquisition_broken,
    ),
    Rule(
        RecommendationType.ACQUISITION,
        RecommendationStatus.WARNING,
        "Customer acquisition efficiency",
        lambda m, v: v.ltv_cac_health is Health.FAIR,
        _acquisition_fair,
    ),
    Rule(
        RecommendationType.ACQUISITION,
        RecommendationStatus.POSITIVE,
        "Customer acquisition efficiency",
        lambda m, v: v.ltv_cac_health is Health.GOOD,
        _acquisition_good,
    ),
    Rule(
        RecommendationType.RETENTION,
        RecommendationStatus.CRITICAL,
        "Customers leave too early",
        lambda m, v: m.ltv <= 0 and m.unit_margin > 0,
        _no_lifetime,
    ),
    Rule(
        RecommendationType.RETENTION,
        RecommendationStatus.WARNING,
        "Improve retention",
        lambda m, v: m.unit_margin > 0
        and 0 < m.inputs.average_customer_lifetime < SHORT_LIFETIME_MONTHS,
        _short_lifetime,
    ),
    Rule(
        RecommendationType.OPTIMIZATION,
        RecommendationStatus.WARNING,
        "Speed up break-even",
        lambda m, v: v.overall_health is not Health.GOOD and _slow_break_even(m),
        _accelerate_break_even,
    ),
    Rule(
        RecommendationType.VIABILITY,
        RecommendationStatus.POSITIVE,
        "Viable business model",
        lambda m, v: v.overall_health is Health.GOOD,
        _viable,
    ),
]


def generate(metrics: Metrics, verdict: HealthVerdict) -> List[Recommendation]:
    recommendations = [
        rule.build(metrics, verdict) for rule in RULES if rule.applies(metrics, verdict)
    ]
    # sorted() is stable: equal statuses keep rule order
    return sorted(recommendations, key=lambda r: r.status.priority)
