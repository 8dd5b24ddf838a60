# leansim/services/health.py
# -----------------------------------------------------------------------------
# Health classifier: metrics -> poor / fair / good per dimension + overall
# - thresholds come from settings.THRESHOLDS unless the caller passes a set
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Optional, Sequence

from leansim.core.config import Band, HealthThresholds, settings
from leansim.schemas.simulation import Health, HealthVerdict, is_reachable
from leansim.services.metrics import Metrics


def band_health(value: float, bands: Sequence[Band], default: Health) -> Health:
    """First band admitting `value` wins; `default` when none does."""
    for band in bands:
        if band.admits(value):
            return band.health
    return default


def worst(*healths: Health) -> Health:
    return min(healths, key=lambda h: h.rank)


def loss_tolerance(metrics: Metrics, thresholds: HealthThresholds) -> float:
    return min(
        metrics.monthly_revenue * thresholds.loss_tolerance_rate,
        thresholds.loss_tolerance_cap,
    )


def classify_profitability(metrics: Metrics, thresholds: HealthThresholds) -> Health:
    if metrics.unit_margin <= 0:
        return Health.POOR

    if metrics.monthly_profit > 0:
        if not is_reachable(metrics.break_even_months):
            return Health.FAIR
        return band_health(
            metrics.break_even_months,
            thresholds.bands_for("profitability"),
            default=Health.FAIR,
        )

    if -metrics.monthly_profit <= loss_tolerance(metrics, thresholds):
        return Health.FAIR
    return Health.POOR


def classify_ltv_cac(metrics: Metrics, thresholds: HealthThresholds) -> Health:
    # ltv <= 0: acquisition can never pay back
    if not is_reachable(metrics.cac_ltv_ratio):
        return Health.POOR
    return band_health(
        metrics.cac_ltv_ratio, thresholds.bands_for("ltv_cac"), default=Health.POOR
    )


def classify(
    metrics: Metrics, thresholds: Optional[HealthThresholds] = None
) -> HealthVerdict:
    t = thresholds or settings.THRESHOLDS
    profitability = classify_profitability(metrics, t)
    ltv_cac = classify_ltv_cac(metrics, t)
    return HealthVerdict(
        profitability_health=profitability,
        ltv_cac_health=ltv_cac,
        # one broken dimension sinks the verdict
        overall_health=worst(profitability, ltv_cac),
    )
