"""Tests for the health classifier."""

import pytest

from conftest import make_inputs
from leansim.core.config import Band, HealthThresholds
from leansim.schemas.simulation import Health
from leansim.services.health import band_health, classify, worst
from leansim.services.metrics import compute


def verdict_for(thresholds=None, **overrides):
    return classify(compute(make_inputs(**overrides)), thresholds)


class TestProfitability:
    def test_demo_is_good(self, demo):
        assert classify(compute(demo)).profitability_health is Health.GOOD

    def test_negative_margin_is_poor(self, unviable_pricing):
        assert classify(compute(unviable_pricing)).profitability_health is Health.POOR

    def test_zero_margin_is_poor(self):
        v = verdict_for(average_price=30, cost_per_unit=30, fixed_costs=0)
        assert v.profitability_health is Health.POOR

    def test_small_loss_is_fair(self):
        # profit = 70 * 100 - 7300 = -300; tolerance = min(10% of 10,000, 500)
        v = verdict_for(fixed_costs=7300)
        assert v.profitability_health is Health.FAIR

    def test_loss_at_tolerance_cap_is_fair(self):
        v = verdict_for(fixed_costs=7500)
        assert v.profitability_health is Health.FAIR

    def test_loss_beyond_tolerance_is_poor(self):
        v = verdict_for(fixed_costs=7600)
        assert v.profitability_health is Health.POOR

    def test_tolerance_scales_with_revenue(self):
        # revenue 1,000 -> tolerance 100; margin 70 * 10 = 700
        assert verdict_for(monthly_new_customers=10, fixed_costs=790).profitability_health is Health.FAIR
        assert verdict_for(monthly_new_customers=10, fixed_costs=810).profitability_health is Health.POOR

    def test_zero_customers_is_poor(self, no_customers):
        assert classify(compute(no_customers)).profitability_health is Health.POOR

    def test_slow_break_even_is_fair(self):
        # demo breaks even in ~0.29 months; a 0.1 month target makes it slow
        t = HealthThresholds(
            profitability_bands=[Band(limit=0.1, health=Health.GOOD, inclusive=True)]
        )
        v = verdict_for(thresholds=t)
        assert v.profitability_health is Health.FAIR

    def test_break_even_band_is_inclusive(self):
        t = HealthThresholds(
            profitability_bands=[Band(limit=0.2, health=Health.GOOD, inclusive=True)]
        )
        # 1000 / (50 * 100) = 0.2 months exactly
        v = verdict_for(thresholds=t, average_price=80, fixed_costs=1000)
        assert v.profitability_health is Health.GOOD


class TestLtvCac:
    def test_demo_is_good(self, demo):
        assert classify(compute(demo)).ltv_cac_health is Health.GOOD

    @pytest.mark.parametrize(
        "cac, expected",
        [
            (0, Health.GOOD),
            (554, Health.GOOD),  # 554 / 1680 = 0.3298
            (560, Health.FAIR),  # 0.3333
            (1679, Health.FAIR),
            (1680, Health.POOR),  # ratio 1.0
            (5000, Health.POOR),
        ],
    )
    def test_bands(self, cac, expected):
        assert verdict_for(customer_acquisition_cost=cac).ltv_cac_health is expected

    def test_zero_ltv_is_poor_even_with_free_acquisition(self):
        v = verdict_for(average_customer_lifetime=0, customer_acquisition_cost=0)
        assert v.ltv_cac_health is Health.POOR

    def test_negative_ltv_is_poor(self, unviable_pricing):
        assert classify(compute(unviable_pricing)).ltv_cac_health is Health.POOR

    def test_custom_bands(self):
        t = HealthThresholds(
            ltv_cac_bands=[Band(limit=0.01, health=Health.GOOD), Band(limit=0.05, health=Health.FAIR)]
        )
        assert verdict_for(thresholds=t).ltv_cac_health is Health.FAIR


class TestOverall:
    def test_all_good(self, demo):
        v = classify(compute(demo))
        assert v.overall_health is Health.GOOD

    def test_poor_dominates(self, unviable_pricing):
        assert classify(compute(unviable_pricing)).overall_health is Health.POOR

    def test_fair_and_good_is_fair(self):
        v = verdict_for(fixed_costs=7300)
        assert v.ltv_cac_health is Health.GOOD
        assert v.overall_health is Health.FAIR

    def test_worst(self):
        assert worst(Health.GOOD, Health.FAIR) is Health.FAIR
        assert worst(Health.FAIR, Health.POOR) is Health.POOR
        assert worst(Health.GOOD, Health.GOOD) is Health.GOOD


@pytest.mark.parametrize("price", [0, 20, 35, 100])
@pytest.mark.parametrize("fixed", [0, 2000, 7300, 50_000])
@pytest.mark.parametrize("cac", [0, 50, 1000, 10_000])
@pytest.mark.parametrize("customers", [0, 1, 100])
@pytest.mark.parametrize("lifetime", [0, 3, 24])
def test_overall_dominance(price, fixed, cac, customers, lifetime):
    v = verdict_for(
        average_price=price,
        fixed_costs=fixed,
        customer_acquisition_cost=cac,
        monthly_new_customers=customers,
        average_customer_lifetime=lifetime,
    )
    if Health.POOR in (v.profitability_health, v.ltv_cac_health):
        assert v.overall_health is Health.POOR
    elif v.profitability_health is Health.GOOD and v.ltv_cac_health is Health.GOOD:
        assert v.overall_health is Health.GOOD
    else:
        assert v.overall_health is Health.FAIR


def test_band_health_default():
    bands = [Band(limit=1, health=Health.GOOD)]
    assert band_health(0.5, bands, default=Health.POOR) is Health.GOOD
    assert band_health(1, bands, default=Health.POOR) is Health.POOR
