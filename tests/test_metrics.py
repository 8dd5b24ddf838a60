"""Tests for the metrics calculator."""

import pytest

from conftest import make_inputs
from leansim.schemas.simulation import UNREACHABLE, is_reachable
from leansim.services.metrics import compute


class TestDemoScenario:
    def test_unit_economics(self, demo):
        m = compute(demo)
        assert m.unit_margin == 70
        assert m.monthly_revenue == 10_000
        # 10,000 revenue - 3,000 variable - 2,000 fixed
        assert m.monthly_profit == 5_000
        assert m.ltv == 1_680
        assert m.cac == 50

    def test_ratio_and_break_even(self, demo):
        m = compute(demo)
        assert m.cac_ltv_ratio == pytest.approx(0.02976, rel=1e-3)
        assert m.break_even_units == pytest.approx(28.5714, rel=1e-4)
        assert m.break_even_months == pytest.approx(0.285714, rel=1e-4)

    def test_no_rounding_inside_calculator(self, demo):
        m = compute(demo)
        assert m.break_even_units == 2000 / 70

    def test_keeps_source_inputs(self, demo):
        assert compute(demo).inputs is demo


class TestDegenerateInputs:
    def test_negative_margin(self, unviable_pricing):
        m = compute(unviable_pricing)
        assert m.unit_margin == -5
        assert m.break_even_units is UNREACHABLE
        assert m.break_even_months is UNREACHABLE
        assert m.cac_ltv_ratio is UNREACHABLE

    def test_zero_margin_is_unreachable(self):
        m = compute(make_inputs(average_price=30, cost_per_unit=30))
        assert m.unit_margin == 0
        assert m.break_even_units is UNREACHABLE
        assert m.break_even_months is UNREACHABLE

    def test_zero_customers(self, no_customers):
        m = compute(no_customers)
        assert m.monthly_revenue == 0
        assert m.monthly_profit == -2000
        assert is_reachable(m.break_even_units)
        assert m.break_even_units == pytest.approx(28.5714, rel=1e-4)
        assert m.break_even_months is UNREACHABLE

    def test_zero_lifetime_makes_ratio_unreachable(self):
        m = compute(make_inputs(average_customer_lifetime=0))
        assert m.ltv == 0
        assert m.cac_ltv_ratio is UNREACHABLE

    def test_free_acquisition(self):
        m = compute(make_inputs(customer_acquisition_cost=0))
        assert m.cac_ltv_ratio == 0

    def test_no_fixed_costs_breaks_even_immediately(self):
        m = compute(make_inputs(fixed_costs=0))
        assert m.break_even_units == 0
        assert m.break_even_months == 0

    def test_all_zero(self):
        m = compute(
            make_inputs(
                average_price=0,
                cost_per_unit=0,
                fixed_costs=0,
                customer_acquisition_cost=0,
                monthly_new_customers=0,
                average_customer_lifetime=0,
            )
        )
        assert m.monthly_profit == 0
        assert m.break_even_units is UNREACHABLE
        assert m.cac_ltv_ratio is UNREACHABLE


class TestUnreachable:
    def test_arithmetic_is_rejected(self):
        with pytest.raises(TypeError):
            UNREACHABLE + 1
        with pytest.raises(TypeError):
            UNREACHABLE * 2

    def test_ordering_is_rejected(self):
        with pytest.raises(TypeError):
            UNREACHABLE < 6


@pytest.mark.parametrize("price", [0, 10, 25, 99.5, 250])
@pytest.mark.parametrize("cost", [0, 25, 100])
def test_margin_formula(price, cost):
    m = compute(make_inputs(average_price=price, cost_per_unit=cost))
    assert m.unit_margin == price - cost
    if m.unit_margin <= 0:
        assert m.break_even_units is UNREACHABLE
        assert m.break_even_months is UNREACHABLE
