import pytest

from leansim.schemas.simulation import FinancialInputs


def make_inputs(**overrides) -> FinancialInputs:
    """Demo business with selected fields replaced."""
    base = dict(
        average_price=100,
        cost_per_unit=30,
        fixed_costs=2000,
        customer_acquisition_cost=50,
        monthly_new_customers=100,
        average_customer_lifetime=24,
    )
    base.update(overrides)
    return FinancialInputs(**base)


@pytest.fixture
def demo():
    return make_inputs()


@pytest.fixture
def unviable_pricing():
    return make_inputs(average_price=20, cost_per_unit=25)


@pytest.fixture
def no_customers():
    return make_inputs(monthly_new_customers=0)
