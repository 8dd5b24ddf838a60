# leansim/schemas/simulation.py
# -----------------------------------------------------------------------------
# Schemas for the financial simulation
# - Python attributes are snake_case, serialized names are camelCase
# - every model is frozen: a new submission produces a new result
# -----------------------------------------------------------------------------
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Unreachable(Enum):
    """A figure the business never reaches under the current inputs."""

    UNREACHABLE = "unreachable"

    def __repr__(self) -> str:
        return "UNREACHABLE"


UNREACHABLE = Unreachable.UNREACHABLE

# a derived number, or the tag saying it does not exist
Figure = Union[float, Unreachable]


def is_reachable(value: Figure) -> bool:
    return value is not UNREACHABLE


class Health(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"

    @property
    def rank(self) -> int:
        return _HEALTH_RANK[self]


_HEALTH_RANK = {Health.POOR: 0, Health.FAIR: 1, Health.GOOD: 2}


class RecommendationType(str, Enum):
    VIABILITY = "viability"
    PRICING = "pricing"
    ACQUISITION = "acquisition"
    RETENTION = "retention"
    OPTIMIZATION = "optimization"


class RecommendationStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    POSITIVE = "positive"

    @property
    def priority(self) -> int:
        # lower sorts first
        return _STATUS_PRIORITY[self]


_STATUS_PRIORITY = {
    RecommendationStatus.CRITICAL: 0,
    RecommendationStatus.WARNING: 1,
    RecommendationStatus.POSITIVE: 2,
}


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class FinancialInputs(CamelModel):
    average_price: float = Field(ge=0, allow_inf_nan=False)
    cost_per_unit: float = Field(ge=0, allow_inf_nan=False)
    fixed_costs: float = Field(ge=0, allow_inf_nan=False)  # per month
    customer_acquisition_cost: float = Field(ge=0, allow_inf_nan=False)
    monthly_new_customers: float = Field(ge=0, allow_inf_nan=False)
    average_customer_lifetime: float = Field(ge=0, allow_inf_nan=False)  # months
    calculation_notes: Optional[str] = None


class HealthVerdict(CamelModel):
    profitability_health: Health
    ltv_cac_health: Health
    overall_health: Health


class Recommendation(CamelModel):
    type: RecommendationType
    title: str
    message: str
    status: RecommendationStatus


class SimulationResult(CamelModel):
    unit_margin: float
    monthly_revenue: float
    monthly_profit: float
    ltv: float
    cac: float
    cac_ltv_ratio: Figure
    break_even_units: Figure
    break_even_months: Figure
    profitability_health: Health
    ltv_cac_health: Health
    overall_health: Health
    recommendations: List[Recommendation] = Field(min_length=1)
    calculation_version: str
    calculation_notes: Optional[str] = None

    @property
    def verdict(self) -> HealthVerdict:
        return HealthVerdict(
            profitability_health=self.profitability_health,
            ltv_cac_health=self.ltv_cac_health,
            overall_health=self.overall_health,
        )


class InputAdvisory(CamelModel):
    field: str
    message: str
