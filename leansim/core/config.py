# leansim/core/config.py
# -----------------------------------------------------------------------------
# Global settings (pydantic-settings v2)
# - reads OS environment variables (LEANSIM_ prefix) and an optional .env file
# - health thresholds live here so they can be tuned without touching logic
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from leansim.schemas.simulation import Health


class Band(BaseModel):
    """A value inside `limit` earns `health`."""

    limit: float
    health: Health
    inclusive: bool = False

    def admits(self, value: float) -> bool:
        return value <= self.limit if self.inclusive else value < self.limit


class HealthThresholds(BaseModel):
    # break-even months for a profitable business; beyond every band -> fair
    profitability_bands: List[Band] = Field(
        default_factory=lambda: [Band(limit=6, health=Health.GOOD, inclusive=True)]
    )
    # cac / ltv, lower is better; beyond every band -> poor
    ltv_cac_bands: List[Band] = Field(
        default_factory=lambda: [
            Band(limit=0.33, health=Health.GOOD),
            Band(limit=1.0, health=Health.FAIR),
        ]
    )
    # a monthly loss up to min(revenue * rate, cap) still counts as fair
    loss_tolerance_rate: float = Field(0.10, ge=0)
    loss_tolerance_cap: float = Field(500.0, ge=0)

    @field_validator("profitability_bands", "ltv_cac_bands")
    @classmethod
    def _ascending(cls, bands: List[Band]) -> List[Band]:
        limits = [b.limit for b in bands]
        if limits != sorted(limits):
            raise ValueError("bands must be listed with ascending limits")
        return bands

    @field_validator("profitability_bands")
    @classmethod
    def _no_poor_profit(cls, bands: List[Band]) -> List[Band]:
        # poor profitability is reserved for losses and non-positive margins
        if any(b.health is Health.POOR for b in bands):
            raise ValueError("profitability bands only grade a profit as good or fair")
        return bands

    def bands_for(self, dimension: str) -> List[Band]:
        return {
            "profitability": self.profitability_bands,
            "ltv_cac": self.ltv_cac_bands,
        }[dimension]


class Settings(BaseSettings):
    # basics
    APP_NAME: str = "LeanSim"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # bump whenever formulas or thresholds change so stored results stay readable
    CALCULATION_VERSION: str = "2.0"

    THRESHOLDS: HealthThresholds = Field(default_factory=HealthThresholds)

    model_config = SettingsConfigDict(
        env_prefix="LEANSIM_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",  # ignore unrelated keys in .env
    )


settings = Settings()
