"""Rule-based energy-management settings."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RuleBasedStrategy(BaseModel):
    """SOC hysteresis ("thermostat") for switching the engine on and off.

    The engine starts when SOC drops below ``soc_low`` and stops once SOC
    climbs above ``soc_high``; in between it keeps its previous state.
    """

    model_config = ConfigDict(frozen=True)

    soc_low: float = Field(default=0.40, ge=0, le=1.0, description="Engine-on threshold")
    soc_high: float = Field(default=0.60, ge=0, le=1.0, description="Engine-off threshold")
    engine_on_at_start: bool = Field(default=False, description="Engine state before the first step")

    @model_validator(mode="after")
    def _low_below_high(self) -> "RuleBasedStrategy":
        if self.soc_low >= self.soc_high:
            raise ValueError("soc_low must be below soc_high")
        return self
