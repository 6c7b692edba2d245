"""Vehicle configuration — the static parameter bundle for one vehicle."""

from pydantic import BaseModel, ConfigDict, Field

from shev_simulator.config.components import (
    BatterySpec,
    BodySpec,
    EngineSpec,
    GeneratorSpec,
    MotorSpec,
)


class VehicleConfig(BaseModel):
    """One series-HEV instance, read-only for the whole simulation.

    Build variants with ``model_copy(update=...)`` or
    ``engine.scaling.scale_vehicle``; never mutate in place.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Reference series HEV", description="Human label")
    dt_s: float = Field(default=1.0, gt=0, description="Simulation timestep (s)")
    aux_power_w: float = Field(
        default=0.0,
        description="Auxiliary electrical load drawn from the battery bus (W)",
    )

    motor: MotorSpec = Field(default_factory=MotorSpec)
    generator: GeneratorSpec = Field(default_factory=GeneratorSpec)
    engine: EngineSpec = Field(default_factory=EngineSpec)
    battery: BatterySpec = Field(default_factory=BatterySpec)
    body: BodySpec = Field(default_factory=BodySpec)
