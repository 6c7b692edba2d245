"""Configuration models — vehicle, components, lookup maps, strategy."""

from shev_simulator.config.maps import Curve, Map2D
from shev_simulator.config.components import (
    BatterySpec,
    BodySpec,
    ElectricMachineSpec,
    EngineSpec,
    GeneratorSpec,
    MotorSpec,
)
from shev_simulator.config.vehicle import VehicleConfig
from shev_simulator.config.strategy import RuleBasedStrategy

__all__ = [
    "Curve",
    "Map2D",
    "ElectricMachineSpec",
    "MotorSpec",
    "GeneratorSpec",
    "EngineSpec",
    "BatterySpec",
    "BodySpec",
    "VehicleConfig",
    "RuleBasedStrategy",
]
