"""Engine — powertrain subsystem models, timestep orchestrator and helpers."""

from shev_simulator.engine.driveline import DrivelineDemand, compute_driveline_demand
from shev_simulator.engine.motor import MotorResult, evaluate_motor
from shev_simulator.engine.combustion import EngineResult, evaluate_engine
from shev_simulator.engine.generator import GeneratorResult, evaluate_generator
from shev_simulator.engine.battery import BatteryResult, evaluate_battery, solve_battery_current
from shev_simulator.engine.powertrain import (
    ExogenousInput,
    PowertrainControl,
    StepResult,
    classify_operating_mode,
    step,
)
from shev_simulator.engine.fuel_control import (
    EngineOperatingPoints,
    command_engine_power,
    engine_operating_points,
    fuel_control,
)
from shev_simulator.engine.scaling import scale_vehicle
from shev_simulator.engine.simulate import simulate_cycle, simulate_rule_based

__all__ = [
    "DrivelineDemand",
    "compute_driveline_demand",
    "MotorResult",
    "evaluate_motor",
    "EngineResult",
    "evaluate_engine",
    "GeneratorResult",
    "evaluate_generator",
    "BatteryResult",
    "evaluate_battery",
    "solve_battery_current",
    # Timestep model
    "step",
    "StepResult",
    "PowertrainControl",
    "ExogenousInput",
    "classify_operating_mode",
    # Helpers
    "EngineOperatingPoints",
    "engine_operating_points",
    "command_engine_power",
    "fuel_control",
    "scale_vehicle",
    "simulate_cycle",
    "simulate_rule_based",
]
