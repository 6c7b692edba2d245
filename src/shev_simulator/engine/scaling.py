"""Component rescaling — resize motor, engine, generator and battery.

Linear scaling by the ratio of new to old rating:

  machines : power, inertia, mass, torque curves × k; efficiency-map torque axis × k
  engine   : power, inertia, mass, max & OOL torque × k;
             fuel values × k; fuel & bsfc torque axes × k
  battery  : cells added in parallel → energy, capacity, mass, current limits × k;
             internal resistance ÷ k
  body     : old component masses swapped for the rescaled ones

The generator follows the engine, keeping its original power ratio to it.
The OOL speed-from-power inverse is derived from the OOL torque curve on
demand (``EngineSpec.ool_speed_curve``), so it always reflects the rescaled
torque values.

This is a one-off configuration transform: the input ``VehicleConfig`` is
never mutated and a new one is returned.
"""

from __future__ import annotations

import logging

from shev_simulator.config.components import (
    BatterySpec,
    ElectricMachineSpec,
    EngineSpec,
)
from shev_simulator.config.vehicle import VehicleConfig

logger = logging.getLogger(__name__)

# Plausibility bounds; outside them we warn but still rescale.
MIN_PLAUSIBLE_POWER_W = 10e3
MAX_PLAUSIBLE_POWER_W = 1e6
MIN_PLAUSIBLE_ENERGY_WH = 100.0
MAX_PLAUSIBLE_ENERGY_WH = 10e3


def _check_plausible(label: str, value: float, low: float, high: float, unit: str) -> None:
    if value <= 0:
        raise ValueError(f"{label} must be positive, got {value}")
    if value > high:
        logger.warning("Requested %s of %.0f %s is above %.0f %s; is this intended?", label, value, unit, high, unit)
    if value < low:
        logger.warning("Requested %s of %.0f %s is below %.0f %s; is this intended?", label, value, unit, low, unit)


def scale_machine(machine: ElectricMachineSpec, power_w: float) -> ElectricMachineSpec:
    """Rescale an electric machine (motor or generator) to ``power_w``."""
    k = power_w / machine.max_power_w
    return machine.model_copy(update={
        "max_power_w": power_w,
        "inertia_kg_m2": machine.inertia_kg_m2 * k,
        "mass_kg": machine.mass_kg * k,
        "max_torque": machine.max_torque.scaled(value_factor=k),
        "min_torque": machine.min_torque.scaled(value_factor=k),
        "efficiency": machine.efficiency.scaled(y_factor=k),
    })


def scale_engine(engine: EngineSpec, power_w: float) -> EngineSpec:
    """Rescale the engine to ``power_w``."""
    k = power_w / engine.max_power_w
    return engine.model_copy(update={
        "max_power_w": power_w,
        "inertia_kg_m2": engine.inertia_kg_m2 * k,
        "mass_kg": engine.mass_kg * k,
        "max_torque": engine.max_torque.scaled(value_factor=k),
        "ool_torque": engine.ool_torque.scaled(value_factor=k),
        "fuel_map": engine.fuel_map.scaled(value_factor=k, y_factor=k),
        "bsfc_map": engine.bsfc_map.scaled(y_factor=k),
    })


def scale_battery(battery: BatterySpec, energy_wh: float) -> BatterySpec:
    """Rescale the battery to ``energy_wh`` by adding/removing parallel strings."""
    k = energy_wh / battery.nominal_energy_wh
    return battery.model_copy(update={
        "nominal_energy_wh": energy_wh,
        "nominal_capacity_ah": battery.nominal_capacity_ah * k,
        "mass_kg": battery.mass_kg * k,
        "internal_resistance": battery.internal_resistance.scaled(value_factor=1.0 / k),
        "max_current_a": battery.max_current_a * k,
        "min_current_a": battery.min_current_a * k,
    })


def scale_vehicle(
    vehicle: VehicleConfig,
    motor_power_w: float,
    engine_power_w: float,
    battery_energy_wh: float,
) -> VehicleConfig:
    """New ``VehicleConfig`` with motor, engine, generator and battery resized.

    Ratings outside plausible bounds log a warning; non-positive ratings
    raise ``ValueError``.
    """
    _check_plausible("e-machine power", motor_power_w, MIN_PLAUSIBLE_POWER_W, MAX_PLAUSIBLE_POWER_W, "W")
    _check_plausible("engine power", engine_power_w, MIN_PLAUSIBLE_POWER_W, MAX_PLAUSIBLE_POWER_W, "W")
    _check_plausible(
        "battery energy", battery_energy_wh, MIN_PLAUSIBLE_ENERGY_WH, MAX_PLAUSIBLE_ENERGY_WH, "Wh",
    )

    generator_power_w = engine_power_w * vehicle.generator.max_power_w / vehicle.engine.max_power_w

    motor = scale_machine(vehicle.motor, motor_power_w)
    generator = scale_machine(vehicle.generator, generator_power_w)
    engine = scale_engine(vehicle.engine, engine_power_w)
    battery = scale_battery(vehicle.battery, battery_energy_wh)

    old_components = (
        vehicle.motor.mass_kg + vehicle.engine.mass_kg
        + vehicle.generator.mass_kg + vehicle.battery.mass_kg
    )
    new_components = motor.mass_kg + engine.mass_kg + generator.mass_kg + battery.mass_kg
    body = vehicle.body.model_copy(
        update={"mass_kg": vehicle.body.mass_kg - old_components + new_components}
    )

    logger.debug(
        "Rescaled %s: motor %.0f W, engine %.0f W, generator %.0f W, battery %.0f Wh, mass %.1f kg",
        vehicle.name, motor_power_w, engine_power_w, generator_power_w, battery_energy_wh, body.mass_kg,
    )

    return vehicle.model_copy(update={
        "motor": motor,
        "generator": generator,
        "engine": engine,
        "battery": battery,
        "body": body,
    })
