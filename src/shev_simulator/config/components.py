"""Powertrain component specifications — motor, generator, engine, battery, body.

Each spec holds rated limits, lookup maps and physical constants for one
subsystem.  Defaults describe a mid-size reference series HEV; its maps
are generated analytically so that ``VehicleConfig()`` is usable out of
the box for tests and quick studies.

Units: speeds in rad/s, torques in Nm, powers in W, energy in Wh,
capacity in Ah, currents in A, resistance in ohm, mass in kg.
"""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from shev_simulator.config.maps import Curve, Map2D


# ═══════════════════════════════════════════════════════════════════════════
# Reference maps
# ═══════════════════════════════════════════════════════════════════════════

FUEL_LHV_J_PER_G = 42_500.0  # gasoline lower heating value


def _power_limited_torque(peak_torque: float, rated_power: float):
    def fn(w: np.ndarray) -> np.ndarray:
        return np.minimum(peak_torque, rated_power / np.maximum(w, 1e-9))
    return fn


def _machine_efficiency(max_speed: float, peak_torque: float):
    def fn(w: np.ndarray, t: np.ndarray) -> np.ndarray:
        ws = w / max_speed
        ts = np.abs(t) / peak_torque
        return np.clip(0.94 - 0.15 * (ws - 0.45) ** 2 - 0.12 * (ts - 0.5) ** 2, 0.70, 0.95)
    return fn


def _engine_efficiency(w: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Brake thermal efficiency of the reference engine (peak ≈ 0.37)."""
    ts = np.minimum(t, 140.0) / 140.0
    return np.clip(0.37 - 0.12 * (w / 600.0 - 0.45) ** 2 - 0.25 * (ts - 0.85) ** 2, 0.12, 0.38)


def _reference_motor_max_torque() -> Curve:
    return Curve.sample(np.linspace(0.0, 1_000.0, 21), _power_limited_torque(200.0, 60_000.0))


def _reference_motor_min_torque() -> Curve:
    fn = _power_limited_torque(200.0, 60_000.0)
    return Curve.sample(np.linspace(0.0, 1_000.0, 21), lambda w: -fn(w))


def _reference_motor_efficiency() -> Map2D:
    return Map2D.sample(
        np.linspace(0.0, 1_000.0, 21),
        np.linspace(-250.0, 250.0, 21),
        _machine_efficiency(1_000.0, 200.0),
    )


def _reference_generator_max_torque() -> Curve:
    return Curve.sample(np.linspace(0.0, 1_000.0, 21), _power_limited_torque(150.0, 55_000.0))


def _reference_generator_min_torque() -> Curve:
    fn = _power_limited_torque(150.0, 55_000.0)
    return Curve.sample(np.linspace(0.0, 1_000.0, 21), lambda w: -fn(w))


def _reference_generator_efficiency() -> Map2D:
    return Map2D.sample(
        np.linspace(0.0, 1_000.0, 21),
        np.linspace(-200.0, 200.0, 21),
        _machine_efficiency(1_000.0, 150.0),
    )


def _reference_engine_max_torque() -> Curve:
    return Curve.sample(np.linspace(0.0, 600.0, 25), _power_limited_torque(140.0, 50_000.0))


def _reference_engine_fuel_map() -> Map2D:
    # g/s = mechanical power / (efficiency × LHV); zero along the zero-torque line
    return Map2D.sample(
        np.linspace(0.0, 600.0, 25),
        np.linspace(-20.0, 160.0, 19),
        lambda w, t: w * t / (_engine_efficiency(w, t) * FUEL_LHV_J_PER_G),
    )


def _reference_engine_bsfc_map() -> Map2D:
    # g/kWh
    return Map2D.sample(
        np.linspace(0.0, 600.0, 25),
        np.linspace(-20.0, 160.0, 19),
        lambda w, t: 3.6e6 / (_engine_efficiency(w, t) * FUEL_LHV_J_PER_G),
    )


def _reference_engine_ool_torque() -> Curve:
    return Curve.sample(np.linspace(0.0, 600.0, 25), _power_limited_torque(119.0, 50_000.0))


def _reference_ocv() -> Curve:
    return Curve.sample(np.linspace(0.0, 1.0, 21), lambda s: 280.0 + 40.0 * s - 15.0 * np.exp(-20.0 * s))


def _reference_internal_resistance() -> Curve:
    return Curve.sample(np.linspace(0.0, 1.0, 21), lambda s: 0.25 + 0.15 * np.exp(-10.0 * s))


# ═══════════════════════════════════════════════════════════════════════════
# Electric machines
# ═══════════════════════════════════════════════════════════════════════════

class ElectricMachineSpec(BaseModel):
    """Shared fields of the traction motor and the generator."""

    model_config = ConfigDict(frozen=True)

    max_power_w: float = Field(gt=0, description="Rated power (W)")
    max_speed_rad_s: float = Field(gt=0, description="Maximum shaft speed (rad/s)")
    mass_kg: float = Field(default=0.0, ge=0, description="Machine mass (kg)")
    inertia_kg_m2: float = Field(default=0.0, ge=0, description="Rotor inertia (kg·m²)")
    max_torque: Curve = Field(description="Maximum (motoring) torque vs speed (Nm)")
    min_torque: Curve = Field(description="Minimum (regenerating) torque vs speed (Nm), negative")
    efficiency: Map2D = Field(description="Efficiency vs (speed, torque), 0–1")


class MotorSpec(ElectricMachineSpec):
    """Traction motor, ideally coupled to the driveline shaft."""

    max_power_w: float = Field(default=60_000.0, gt=0, description="Rated power (W)")
    max_speed_rad_s: float = Field(default=1_000.0, gt=0, description="Maximum shaft speed (rad/s)")
    mass_kg: float = Field(default=40.0, ge=0, description="Machine mass (kg)")
    inertia_kg_m2: float = Field(default=0.05, ge=0, description="Rotor inertia (kg·m²)")
    max_torque: Curve = Field(default_factory=_reference_motor_max_torque)
    min_torque: Curve = Field(default_factory=_reference_motor_min_torque)
    efficiency: Map2D = Field(default_factory=_reference_motor_efficiency)


class GeneratorSpec(ElectricMachineSpec):
    """Generator, rigidly coupled to the engine crankshaft."""

    max_power_w: float = Field(default=55_000.0, gt=0, description="Rated power (W)")
    max_speed_rad_s: float = Field(default=1_000.0, gt=0, description="Maximum shaft speed (rad/s)")
    mass_kg: float = Field(default=30.0, ge=0, description="Machine mass (kg)")
    inertia_kg_m2: float = Field(default=0.05, ge=0, description="Rotor inertia (kg·m²)")
    max_torque: Curve = Field(default_factory=_reference_generator_max_torque)
    min_torque: Curve = Field(default_factory=_reference_generator_min_torque)
    efficiency: Map2D = Field(default_factory=_reference_generator_efficiency)
    speed_ratio: float = Field(
        default=1.5, gt=0,
        description="Generator speed / engine speed of the fixed coupling",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Engine
# ═══════════════════════════════════════════════════════════════════════════

class EngineSpec(BaseModel):
    """Internal-combustion engine driving the generator."""

    model_config = ConfigDict(frozen=True)

    max_power_w: float = Field(default=50_000.0, gt=0, description="Rated power (W)")
    idle_speed_rad_s: float = Field(default=100.0, ge=0, description="Idle speed (rad/s)")
    max_speed_rad_s: float = Field(default=600.0, gt=0, description="Maximum speed (rad/s)")
    mass_kg: float = Field(default=90.0, ge=0, description="Engine mass (kg)")
    inertia_kg_m2: float = Field(default=0.15, ge=0, description="Crankshaft inertia (kg·m²)")
    max_torque: Curve = Field(default_factory=_reference_engine_max_torque)
    fuel_map: Map2D = Field(
        default_factory=_reference_engine_fuel_map,
        description="Fuel mass flow rate vs (speed, torque), g/s",
    )
    bsfc_map: Map2D = Field(
        default_factory=_reference_engine_bsfc_map,
        description="Brake-specific fuel consumption vs (speed, torque), g/kWh",
    )
    ool_torque: Curve = Field(
        default_factory=_reference_engine_ool_torque,
        description="Optimal-operating-line torque vs speed (Nm)",
    )

    @model_validator(mode="after")
    def _idle_below_max(self) -> EngineSpec:
        if self.idle_speed_rad_s >= self.max_speed_rad_s:
            raise ValueError("idle_speed_rad_s must be below max_speed_rad_s")
        return self

    def ool_speed_curve(self) -> Curve:
        """Speed on the optimal operating line as a function of power.

        Inverts ``ool_torque``: power = speed × torque.  Only the strictly
        increasing part of the power locus is kept, since a constant-power
        plateau has no unique inverse.
        """
        speeds = self.ool_torque.breakpoints
        powers = [w * t for w, t in zip(speeds, self.ool_torque.values)]

        kept_power = [powers[0]]
        kept_speed = [speeds[0]]
        for w, p in zip(speeds[1:], powers[1:]):
            # a rounding-level rise along a plateau is still a plateau
            if p - kept_power[-1] > 1e-9 * max(abs(p), 1.0):
                kept_power.append(p)
                kept_speed.append(w)

        if len(kept_power) < 2:
            raise ValueError("optimal operating line has no increasing power range")
        return Curve(breakpoints=tuple(kept_power), values=tuple(kept_speed))


# ═══════════════════════════════════════════════════════════════════════════
# Battery
# ═══════════════════════════════════════════════════════════════════════════

class BatterySpec(BaseModel):
    """Battery pack as an OCV source in series with an internal resistance."""

    model_config = ConfigDict(frozen=True)

    nominal_energy_wh: float = Field(default=3_000.0, gt=0, description="Nominal energy (Wh)")
    nominal_capacity_ah: float = Field(default=10.0, gt=0, description="Nominal capacity (Ah)")
    mass_kg: float = Field(default=40.0, ge=0, description="Pack mass (kg)")
    open_circuit_voltage: Curve = Field(
        default_factory=_reference_ocv,
        description="Open-circuit voltage vs SOC (V)",
    )
    internal_resistance: Curve = Field(
        default_factory=_reference_internal_resistance,
        description="Equivalent internal resistance vs SOC (ohm)",
    )
    max_current_a: float = Field(default=200.0, gt=0, description="Maximum discharge current (A)")
    min_current_a: float = Field(
        default=-120.0, lt=0,
        description="Maximum charge current (A); negative by sign convention",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Vehicle body & driveline
# ═══════════════════════════════════════════════════════════════════════════

class BodySpec(BaseModel):
    """Vehicle body, wheels and final drive."""

    model_config = ConfigDict(frozen=True)

    mass_kg: float = Field(default=1_600.0, gt=0, description="Total vehicle mass incl. components (kg)")
    wheel_radius_m: float = Field(default=0.30, gt=0, description="Dynamic wheel radius (m)")
    final_drive_ratio: float = Field(default=7.0, gt=0, description="Motor speed / wheel speed")
    driveline_efficiency: float = Field(default=0.95, gt=0, le=1.0, description="Final drive efficiency")
    rolling_resistance: float = Field(default=0.011, ge=0, description="Rolling resistance coefficient")
    drag_coefficient: float = Field(default=0.30, ge=0, description="Aerodynamic drag coefficient")
    frontal_area_m2: float = Field(default=2.2, gt=0, description="Frontal area (m²)")
    air_density_kg_m3: float = Field(default=1.2, gt=0, description="Air density (kg/m³)")
    gravity_m_s2: float = Field(default=9.81, gt=0, description="Gravitational acceleration (m/s²)")
