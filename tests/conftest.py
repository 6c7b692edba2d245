"""Shared test fixtures — a hand-calculable vehicle and the reference vehicle.

The "simple" vehicle uses constant or bilinear maps so every expected value
in the tests can be worked out on paper:

  motor      η = 0.9, |T| ≤ 200 Nm, ω ≤ 1000 rad/s
  generator  η = 0.9, |T| ≤ 150 Nm, ω ≤ 1200 rad/s, r = 2
  engine     fuel = 1e-4 · ω · T g/s, T ≤ 120 Nm, idle 100, max 500 rad/s,
             OOL torque 100 Nm, bsfc minimum at 300 rad/s
  battery    OCV = 300 V, R = 0.1 Ω, 10 Ah, −100 A ≤ I ≤ 200 A
  body       1000 kg, r_w = 0.25 m, i_fd = 4, η_fd = 1, g = 10
"""

from __future__ import annotations

import pytest

from shev_simulator.config import (
    BatterySpec,
    BodySpec,
    Curve,
    EngineSpec,
    GeneratorSpec,
    Map2D,
    MotorSpec,
    VehicleConfig,
)


def constant_curve(lo: float, hi: float, value: float) -> Curve:
    return Curve(breakpoints=(lo, hi), values=(value, value))


def constant_map(x_hi: float, y_lo: float, y_hi: float, value: float) -> Map2D:
    return Map2D(
        x_breakpoints=(0.0, x_hi),
        y_breakpoints=(y_lo, y_hi),
        values=((value, value), (value, value)),
    )


@pytest.fixture
def simple_motor() -> MotorSpec:
    return MotorSpec(
        max_power_w=50_000,
        max_speed_rad_s=1_000,
        mass_kg=40,
        inertia_kg_m2=0.05,
        max_torque=constant_curve(0.0, 1_000.0, 200.0),
        min_torque=constant_curve(0.0, 1_000.0, -200.0),
        efficiency=constant_map(1_000.0, -300.0, 300.0, 0.9),
    )


@pytest.fixture
def simple_generator() -> GeneratorSpec:
    return GeneratorSpec(
        max_power_w=60_000,
        max_speed_rad_s=1_200,
        mass_kg=30,
        inertia_kg_m2=0.05,
        max_torque=constant_curve(0.0, 1_200.0, 150.0),
        min_torque=constant_curve(0.0, 1_200.0, -150.0),
        efficiency=constant_map(1_200.0, -300.0, 300.0, 0.9),
        speed_ratio=2.0,
    )


@pytest.fixture
def simple_engine() -> EngineSpec:
    return EngineSpec(
        max_power_w=60_000,
        idle_speed_rad_s=100,
        max_speed_rad_s=500,
        mass_kg=90,
        inertia_kg_m2=0.15,
        max_torque=constant_curve(0.0, 500.0, 120.0),
        # bilinear in (ω, T) → reproduced exactly by the interpolator
        fuel_map=Map2D(
            x_breakpoints=(0.0, 500.0),
            y_breakpoints=(0.0, 150.0),
            values=((0.0, 0.0), (0.0, 1e-4 * 500.0 * 150.0)),
        ),
        bsfc_map=Map2D(
            x_breakpoints=(100.0, 300.0, 500.0),
            y_breakpoints=(0.0, 150.0),
            values=((300.0, 300.0), (220.0, 220.0), (300.0, 300.0)),
        ),
        ool_torque=constant_curve(0.0, 500.0, 100.0),
    )


@pytest.fixture
def simple_battery() -> BatterySpec:
    return BatterySpec(
        nominal_energy_wh=3_000,
        nominal_capacity_ah=10,
        mass_kg=40,
        open_circuit_voltage=constant_curve(0.0, 1.0, 300.0),
        internal_resistance=constant_curve(0.0, 1.0, 0.1),
        max_current_a=200,
        min_current_a=-100,
    )


@pytest.fixture
def simple_body() -> BodySpec:
    return BodySpec(
        mass_kg=1_000,
        wheel_radius_m=0.25,
        final_drive_ratio=4.0,
        driveline_efficiency=1.0,
        rolling_resistance=0.01,
        drag_coefficient=0.3,
        frontal_area_m2=2.0,
        air_density_kg_m3=1.2,
        gravity_m_s2=10.0,
    )


@pytest.fixture
def simple_vehicle(
    simple_motor: MotorSpec,
    simple_generator: GeneratorSpec,
    simple_engine: EngineSpec,
    simple_battery: BatterySpec,
    simple_body: BodySpec,
) -> VehicleConfig:
    return VehicleConfig(
        name="Simple test HEV",
        dt_s=1.0,
        motor=simple_motor,
        generator=simple_generator,
        engine=simple_engine,
        battery=simple_battery,
        body=simple_body,
    )


@pytest.fixture
def reference_vehicle() -> VehicleConfig:
    return VehicleConfig()
