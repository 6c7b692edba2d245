"""Rule-based engine command — a simple heuristic supervisory controller.

Given the electrical power the motor needs this step, choose how much
power the engine should deliver and where on the optimal operating line
(OOL) to run it.  The choice is an ordered rule table; the first rule
whose condition holds sets the commanded power:

  rule                 condition              commanded power
  ───────────────────  ─────────────────────  ───────────────────────────────
  at-or-below-optimal  |d| ≤ |P_opt|          P_opt
  near-optimal         |d| ≤ 1.25·|P_opt|     (1 + (|d|−|P_opt|)/|P_opt|)·P_opt
  boosted              |d| ≤ 1.75·|P_opt|     1.1·(1 − (|P_max|−|d|)/|P_max|)·P_max
  high-demand          always                 min((1 − (|P_max|−|d|)/|P_max|)·P_max, P_max)

The 10 % boost in the mid band charges the battery while staying away
from full load.  The commanded power is then mapped to an engine speed
through the OOL inverse (floored at idle) and torque = power / speed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from shev_simulator.config.components import EngineSpec
from shev_simulator.config.maps import Curve
from shev_simulator.config.vehicle import VehicleConfig
from shev_simulator.engine.driveline import LoadModel, compute_driveline_demand
from shev_simulator.engine.motor import evaluate_motor
from shev_simulator.engine.powertrain import PowertrainControl

OOL_SCAN_POINTS = 100


# ═══════════════════════════════════════════════════════════════════════════
# Engine reference points
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngineOperatingPoints:
    """Characteristic points of the engine's optimal operating line."""

    optimal_speed: float
    optimal_torque: float
    optimal_power: float
    """Power at the bsfc minimum along the OOL (W)."""
    max_power_speed: float
    max_power: float
    """Speed of the OOL power peak × max torque at that speed (W)."""
    ool_speed: Curve
    """OOL speed as a function of power, from ``EngineSpec.ool_speed_curve``."""


def engine_operating_points(engine: EngineSpec) -> EngineOperatingPoints:
    """Scan the OOL between idle and max speed for the bsfc optimum and power peak."""
    speeds = np.linspace(engine.idle_speed_rad_s, engine.max_speed_rad_s, OOL_SCAN_POINTS)
    ool_torques = engine.ool_torque(speeds)
    ool_powers = speeds * ool_torques

    i_opt = int(np.argmin(engine.bsfc_map(speeds, ool_torques)))
    optimal_speed = float(speeds[i_opt])
    optimal_torque = float(engine.ool_torque(optimal_speed))

    i_max = int(np.argmax(ool_powers))
    max_power_speed = float(speeds[i_max])

    return EngineOperatingPoints(
        optimal_speed=optimal_speed,
        optimal_torque=optimal_torque,
        optimal_power=optimal_speed * optimal_torque,
        max_power_speed=max_power_speed,
        max_power=max_power_speed * float(engine.max_torque(max_power_speed)),
        ool_speed=engine.ool_speed_curve(),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Power command rule table
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PowerRule:
    """One row of the rule table: (demanded, optimal, maximum) → bool / power."""

    name: str
    applies: Callable[[float, float, float], bool]
    command: Callable[[float, float, float], float]


def _headroom_gain(d: float, m: float) -> float:
    return 1.0 - (abs(m) - abs(d)) / abs(m)


POWER_RULES: tuple[PowerRule, ...] = (
    PowerRule(
        name="at-or-below-optimal",
        applies=lambda d, o, m: abs(d) <= abs(o),
        command=lambda d, o, m: o,
    ),
    PowerRule(
        name="near-optimal",
        applies=lambda d, o, m: abs(d) <= 1.25 * abs(o),
        command=lambda d, o, m: (1.0 + (abs(d) - abs(o)) / abs(o)) * o,
    ),
    PowerRule(
        name="boosted",
        applies=lambda d, o, m: abs(d) <= 1.75 * abs(o),
        command=lambda d, o, m: 1.1 * _headroom_gain(d, m) * m,
    ),
    PowerRule(
        name="high-demand",
        applies=lambda d, o, m: True,
        command=lambda d, o, m: min(_headroom_gain(d, m) * m, m),
    ),
)


def select_power_rule(demanded: float, optimal: float, maximum: float) -> PowerRule:
    """First rule of ``POWER_RULES`` whose condition holds."""
    if optimal <= 0 or maximum <= 0:
        raise ValueError("optimal and maximum engine power must be positive")
    for rule in POWER_RULES:
        if rule.applies(demanded, optimal, maximum):
            return rule
    raise AssertionError("rule table has no catch-all rule")


def command_engine_power(demanded: float, optimal: float, maximum: float) -> float:
    """Engine power command (W) for a demanded electrical power."""
    rule = select_power_rule(demanded, optimal, maximum)
    return float(rule.command(demanded, optimal, maximum))


# ═══════════════════════════════════════════════════════════════════════════
# Controller
# ═══════════════════════════════════════════════════════════════════════════

def fuel_control(
    engine_on: bool,
    vehicle_speed: float,
    vehicle_acceleration: float,
    vehicle: VehicleConfig,
    load_model: LoadModel = compute_driveline_demand,
    points: EngineOperatingPoints | None = None,
) -> PowertrainControl:
    """Engine operating point for this step.

    With the engine off the command is idle speed and zero torque.
    Pass ``points`` to reuse a precomputed ``engine_operating_points`` result
    across a drive cycle.
    """
    engine = vehicle.engine
    if not engine_on:
        return PowertrainControl(engine.idle_speed_rad_s, 0.0)

    demand = load_model(vehicle_speed, vehicle_acceleration, vehicle)
    demanded_power = float(
        evaluate_motor(vehicle.motor, demand.shaft_speed, demand.shaft_torque).electrical_power
    )

    if points is None:
        points = engine_operating_points(engine)
    power = command_engine_power(demanded_power, points.optimal_power, points.max_power)

    speed = max(float(points.ool_speed(power)), engine.idle_speed_rad_s)
    return PowertrainControl(speed, power / speed)
