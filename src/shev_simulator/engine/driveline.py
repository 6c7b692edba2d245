"""Driveline / road-load model — vehicle speed & acceleration → shaft demand.

Backward quasi-static: the prescribed speed trace fixes the tractive force,
which is pushed back through the wheels and the final drive to the motor
shaft.

  F_roll    = m · g · Cr          (only while moving)
  F_aero    = ½ · ρ · Cd · A · v²
  F_inertia = m · a
  T_wheel   = (F_roll + F_aero + F_inertia) · r_w
  ω_shaft   = v / r_w · i_fd
  T_shaft   = T_wheel / i_fd / η_fd   when tractive
            = T_wheel / i_fd · η_fd   when braking

Any callable with the signature of ``compute_driveline_demand`` can stand
in for this model (see ``LoadModel``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from shev_simulator.config.vehicle import VehicleConfig


@dataclass(frozen=True)
class DrivelineDemand:
    """Shaft demand for one timestep plus the road-load breakdown."""

    shaft_speed: float
    shaft_torque: float
    infeasible: bool = False
    baseline: dict[str, float] = field(default_factory=dict)


LoadModel = Callable[[float, float, VehicleConfig], DrivelineDemand]


def compute_driveline_demand(
    vehicle_speed: float,
    vehicle_acceleration: float,
    vehicle: VehicleConfig,
) -> DrivelineDemand:
    """Required shaft speed and torque to follow (speed, acceleration)."""
    body = vehicle.body
    v = float(vehicle_speed)
    a = float(vehicle_acceleration)

    rolling_force = body.mass_kg * body.gravity_m_s2 * body.rolling_resistance if v > 0 else 0.0
    aero_force = 0.5 * body.air_density_kg_m3 * body.drag_coefficient * body.frontal_area_m2 * v * abs(v)
    inertial_force = body.mass_kg * a
    tractive_force = rolling_force + aero_force + inertial_force

    wheel_speed = v / body.wheel_radius_m
    wheel_torque = tractive_force * body.wheel_radius_m

    shaft_speed = wheel_speed * body.final_drive_ratio
    gear_torque = wheel_torque / body.final_drive_ratio
    if gear_torque >= 0:
        shaft_torque = gear_torque / body.driveline_efficiency
    else:
        shaft_torque = gear_torque * body.driveline_efficiency

    return DrivelineDemand(
        shaft_speed=shaft_speed,
        shaft_torque=shaft_torque,
        infeasible=bool(v < 0 or not np.isfinite(tractive_force)),
        baseline={
            "wheel_speed": wheel_speed,
            "wheel_torque": wheel_torque,
            "rolling_force": rolling_force,
            "aero_force": aero_force,
            "inertial_force": inertial_force,
            "tractive_force": tractive_force,
        },
    )
