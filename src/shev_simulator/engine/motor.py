"""Traction motor — shaft demand → electrical power.

The motor shares speed and torque with the driveline shaft through an
ideal torque coupler.  Regenerative torque is saturated at the minimum
torque curve (a hard regen-braking limit, excess braking goes to the
friction brakes); the upper limit is reported, not clamped.

  motoring (T ≥ 0):   P_el = ω · T / η
  regen    (T < 0):   P_el = ω · T · η
  η = 1 at standstill (the map is undefined at ω = 0)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from shev_simulator.config.components import MotorSpec


@dataclass(frozen=True)
class MotorResult:
    speed: float | np.ndarray
    torque: float | np.ndarray
    """Torque after regen saturation."""
    efficiency: float | np.ndarray
    electrical_power: float | np.ndarray
    speed_infeasible: bool | np.ndarray
    torque_infeasible: bool | np.ndarray

    @property
    def infeasible(self) -> bool | np.ndarray:
        return self.speed_infeasible | self.torque_infeasible


def machine_efficiency(efficiency_map, speed, torque):
    """Map efficiency where the shaft turns, exactly 1 where it does not."""
    speed = np.asarray(speed, dtype=float)
    torque = np.asarray(torque, dtype=float)
    moving = speed != 0
    if not np.any(moving):
        return np.ones(np.broadcast(speed, torque).shape)
    return np.where(moving, efficiency_map(speed, torque), 1.0)


def evaluate_motor(motor: MotorSpec, shaft_speed, shaft_torque) -> MotorResult:
    """Electrical power drawn (> 0) or recovered (< 0) by the traction motor."""
    speed = np.asarray(shaft_speed, dtype=float)
    demanded = np.asarray(shaft_torque, dtype=float)

    max_torque = motor.max_torque(speed)
    min_torque = motor.min_torque(speed)

    torque = np.maximum(demanded, min_torque)
    efficiency = machine_efficiency(motor.efficiency, speed, torque)

    mechanical_power = speed * torque
    electrical_power = np.where(
        torque < 0,
        mechanical_power * efficiency,
        mechanical_power / efficiency,
    )

    return MotorResult(
        speed=speed,
        torque=torque,
        efficiency=efficiency,
        electrical_power=electrical_power,
        speed_infeasible=speed > motor.max_speed_rad_s,
        torque_infeasible=(torque < min_torque) | (torque > max_torque),
    )
