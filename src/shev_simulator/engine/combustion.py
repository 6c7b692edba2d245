"""Internal-combustion engine — commanded operating point → fuel flow.

Speed and torque are decision variables chosen by the caller, not derived
from the vehicle.  The engine counts as "on" when it turns above idle and
delivers positive torque; that flag drives the operating-mode label only.

Constraints:
  - on  → idle ≤ ω ≤ ω_max
  - any → 0 ≤ T ≤ T_max(ω)   (the engine cannot be motored)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from shev_simulator.config.components import EngineSpec


@dataclass(frozen=True)
class EngineResult:
    speed: float | np.ndarray
    torque: float | np.ndarray
    engine_on: bool | np.ndarray
    fuel_flow: float | np.ndarray
    """g/s"""
    speed_infeasible: bool | np.ndarray
    torque_infeasible: bool | np.ndarray

    @property
    def infeasible(self) -> bool | np.ndarray:
        return self.speed_infeasible | self.torque_infeasible


def evaluate_engine(engine: EngineSpec, engine_speed, engine_torque) -> EngineResult:
    speed, torque = np.broadcast_arrays(
        np.asarray(engine_speed, dtype=float), np.asarray(engine_torque, dtype=float)
    )

    engine_on = (speed > engine.idle_speed_rad_s) & (torque > 0)

    # The map may carry artefacts at the origin; a stopped engine burns nothing.
    fuel_flow = np.where((speed == 0) & (torque == 0), 0.0, engine.fuel_map(speed, torque))

    max_torque = engine.max_torque(speed)
    speed_infeasible = engine_on & (
        (speed < engine.idle_speed_rad_s) | (speed > engine.max_speed_rad_s)
    )
    torque_infeasible = (torque > max_torque) | (torque < 0)

    return EngineResult(
        speed=speed,
        torque=torque,
        engine_on=engine_on,
        fuel_flow=fuel_flow,
        speed_infeasible=speed_infeasible,
        torque_infeasible=torque_infeasible,
    )
