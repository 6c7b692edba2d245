"""Generator — rigidly geared to the engine crankshaft.

  ω_gen = ω_eng · r
  T_gen = −T_eng / r      (the generator absorbs the engine torque)
  P_el  = ω_gen · T_gen · η   (negative = power delivered to the bus)

Only generating operation is modelled; there is no motoring branch.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from shev_simulator.config.components import GeneratorSpec
from shev_simulator.engine.motor import machine_efficiency


@dataclass(frozen=True)
class GeneratorResult:
    speed: float | np.ndarray
    torque: float | np.ndarray
    efficiency: float | np.ndarray
    electrical_power: float | np.ndarray
    speed_infeasible: bool | np.ndarray
    torque_infeasible: bool | np.ndarray

    @property
    def infeasible(self) -> bool | np.ndarray:
        return self.speed_infeasible | self.torque_infeasible


def evaluate_generator(generator: GeneratorSpec, engine_speed, engine_torque) -> GeneratorResult:
    speed, eng_torque = np.broadcast_arrays(
        np.asarray(engine_speed, dtype=float), np.asarray(engine_torque, dtype=float)
    )
    speed = speed * generator.speed_ratio
    torque = -eng_torque / generator.speed_ratio

    efficiency = machine_efficiency(generator.efficiency, speed, torque)
    electrical_power = speed * torque * efficiency

    max_torque = generator.max_torque(speed)
    min_torque = generator.min_torque(speed)

    return GeneratorResult(
        speed=speed,
        torque=torque,
        efficiency=efficiency,
        electrical_power=electrical_power,
        speed_infeasible=speed > generator.max_speed_rad_s,
        torque_infeasible=(torque < min_torque) | (torque > max_torque),
    )
