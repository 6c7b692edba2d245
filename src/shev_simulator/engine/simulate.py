"""Drive-cycle simulation — call ``step`` once per sample, threading SOC.

Two entry points:
  - ``simulate_cycle``       : engine speed/torque given for every sample
  - ``simulate_rule_based``  : engine on/off by SOC hysteresis, operating
                               point from ``fuel_control``

Both return a ``CycleResult`` with the SOC trajectory, the per-step
profiles and the cycle totals.
"""

from __future__ import annotations

import logging
from typing import Sequence

from shev_simulator.config.strategy import RuleBasedStrategy
from shev_simulator.config.vehicle import VehicleConfig
from shev_simulator.engine.driveline import LoadModel, compute_driveline_demand
from shev_simulator.engine.fuel_control import engine_operating_points, fuel_control
from shev_simulator.engine.powertrain import (
    ExogenousInput,
    PowertrainControl,
    StepResult,
    step,
)
from shev_simulator.models.results import CycleResult

logger = logging.getLogger(__name__)


def _check_lengths(**series: Sequence[float]) -> int:
    lengths = {name: len(values) for name, values in series.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"input series must have equal lengths, got {lengths}")
    return next(iter(lengths.values()))


def _collect(vehicle: VehicleConfig, initial_soc: float, results: list[StepResult]) -> CycleResult:
    soc = [float(initial_soc)] + [r.soc_next for r in results]
    infeasible_steps = sum(1 for r in results if r.infeasible)
    if infeasible_steps:
        logger.info("%d of %d steps violate a powertrain constraint", infeasible_steps, len(results))
    return CycleResult(
        dt_s=vehicle.dt_s,
        soc=soc,
        profiles=[r.profile for r in results],
        total_fuel_g=sum(r.fuel_flow_g_s for r in results) * vehicle.dt_s,
        final_soc=soc[-1],
        infeasible_steps=infeasible_steps,
    )


def simulate_cycle(
    vehicle: VehicleConfig,
    vehicle_speed: Sequence[float],
    vehicle_acceleration: Sequence[float],
    engine_speed: Sequence[float],
    engine_torque: Sequence[float],
    initial_soc: float,
    load_model: LoadModel = compute_driveline_demand,
) -> CycleResult:
    """Run a prescribed engine trajectory over a drive cycle."""
    _check_lengths(
        vehicle_speed=vehicle_speed,
        vehicle_acceleration=vehicle_acceleration,
        engine_speed=engine_speed,
        engine_torque=engine_torque,
    )

    soc = float(initial_soc)
    results: list[StepResult] = []
    for v, a, w_eng, t_eng in zip(vehicle_speed, vehicle_acceleration, engine_speed, engine_torque):
        result = step(
            soc,
            PowertrainControl(float(w_eng), float(t_eng)),
            ExogenousInput(float(v), float(a)),
            vehicle,
            load_model=load_model,
        )
        results.append(result)
        soc = result.soc_next

    return _collect(vehicle, initial_soc, results)


def simulate_rule_based(
    vehicle: VehicleConfig,
    vehicle_speed: Sequence[float],
    vehicle_acceleration: Sequence[float],
    initial_soc: float,
    strategy: RuleBasedStrategy | None = None,
    load_model: LoadModel = compute_driveline_demand,
) -> CycleResult:
    """Run the rule-based controller over a drive cycle."""
    strategy = strategy or RuleBasedStrategy()
    _check_lengths(vehicle_speed=vehicle_speed, vehicle_acceleration=vehicle_acceleration)

    points = engine_operating_points(vehicle.engine)
    engine_on = strategy.engine_on_at_start
    soc = float(initial_soc)
    results: list[StepResult] = []

    for v, a in zip(vehicle_speed, vehicle_acceleration):
        if soc < strategy.soc_low:
            engine_on = True
        elif soc > strategy.soc_high:
            engine_on = False

        control = fuel_control(
            engine_on, float(v), float(a), vehicle, load_model=load_model, points=points,
        )
        result = step(soc, control, ExogenousInput(float(v), float(a)), vehicle, load_model=load_model)
        results.append(result)
        soc = result.soc_next

    return _collect(vehicle, initial_soc, results)
