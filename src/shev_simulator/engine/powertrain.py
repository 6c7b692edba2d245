"""Series-HEV timestep model — one backward quasi-static state transition.

  state     x = battery SOC
  control   u = (engine speed, engine torque)
  exogenous w = (vehicle speed, vehicle acceleration)

  step(x, u, w, vehicle) → (SOC⁺, fuel flow g/s, infeasible, profile)

Each call runs, in this order:
  driveline → motor → engine → generator → power split & battery
  → OR of the five infeasibility flags → operating mode → profile

Physical limit violations never raise: they set ``infeasible`` and the
caller (search, optimizer, simulation loop) decides what to do with the
step.  The function is pure; ``VehicleConfig`` is only read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from shev_simulator.config.vehicle import VehicleConfig
from shev_simulator.engine.battery import bus_power, evaluate_battery
from shev_simulator.engine.combustion import evaluate_engine
from shev_simulator.engine.driveline import LoadModel, compute_driveline_demand
from shev_simulator.engine.generator import evaluate_generator
from shev_simulator.engine.motor import evaluate_motor
from shev_simulator.models.results import OperatingMode, PowertrainProfile


class PowertrainControl(NamedTuple):
    """Engine operating point chosen by the controller."""

    engine_speed: float
    engine_torque: float


class ExogenousInput(NamedTuple):
    """Drive-cycle sample for the current step."""

    vehicle_speed: float
    vehicle_acceleration: float


@dataclass(frozen=True)
class StepResult:
    """Immutable output of one timestep."""

    soc_next: float
    fuel_flow_g_s: float
    """Stage cost: engine fuel mass flow rate."""
    infeasible: bool
    """True when at least one subsystem constraint is violated."""
    profile: PowertrainProfile

    @property
    def feasible(self) -> bool:
        return not self.infeasible


def classify_operating_mode(engine_on: bool, battery_current: float) -> OperatingMode:
    """Exactly one label per step, from the engine state and the battery current sign."""
    if not engine_on:
        return "pure-electric"
    if battery_current >= 0:
        return "charge-depleting"
    return "charge-sustaining/blended"


def step(
    soc: float,
    control: PowertrainControl | tuple[float, float],
    exogenous: ExogenousInput | tuple[float, float],
    vehicle: VehicleConfig,
    load_model: LoadModel = compute_driveline_demand,
) -> StepResult:
    """Advance the powertrain by one timestep of ``vehicle.dt_s`` seconds."""
    engine_speed, engine_torque = control
    vehicle_speed, vehicle_acceleration = exogenous

    # ── Driveline ─────────────────────────────────────────────────────
    demand = load_model(vehicle_speed, vehicle_acceleration, vehicle)

    # ── Motor ─────────────────────────────────────────────────────────
    mot = evaluate_motor(vehicle.motor, demand.shaft_speed, demand.shaft_torque)

    # ── Engine ────────────────────────────────────────────────────────
    eng = evaluate_engine(vehicle.engine, engine_speed, engine_torque)

    # ── Generator ─────────────────────────────────────────────────────
    gen = evaluate_generator(vehicle.generator, eng.speed, eng.torque)

    # ── Power split & battery ─────────────────────────────────────────
    battery_power = bus_power(mot.electrical_power, gen.electrical_power, vehicle.aux_power_w)
    batt = evaluate_battery(vehicle.battery, soc, battery_power, vehicle.dt_s)

    # ── Feasibility & mode ────────────────────────────────────────────
    infeasible = bool(
        demand.infeasible
        or mot.infeasible
        or eng.infeasible
        or gen.infeasible
        or batt.infeasible
    )
    engine_on = bool(eng.engine_on)
    battery_current = float(batt.current)
    mode = classify_operating_mode(engine_on, battery_current)

    fuel_flow = float(eng.fuel_flow)

    profile = PowertrainProfile(
        vehicle_speed=float(vehicle_speed),
        vehicle_acceleration=float(vehicle_acceleration),
        shaft_speed=float(demand.shaft_speed),
        shaft_torque=float(demand.shaft_torque),
        driveline_infeasible=bool(demand.infeasible),
        driveline_baseline={k: float(v) for k, v in demand.baseline.items()},
        motor_speed=float(mot.speed),
        motor_torque=float(mot.torque),
        motor_efficiency=float(mot.efficiency),
        motor_electrical_power=float(mot.electrical_power),
        motor_speed_infeasible=bool(mot.speed_infeasible),
        motor_torque_infeasible=bool(mot.torque_infeasible),
        motor_infeasible=bool(mot.infeasible),
        engine_speed=float(eng.speed),
        engine_torque=float(eng.torque),
        engine_on=engine_on,
        fuel_flow=fuel_flow,
        engine_speed_infeasible=bool(eng.speed_infeasible),
        engine_torque_infeasible=bool(eng.torque_infeasible),
        engine_infeasible=bool(eng.infeasible),
        generator_speed=float(gen.speed),
        generator_torque=float(gen.torque),
        generator_efficiency=float(gen.efficiency),
        generator_electrical_power=float(gen.electrical_power),
        generator_speed_infeasible=bool(gen.speed_infeasible),
        generator_torque_infeasible=bool(gen.torque_infeasible),
        generator_infeasible=bool(gen.infeasible),
        aux_power=float(vehicle.aux_power_w),
        battery_power=float(batt.power),
        battery_soc=float(soc),
        battery_ocv=float(batt.open_circuit_voltage),
        battery_resistance=float(batt.resistance),
        battery_current=battery_current,
        battery_current_unclamped=float(batt.current_unclamped),
        battery_voltage=float(batt.terminal_voltage),
        battery_discriminant_negative=bool(batt.discriminant_negative),
        battery_current_infeasible=bool(batt.current_infeasible),
        battery_soc_infeasible=bool(batt.soc_infeasible),
        battery_infeasible=bool(batt.infeasible),
        operating_mode=mode,
        infeasible=infeasible,
    )

    return StepResult(
        soc_next=float(batt.soc_next),
        fuel_flow_g_s=fuel_flow,
        infeasible=infeasible,
        profile=profile,
    )
