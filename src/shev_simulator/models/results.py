"""Result types — the contract between the powertrain model and its callers.

``PowertrainProfile`` is the per-timestep diagnostic record: every
intermediate physical quantity of one call to ``engine.powertrain.step``.
It is purely observational and carries no state forward.

``CycleResult`` aggregates the profiles of a whole drive cycle.
"""

from __future__ import annotations

from typing import Literal

import pandas as pd
from pydantic import BaseModel, Field


OperatingMode = Literal["pure-electric", "charge-depleting", "charge-sustaining/blended"]


# ═══════════════════════════════════════════════════════════════════════════
# Single timestep
# ═══════════════════════════════════════════════════════════════════════════

class PowertrainProfile(BaseModel):
    """All intermediate quantities of one timestep (SI units, W, A, V, g/s)."""

    # --- Exogenous input & driveline ---
    vehicle_speed: float
    vehicle_acceleration: float
    shaft_speed: float
    shaft_torque: float
    """Demanded shaft torque, before the motor's regen saturation."""
    driveline_infeasible: bool
    driveline_baseline: dict[str, float] = Field(default_factory=dict)
    """Road-load breakdown reported by the load model (forces, wheel speed/torque)."""

    # --- Motor ---
    motor_speed: float
    motor_torque: float
    """Torque actually used, after saturation at the minimum (regen) limit."""
    motor_efficiency: float
    motor_electrical_power: float
    motor_speed_infeasible: bool
    motor_torque_infeasible: bool
    motor_infeasible: bool

    # --- Engine ---
    engine_speed: float
    engine_torque: float
    engine_on: bool
    fuel_flow: float
    """Fuel mass flow rate (g/s) — the stage cost."""
    engine_speed_infeasible: bool
    engine_torque_infeasible: bool
    engine_infeasible: bool

    # --- Generator ---
    generator_speed: float
    generator_torque: float
    generator_efficiency: float
    generator_electrical_power: float
    generator_speed_infeasible: bool
    generator_torque_infeasible: bool
    generator_infeasible: bool

    # --- Power split & battery ---
    aux_power: float
    battery_power: float
    battery_soc: float
    """SOC at the start of the step."""
    battery_ocv: float
    battery_resistance: float
    battery_current: float
    """Current used for the SOC update (after the charge-current clamp)."""
    battery_current_unclamped: float
    """Solved current before the clamp — the value feasibility is judged on."""
    battery_voltage: float
    battery_discriminant_negative: bool
    """Power demand exceeded OCV²/4R; the current is the real part of the solve
    and must not be trusted.  Always sets ``battery_infeasible``."""
    battery_current_infeasible: bool
    """Unclamped current outside [min_current_a, max_current_a]."""
    battery_soc_infeasible: bool
    """SOC at the start or end of the step outside [0, 1]; SOC is never clamped."""
    battery_infeasible: bool

    # --- Step summary ---
    operating_mode: OperatingMode
    infeasible: bool


# ═══════════════════════════════════════════════════════════════════════════
# Drive cycle
# ═══════════════════════════════════════════════════════════════════════════

class CycleResult(BaseModel):
    """Outcome of running the step model over a drive cycle."""

    dt_s: float
    soc: list[float]
    """SOC trajectory, one longer than ``profiles`` (initial value first)."""
    profiles: list[PowertrainProfile]

    total_fuel_g: float
    final_soc: float
    infeasible_steps: int
    """Number of timesteps with at least one violated constraint."""

    @property
    def feasible(self) -> bool:
        return self.infeasible_steps == 0

    def to_dataframe(self) -> pd.DataFrame:
        """One row per timestep; driveline baseline entries become columns."""
        rows = []
        for k, prof in enumerate(self.profiles):
            row = prof.model_dump(exclude={"driveline_baseline"})
            for key, value in prof.driveline_baseline.items():
                row[f"driveline_{key}"] = value
            row["time_s"] = k * self.dt_s
            row["soc_next"] = self.soc[k + 1]
            rows.append(row)
        return pd.DataFrame(rows)
