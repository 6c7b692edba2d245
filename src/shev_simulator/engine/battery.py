"""Power split & battery — bus power → battery current → next SOC.

The battery is an open-circuit voltage source in series with an internal
resistance, both functions of SOC.  The terminal power balance

  P = I · (OCV − I · R)

is solved for the current with the root that vanishes at zero power:

  I = (OCV − √(OCV² − 4 · R · P)) / (2 · R)

When P > OCV² / 4R the discriminant is negative and no real current can
deliver the demand.  The model then keeps the real part of the complex
root, I = OCV / 2R.  This is a known approximation: the numeric value is
meaningless there, so such a step is always flagged infeasible.

Charge current (negative) is clamped at the charge limit for the SOC
update, while feasibility is judged on the unclamped current so the clamp
never hides a violation:

  SOC⁺ = SOC − I_clamped · dt / (C_nom · 3600)

SOC is not clamped either: a step that starts or ends outside [0, 1] is
flagged infeasible and the raw value is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from shev_simulator.config.components import BatterySpec

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class BatteryResult:
    power: float | np.ndarray
    """Net bus power, W (> 0 discharging)."""
    open_circuit_voltage: float | np.ndarray
    resistance: float | np.ndarray
    current_unclamped: float | np.ndarray
    current: float | np.ndarray
    """A, after the charge-current clamp (> 0 discharging)."""
    terminal_voltage: float | np.ndarray
    soc_next: float | np.ndarray
    discriminant_negative: bool | np.ndarray
    current_infeasible: bool | np.ndarray
    soc_infeasible: bool | np.ndarray
    """SOC at the start or end of the step lies outside [0, 1]."""

    @property
    def infeasible(self) -> bool | np.ndarray:
        return self.current_infeasible | self.discriminant_negative | self.soc_infeasible


def bus_power(motor_power, generator_power, aux_power=0.0):
    """Net electrical power the battery must supply (> 0) or absorb (< 0)."""
    return motor_power + generator_power + aux_power


def solve_battery_current(open_circuit_voltage, resistance, power):
    """Battery current for a given terminal power, plus a negative-discriminant flag."""
    ocv = np.asarray(open_circuit_voltage, dtype=float)
    r = np.asarray(resistance, dtype=float)
    p = np.asarray(power, dtype=float)

    discriminant = ocv ** 2 - 4.0 * r * p
    negative = discriminant < 0
    # Real part of the complex root: √ of a negative number is purely imaginary.
    root = np.sqrt(np.where(negative, 0.0, discriminant))
    current = (ocv - root) / (2.0 * r)
    return current, negative


def evaluate_battery(battery: BatterySpec, soc, power, dt_s: float) -> BatteryResult:
    soc = np.asarray(soc, dtype=float)
    power = np.asarray(power, dtype=float)

    resistance = battery.internal_resistance(soc)
    ocv = battery.open_circuit_voltage(soc)

    current_unclamped, discriminant_negative = solve_battery_current(ocv, resistance, power)
    if np.any(discriminant_negative):
        logger.debug(
            "battery power demand exceeds OCV²/4R at SOC=%s; using the real part of the current",
            soc,
        )

    current = np.maximum(current_unclamped, battery.min_current_a)
    soc_next = soc - current * dt_s / (battery.nominal_capacity_ah * SECONDS_PER_HOUR)

    current_infeasible = (
        ((power <= 0) & (current_unclamped < battery.min_current_a))
        | ((power > 0) & (current_unclamped > battery.max_current_a))
    )

    return BatteryResult(
        power=power,
        open_circuit_voltage=ocv,
        resistance=resistance,
        current_unclamped=current_unclamped,
        current=current,
        terminal_voltage=ocv - resistance * current,
        soc_next=soc_next,
        discriminant_negative=discriminant_negative,
        current_infeasible=current_infeasible,
        soc_infeasible=(soc < 0) | (soc > 1) | (soc_next < 0) | (soc_next > 1),
    )
