"""Result models — simulation output contracts."""

from shev_simulator.models.results import (
    CycleResult,
    OperatingMode,
    PowertrainProfile,
)

__all__ = [
    "CycleResult",
    "OperatingMode",
    "PowertrainProfile",
]
