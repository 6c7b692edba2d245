"""Lookup maps — tabulated component characteristics.

Every performance characteristic of the powertrain (efficiency maps,
torque limits, fuel maps, battery OCV and resistance curves, the engine's
optimal operating line) is a table sampled on a rectilinear grid:

  Curve  : y = f(x)      linear interpolation, linear extrapolation
  Map2D  : z = f(x, y)   bilinear interpolation, linear extrapolation

Both are frozen pydantic models, so they serialize with the rest of the
vehicle configuration and can be rescaled without mutating the original.
Calling a map with a scalar returns a ``float``; calling it with an array
returns an ``np.ndarray`` of the broadcast shape.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from scipy.interpolate import RegularGridInterpolator


def _check_axis(values: tuple[float, ...]) -> tuple[float, ...]:
    if len(values) < 2:
        raise ValueError("a breakpoint axis needs at least two points")
    if any(math.isnan(v) for v in values):
        raise ValueError("breakpoints must not contain NaN")
    if any(b <= a for a, b in zip(values, values[1:])):
        raise ValueError("breakpoints must be strictly increasing")
    return values


@lru_cache(maxsize=256)
def _grid_interpolator(axes: tuple[tuple[float, ...], ...], values: tuple) -> RegularGridInterpolator:
    # keyed on the frozen table contents, so equal maps share one interpolator
    return RegularGridInterpolator(
        tuple(np.asarray(axis) for axis in axes),
        np.asarray(values),
        bounds_error=False,
        fill_value=None,
    )


def _as_output(out: np.ndarray) -> float | np.ndarray:
    return float(out) if out.ndim == 0 else out


class Curve(BaseModel):
    """One-dimensional lookup table ``y = f(x)``."""

    model_config = ConfigDict(frozen=True)

    breakpoints: tuple[float, ...] = Field(description="Strictly increasing x samples")
    values: tuple[float, ...] = Field(description="y samples, one per breakpoint")

    @field_validator("breakpoints")
    @classmethod
    def _breakpoints_increasing(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        return _check_axis(v)

    @model_validator(mode="after")
    def _shape_matches(self) -> Curve:
        if len(self.values) != len(self.breakpoints):
            raise ValueError(
                f"curve has {len(self.breakpoints)} breakpoints but {len(self.values)} values"
            )
        if any(math.isnan(v) for v in self.values):
            raise ValueError("curve values must not contain NaN")
        return self

    @classmethod
    def sample(cls, breakpoints, fn: Callable[[np.ndarray], np.ndarray]) -> Curve:
        """Tabulate ``fn`` on ``breakpoints``."""
        x = np.asarray(breakpoints, dtype=float)
        y = np.broadcast_to(np.asarray(fn(x), dtype=float), x.shape)
        return cls(breakpoints=tuple(x.tolist()), values=tuple(y.tolist()))

    def __call__(self, x):
        x_arr = np.asarray(x, dtype=float)
        interp = _grid_interpolator((self.breakpoints,), self.values)
        out = interp(x_arr.reshape(-1, 1)).reshape(x_arr.shape)
        return _as_output(out)

    def scaled(self, value_factor: float = 1.0, breakpoint_factor: float = 1.0) -> Curve:
        """Return a copy with values and/or breakpoints multiplied by a factor."""
        if breakpoint_factor <= 0:
            raise ValueError("breakpoint_factor must be positive")
        return Curve(
            breakpoints=tuple(b * breakpoint_factor for b in self.breakpoints),
            values=tuple(v * value_factor for v in self.values),
        )


class Map2D(BaseModel):
    """Two-dimensional lookup table ``z = f(x, y)``.

    ``values[i][j]`` is the sample at ``(x_breakpoints[i], y_breakpoints[j])``.
    For machine and engine maps x is speed (rad/s) and y is torque (Nm).
    """

    model_config = ConfigDict(frozen=True)

    x_breakpoints: tuple[float, ...]
    y_breakpoints: tuple[float, ...]
    values: tuple[tuple[float, ...], ...]

    @field_validator("x_breakpoints", "y_breakpoints")
    @classmethod
    def _breakpoints_increasing(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        return _check_axis(v)

    @model_validator(mode="after")
    def _shape_matches(self) -> Map2D:
        nx, ny = len(self.x_breakpoints), len(self.y_breakpoints)
        if len(self.values) != nx or any(len(row) != ny for row in self.values):
            raise ValueError(f"map values must have shape ({nx}, {ny})")
        if any(math.isnan(v) for row in self.values for v in row):
            raise ValueError("map values must not contain NaN")
        return self

    @classmethod
    def sample(cls, x_breakpoints, y_breakpoints, fn: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> Map2D:
        """Tabulate ``fn(x, y)`` on the full grid."""
        x = np.asarray(x_breakpoints, dtype=float)
        y = np.asarray(y_breakpoints, dtype=float)
        xx, yy = np.meshgrid(x, y, indexing="ij")
        z = np.broadcast_to(np.asarray(fn(xx, yy), dtype=float), xx.shape)
        return cls(
            x_breakpoints=tuple(x.tolist()),
            y_breakpoints=tuple(y.tolist()),
            values=tuple(tuple(row) for row in z.tolist()),
        )

    def __call__(self, x, y):
        x_arr, y_arr = np.broadcast_arrays(
            np.asarray(x, dtype=float), np.asarray(y, dtype=float)
        )
        interp = _grid_interpolator((self.x_breakpoints, self.y_breakpoints), self.values)
        points = np.stack([x_arr.ravel(), y_arr.ravel()], axis=-1)
        out = interp(points).reshape(x_arr.shape)
        return _as_output(out)

    def scaled(
        self,
        value_factor: float = 1.0,
        x_factor: float = 1.0,
        y_factor: float = 1.0,
    ) -> Map2D:
        """Return a copy with values and/or either axis multiplied by a factor."""
        if x_factor <= 0 or y_factor <= 0:
            raise ValueError("axis factors must be positive")
        return Map2D(
            x_breakpoints=tuple(b * x_factor for b in self.x_breakpoints),
            y_breakpoints=tuple(b * y_factor for b in self.y_breakpoints),
            values=tuple(tuple(v * value_factor for v in row) for row in self.values),
        )
