"""Tests for config/maps.py — interpolation, extrapolation, validation, scaling."""

from __future__ import annotations

import numpy as np
import pytest
from pydantic import ValidationError

from shev_simulator.config.maps import Curve, Map2D, _grid_interpolator


# ═══════════════════════════════════════════════════════════════════════════
# Curve
# ═══════════════════════════════════════════════════════════════════════════

class TestCurve:

    @pytest.fixture
    def curve(self) -> Curve:
        return Curve(breakpoints=(0.0, 10.0, 20.0), values=(0.0, 100.0, 50.0))

    def test_interpolates_linearly(self, curve: Curve):
        assert curve(5.0) == pytest.approx(50.0)
        assert curve(15.0) == pytest.approx(75.0)

    def test_exact_at_breakpoints(self, curve: Curve):
        assert curve(10.0) == pytest.approx(100.0)

    def test_extrapolates_linearly(self, curve: Curve):
        # slope of the last segment is −5 per unit
        assert curve(30.0) == pytest.approx(0.0)
        # slope of the first segment is +10 per unit
        assert curve(-1.0) == pytest.approx(-10.0)

    def test_scalar_in_float_out(self, curve: Curve):
        assert isinstance(curve(3.0), float)

    def test_array_in_array_out(self, curve: Curve):
        out = curve(np.array([[0.0, 5.0], [10.0, 20.0]]))
        assert isinstance(out, np.ndarray)
        assert out.shape == (2, 2)
        np.testing.assert_allclose(out, [[0.0, 50.0], [100.0, 50.0]])

    def test_sample(self):
        c = Curve.sample([0.0, 1.0, 2.0], lambda x: x ** 2)
        assert c.values == (0.0, 1.0, 4.0)

    def test_scaled_returns_new_curve(self, curve: Curve):
        s = curve.scaled(value_factor=2.0, breakpoint_factor=0.5)
        assert s.breakpoints == (0.0, 5.0, 10.0)
        assert s.values == (0.0, 200.0, 100.0)
        assert curve.values == (0.0, 100.0, 50.0)

    def test_scaled_rejects_non_positive_axis_factor(self, curve: Curve):
        with pytest.raises(ValueError):
            curve.scaled(breakpoint_factor=0.0)


class TestCurveValidation:

    def test_decreasing_breakpoints_rejected(self):
        with pytest.raises(ValidationError):
            Curve(breakpoints=(1.0, 0.0), values=(0.0, 1.0))

    def test_repeated_breakpoints_rejected(self):
        with pytest.raises(ValidationError):
            Curve(breakpoints=(0.0, 1.0, 1.0), values=(0.0, 1.0, 2.0))

    def test_single_point_rejected(self):
        with pytest.raises(ValidationError):
            Curve(breakpoints=(0.0,), values=(1.0,))

    def test_length_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            Curve(breakpoints=(0.0, 1.0), values=(0.0, 1.0, 2.0))

    def test_nan_value_rejected(self):
        with pytest.raises(ValidationError):
            Curve(breakpoints=(0.0, 1.0), values=(0.0, float("nan")))

    def test_frozen(self):
        c = Curve(breakpoints=(0.0, 1.0), values=(0.0, 1.0))
        with pytest.raises(ValidationError):
            c.values = (1.0, 2.0)


# ═══════════════════════════════════════════════════════════════════════════
# Map2D
# ═══════════════════════════════════════════════════════════════════════════

class TestMap2D:

    @pytest.fixture
    def grid(self) -> Map2D:
        # z = x + 10·y on a 3×2 grid
        return Map2D.sample([0.0, 1.0, 2.0], [0.0, 1.0], lambda x, y: x + 10.0 * y)

    def test_sample_layout(self, grid: Map2D):
        assert grid.values == ((0.0, 10.0), (1.0, 11.0), (2.0, 12.0))

    def test_bilinear_interpolation(self, grid: Map2D):
        assert grid(0.5, 0.5) == pytest.approx(5.5)
        assert grid(1.5, 0.25) == pytest.approx(4.0)

    def test_extrapolation(self, grid: Map2D):
        assert grid(3.0, 2.0) == pytest.approx(23.0)

    def test_broadcasting(self, grid: Map2D):
        out = grid(np.array([0.0, 1.0, 2.0]), 1.0)
        np.testing.assert_allclose(out, [10.0, 11.0, 12.0])

    def test_scalar_in_float_out(self, grid: Map2D):
        assert isinstance(grid(1.0, 1.0), float)

    def test_scaled_torque_axis(self, grid: Map2D):
        s = grid.scaled(value_factor=2.0, y_factor=3.0)
        assert s.y_breakpoints == (0.0, 3.0)
        assert s(1.0, 3.0) == pytest.approx(22.0)
        assert grid.y_breakpoints == (0.0, 1.0)

    def test_shape_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            Map2D(x_breakpoints=(0.0, 1.0), y_breakpoints=(0.0, 1.0), values=((1.0, 2.0),))

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValidationError):
            Map2D(x_breakpoints=(0.0, 1.0), y_breakpoints=(0.0, 1.0), values=((1.0, 2.0), (3.0,)))

    def test_json_round_trip(self, grid: Map2D):
        assert Map2D.model_validate_json(grid.model_dump_json()) == grid


# ═══════════════════════════════════════════════════════════════════════════
# Interpolator reuse
# ═══════════════════════════════════════════════════════════════════════════

class TestInterpolatorCache:

    def test_repeated_lookups_build_once(self):
        _grid_interpolator.cache_clear()
        m = Map2D(x_breakpoints=(0.0, 1.0), y_breakpoints=(0.0, 1.0), values=((0.0, 1.0), (2.0, 3.0)))
        for x in (0.1, 0.4, 0.9):
            m(x, 0.5)
        info = _grid_interpolator.cache_info()
        assert info.misses == 1
        assert info.hits == 2

    def test_equal_tables_share_interpolator(self):
        _grid_interpolator.cache_clear()
        a = Curve(breakpoints=(0.0, 1.0), values=(0.0, 2.0))
        b = Curve(breakpoints=(0.0, 1.0), values=(0.0, 2.0))
        assert a(0.5) == b(0.5) == pytest.approx(1.0)
        assert _grid_interpolator.cache_info().misses == 1

    def test_scaled_copy_not_stale(self):
        c = Curve(breakpoints=(0.0, 1.0), values=(0.0, 2.0))
        assert c(0.5) == pytest.approx(1.0)
        assert c.scaled(value_factor=3.0)(0.5) == pytest.approx(3.0)
