"""Tests for engine/generator.py — coupling, efficiency, limits."""

from __future__ import annotations

import pytest

from shev_simulator.config import GeneratorSpec
from shev_simulator.engine.generator import evaluate_generator


def test_rigid_coupling(simple_generator: GeneratorSpec):
    r = evaluate_generator(simple_generator, 300.0, 100.0)
    # r = 2 → ω × 2, −T / 2
    assert r.speed == pytest.approx(600.0)
    assert r.torque == pytest.approx(-50.0)


def test_electrical_power_delivered(simple_generator: GeneratorSpec):
    r = evaluate_generator(simple_generator, 300.0, 100.0)
    assert r.efficiency == pytest.approx(0.9)
    assert r.electrical_power == pytest.approx(600.0 * -50.0 * 0.9)
    assert r.electrical_power < 0


def test_standstill(simple_generator: GeneratorSpec):
    r = evaluate_generator(simple_generator, 0.0, 0.0)
    assert r.efficiency == 1.0
    assert r.electrical_power == 0.0
    assert not r.infeasible


def test_overspeed(simple_generator: GeneratorSpec):
    # 700 × 2 = 1400 > 1200
    assert evaluate_generator(simple_generator, 700.0, 50.0).speed_infeasible


def test_torque_beyond_absorption_limit(simple_generator: GeneratorSpec):
    # −400 / 2 = −200 < −150
    r = evaluate_generator(simple_generator, 300.0, 400.0)
    assert r.torque_infeasible
    assert r.infeasible


def test_feasible_operating_point(simple_generator: GeneratorSpec):
    assert not evaluate_generator(simple_generator, 300.0, 100.0).infeasible
