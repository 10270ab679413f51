"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")  # non-interactive backend for testing

from kinetix_bench.generator import generate_data_hidden
from kinetix_bench.models.hidden import HiddenVariableModel
from kinetix_bench.simulation.solver import Trajectory, dense_time_grid


@pytest.fixture
def model() -> HiddenVariableModel:
    return HiddenVariableModel()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture(scope="session")
def time_grid() -> np.ndarray:
    return dense_time_grid()


@pytest.fixture(scope="session")
def small_result():
    """Two environments, two repetitions each, hidden species masked."""
    return generate_data_hidden(
        env=[1, 1, 2, 2],
        L=5,
        noise={"sd": 0.01, "only_target": False, "relative": True},
        intervention="initial",
        hidden=True,
        seed=0,
        silent=True,
    )


@pytest.fixture
def fake_solve():
    """Cheap stand-in for solve_trajectory: holds the initial state constant.

    ``fake_solve.blowups`` is a list of booleans consumed one per call; a True
    entry makes that call's terminal state infinite.
    """

    def _solve(initial, time_grid, rhs, theta, **kwargs):
        y = np.tile(np.asarray(initial, dtype=float), (time_grid.size, 1))
        if _solve.blowups and _solve.blowups.pop(0):
            y[-1, 0] = np.inf
        _solve.calls += 1
        return Trajectory(t=time_grid, y=y, initial=np.asarray(initial), theta=np.asarray(theta))

    _solve.blowups = []
    _solve.calls = 0
    return _solve
