"""Trajectory solver adapter around scipy.integrate.solve_ivp."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt
from scipy.integrate import solve_ivp

from kinetix_bench.exceptions import ConfigurationError, SolverError, SolverTimeoutError
from kinetix_bench.utils.constants import TIME_HORIZON, TIME_STEP

logger = logging.getLogger(__name__)

RHS = Callable[[float, npt.NDArray[Any], npt.NDArray[Any]], npt.NDArray[Any]]


@dataclass(frozen=True)
class Trajectory:
    """Dense solution of one environment's ODE system.

    Attributes:
        t: Dense time grid, shape (num_times,).
        y: States on the grid, shape (num_times, num_species).
        initial: Initial state the solve started from.
        theta: Rate constants used for the solve.
        environment: Environment label, if known.
    """

    t: npt.NDArray[Any]
    y: npt.NDArray[Any]
    initial: npt.NDArray[Any]
    theta: npt.NDArray[Any]
    environment: int | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def terminal_state(self) -> npt.NDArray[Any]:
        return self.y[-1]

    def as_matrix(self) -> npt.NDArray[Any]:
        """Time column followed by state columns, shape (num_times, 1 + num_species)."""
        return np.column_stack([self.t, self.y])


def dense_time_grid(horizon: float = TIME_HORIZON, step: float = TIME_STEP) -> npt.NDArray[Any]:
    """Uniform grid 0, step, ..., horizon (both ends included)."""
    num = int(round(horizon / step)) + 1
    return np.linspace(0.0, horizon, num)


class _Deadline:
    """Wraps a right-hand side so integration aborts after ``timeout`` seconds."""

    def __init__(self, func: RHS, timeout: float):
        self.func = func
        self.timeout = timeout
        self.expires = time.monotonic() + timeout

    def __call__(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        if time.monotonic() > self.expires:
            raise SolverTimeoutError(f"Integration exceeded {self.timeout:.1f}s (reached t={t:.4g})")
        return self.func(t, x, theta)


def solve_trajectory(
    initial: npt.NDArray[Any],
    time_grid: npt.NDArray[Any],
    rhs: RHS,
    theta: npt.NDArray[Any],
    method: str = "LSODA",
    rtol: float = 1e-6,
    atol: float = 1e-6,
    timeout: float | None = None,
) -> Trajectory:
    """Integrate ``rhs`` from ``initial`` and report the solution on ``time_grid``.

    The integrator is treated as a black box: whatever it returns is checked
    for being numeric and covering every grid point. Non-finite values in a
    complete solution are returned as-is; divergence is judged separately by
    the blow-up detector.

    Args:
        initial: Initial state, shape (num_species,).
        time_grid: Increasing output times, shape (num_times,).
        rhs: Right-hand side ``rhs(t, x, theta)``.
        theta: Rate constants passed through to ``rhs``.
        method: solve_ivp method name ('LSODA', 'Radau', 'BDF', 'RK45', ...).
        rtol: Relative tolerance.
        atol: Absolute tolerance.
        timeout: Optional wall-clock budget in seconds.

    Returns:
        Dense trajectory on ``time_grid``.

    Raises:
        SolverError: If the integrator stops early or returns non-numeric output.
        SolverTimeoutError: If ``timeout`` elapses during integration.
        ConfigurationError: If ``method`` is not a solve_ivp method.
    """
    time_grid = np.asarray(time_grid, dtype=float)
    y0 = np.array(initial, dtype=float)
    theta = np.array(theta, dtype=float)

    fun: RHS = _Deadline(rhs, timeout) if timeout is not None else rhs

    try:
        sol = solve_ivp(
            fun,
            (float(time_grid[0]), float(time_grid[-1])),
            y0,
            method=method,
            t_eval=time_grid,
            args=(theta,),
            rtol=rtol,
            atol=atol,
        )
    except SolverTimeoutError:
        raise
    except ValueError as exc:
        if "method" in str(exc).lower():
            raise ConfigurationError(f"Unknown solver method '{method}': {exc}") from exc
        raise SolverError(f"Integrator rejected the problem: {exc}") from exc
    except (ArithmeticError, np.linalg.LinAlgError) as exc:
        raise SolverError(f"Integrator failed: {exc}") from exc

    y = np.asarray(sol.y)
    if not np.issubdtype(y.dtype, np.number):
        raise SolverError(f"Integrator returned non-numeric output (dtype={y.dtype})")

    if y.ndim != 2 or y.shape[1] < time_grid.size:
        steps = y.shape[1] if y.ndim == 2 else 0
        raise SolverError(
            f"Integrator stopped after {steps}/{time_grid.size} grid points: {sol.message}"
        )

    if not sol.success:
        logger.warning(f"Integration reported failure despite full output: {sol.message}")

    return Trajectory(
        t=np.asarray(sol.t),
        y=y.T,  # (num_times, num_species)
        initial=y0,
        theta=theta,
        meta={"method": method, "nfev": int(sol.nfev)},
    )


__all__ = ["Trajectory", "dense_time_grid", "solve_trajectory"]
