"""Plots of dense trajectories and the noisy observations sampled from them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import matplotlib.pyplot as plt
import numpy as np
import numpy.typing as npt
import plotly.graph_objects as go

if TYPE_CHECKING:
    from kinetix_bench.generator import SimulationResult

logger = logging.getLogger(__name__)


def plot_trajectory(
    t: npt.NDArray[Any],
    y: npt.NDArray[Any],
    labels: list[str] | None = None,
    title: str = "Species Trajectories",
    backend: str = "matplotlib",
) -> Any:
    """Plot species concentrations over time.

    Args:
        t: Time points, shape (n_steps,)
        y: Concentrations, shape (n_steps, n_species)
        labels: Species labels
        title: Plot title
        backend: "matplotlib" or "plotly"

    Returns:
        Figure object (matplotlib.Figure or plotly.graph_objects.Figure)
    """
    t_np = np.asarray(t)
    y_np = np.asarray(y)

    if y_np.ndim == 1:
        y_np = y_np.reshape(-1, 1)

    n_species = y_np.shape[1]
    if labels is None:
        labels = [f"X{i + 1}" for i in range(n_species)]

    if backend == "plotly":
        fig = go.Figure()
        for i in range(n_species):
            fig.add_trace(go.Scatter(x=t_np, y=y_np[:, i], mode="lines", name=labels[i]))
        fig.update_layout(title=title, xaxis_title="time", yaxis_title="concentration")
        return fig

    fig, ax = plt.subplots(figsize=(10, 6))
    for i in range(n_species):
        ax.plot(t_np, y_np[:, i], label=labels[i])
    ax.set_xlabel("time")
    ax.set_ylabel("concentration")
    ax.set_title(title)
    ax.legend()
    plt.tight_layout()
    return fig


def plot_observations(
    result: SimulationResult,
    environment: int = 1,
    species: int = 1,
    row: int | None = None,
    backend: str = "matplotlib",
) -> Any:
    """Overlay one repetition's noisy observations on the true trajectory.

    Args:
        result: Generator output.
        environment: Environment whose trajectory is drawn.
        species: 1-based species in the full (unmasked) state.
        row: Data row to draw; defaults to the first row of ``environment``.
        backend: "matplotlib" or "plotly"

    Returns:
        Figure object.
    """
    traj = result.trajectory(environment)
    L = result.time.size

    if row is None:
        rows = np.flatnonzero(result.env == environment)
        row = int(rows[0])

    # masked output has no blocks for removed species
    if species in result.removed_species:
        raise ValueError(f"Species {species} is hidden and was not observed")
    block = species - sum(1 for s in result.removed_species if s < species)
    obs = result.simulated_data[row, (block - 1) * L : block * L]

    title = f"Species {species}, environment {environment}"
    if backend == "plotly":
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=traj.t, y=traj.y[:, species - 1], mode="lines",
            line={"dash": "dash", "color": "black"}, name="true trajectory",
        ))
        fig.add_trace(go.Scatter(
            x=result.time, y=obs, mode="markers",
            marker={"color": "red", "size": 8}, name="observations",
        ))
        fig.update_layout(title=title, xaxis_title="time", yaxis_title="concentration")
        return fig

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(traj.t, traj.y[:, species - 1], "k--", label="true trajectory")
    ax.plot(result.time, obs, "o", color="red", label="observations")
    ax.set_xlabel("time")
    ax.set_ylabel("concentration")
    ax.set_title(title)
    ax.legend(loc="upper right")
    plt.tight_layout()
    return fig


__all__ = ["plot_trajectory", "plot_observations"]
