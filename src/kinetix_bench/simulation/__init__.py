"""Simulation pipeline: solving, sampling, noise, blow-up checks and masking."""

from __future__ import annotations

from kinetix_bench.simulation.blowup import detect_blowup, has_blown_up
from kinetix_bench.simulation.masking import hidden_columns, mask_hidden, remap_target
from kinetix_bench.simulation.noise import add_noise, noise_scale
from kinetix_bench.simulation.sampling import (
    count_unique,
    flatten_blocks,
    observation_indices,
    sample_trajectory,
)
from kinetix_bench.simulation.solver import Trajectory, dense_time_grid, solve_trajectory

__all__ = [
    "Trajectory",
    "dense_time_grid",
    "solve_trajectory",
    "observation_indices",
    "count_unique",
    "sample_trajectory",
    "flatten_blocks",
    "noise_scale",
    "add_noise",
    "has_blown_up",
    "detect_blowup",
    "hidden_columns",
    "remap_target",
    "mask_hidden",
]
