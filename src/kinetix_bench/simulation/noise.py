"""Observation noise for sampled trajectories."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.exceptions import ValidationError
from kinetix_bench.simulation.sampling import flatten_blocks
from kinetix_bench.utils.config import NoiseConfig
from kinetix_bench.utils.constants import RELATIVE_NOISE_EPS

logger = logging.getLogger(__name__)


def noise_scale(values: npt.NDArray[Any], sd: float, relative: bool) -> npt.NDArray[Any]:
    """Noise standard deviation per column of ``values``.

    Args:
        values: Sampled values, shape (L, k).
        sd: Configured noise level.
        relative: If True, scale ``sd`` by each column's range over the
            observation grid (plus a small epsilon).

    Returns:
        Standard deviations, shape (k,).
    """
    values = np.asarray(values, dtype=float)
    if not relative:
        return np.full(values.shape[1], float(sd))
    spread = np.ptp(values, axis=0)
    return sd * spread + RELATIVE_NOISE_EPS


def add_noise(
    sampled: npt.NDArray[Any],
    env_size: int,
    noise: NoiseConfig,
    target: int,
    rng: np.random.Generator,
) -> npt.NDArray[Any]:
    """Broadcast one environment's noiseless samples to its rows and add noise.

    Every repetition starts from the same noiseless row; the noise draws are
    independent per repetition and per observation.

    Args:
        sampled: Noiseless samples, shape (L, d).
        env_size: Number of repetitions in the environment.
        noise: Noise configuration.
        target: 1-based target species (used when ``noise.only_target``).
        rng: Generator for the Gaussian draws.

    Returns:
        Noisy rows, shape (env_size, L * d), species-block layout.
    """
    sampled = np.asarray(sampled, dtype=float)
    if sampled.ndim != 2:
        raise ValidationError(f"Expected sampled values of shape (L, d), got {sampled.shape}")
    L, d = sampled.shape
    if not 1 <= target <= d:
        raise ValidationError(f"Target species {target} outside 1..{d}")

    rows = np.tile(flatten_blocks(sampled), (env_size, 1))

    if noise.only_target:
        sigma = noise_scale(sampled[:, [target - 1]], noise.sd, noise.relative)[0]
        block = slice((target - 1) * L, target * L)
        rows[:, block] += rng.normal(0.0, sigma, size=(env_size, L))
    else:
        sigma = np.repeat(noise_scale(sampled, noise.sd, noise.relative), L)
        rows += rng.normal(0.0, sigma, size=(env_size, L * d))

    return rows


__all__ = ["noise_scale", "add_noise"]
