"""Log-spaced observation indices into the dense time grid."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.exceptions import ValidationError

logger = logging.getLogger(__name__)


def observation_indices(grid_length: int, L: int) -> npt.NDArray[np.intp]:
    """Select ``L`` observation points on a dense grid of ``grid_length`` points.

    The first grid point is always observed. The remaining ``L - 1`` points
    use 1-based positions ``floor(exp(s))`` for ``s`` evenly spaced on
    ``[1, log(grid_length)]``, so observations thin out exponentially over
    time. Floor rounding can map neighbouring positions onto the same grid
    point when ``L`` is large relative to the grid; such duplicates are kept
    (the output always has length ``L``) and reported with a warning.

    Args:
        grid_length: Number of dense grid points.
        L: Requested number of observations.

    Returns:
        Non-decreasing 0-based indices, shape (L,).

    Raises:
        ValidationError: If ``L`` or ``grid_length`` is not positive.
    """
    if L < 1:
        raise ValidationError(f"L must be a positive integer, got {L}")
    if grid_length < 1:
        raise ValidationError(f"grid_length must be positive, got {grid_length}")

    spaced = np.exp(np.linspace(1.0, np.log(grid_length), L - 1))
    positions = np.clip(np.floor(spaced).astype(np.intp), 1, grid_length)
    indices = np.concatenate([[0], positions - 1]).astype(np.intp)

    n_unique = count_unique(indices)
    if n_unique < L:
        logger.warning(
            f"Observation indices collide: {L} requested, {n_unique} distinct "
            f"grid points on a grid of {grid_length}"
        )
    return indices


def count_unique(indices: npt.NDArray[Any]) -> int:
    """Number of distinct grid points among ``indices``."""
    return int(np.unique(indices).size)


def sample_trajectory(y: npt.NDArray[Any], indices: npt.NDArray[Any]) -> npt.NDArray[Any]:
    """Rows of a dense trajectory at ``indices``, shape (L, num_species)."""
    return np.asarray(y)[indices, :]


def flatten_blocks(sampled: npt.NDArray[Any]) -> npt.NDArray[Any]:
    """Lay out an (L, d) sample as d contiguous species blocks of length L."""
    return np.asarray(sampled).flatten(order="F")


__all__ = ["observation_indices", "count_unique", "sample_trajectory", "flatten_blocks"]
