"""Removal of hidden-species blocks from the observation matrix."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.exceptions import ValidationError


def hidden_columns(hidden_species: Sequence[int], L: int) -> npt.NDArray[np.intp]:
    """0-based column indices of the blocks of ``hidden_species`` (1-based)."""
    cols = [np.arange((s - 1) * L, s * L) for s in sorted(hidden_species)]
    if not cols:
        return np.empty(0, dtype=np.intp)
    return np.concatenate(cols).astype(np.intp)


def remap_target(target: int, hidden_species: Sequence[int]) -> int:
    """Position of ``target`` once the hidden species blocks are removed."""
    if target in hidden_species:
        raise ValidationError(f"Target species {target} cannot be hidden")
    return target - sum(1 for s in hidden_species if s < target)


def mask_hidden(
    data: npt.NDArray[Any],
    L: int,
    hidden_species: Sequence[int],
    target: int,
) -> tuple[npt.NDArray[Any], int]:
    """Drop hidden-species blocks from ``data`` and remap the target.

    Args:
        data: Observation matrix, shape (n, L * d).
        L: Observations per species.
        hidden_species: 1-based hidden species.
        target: 1-based target species in the unmasked layout.

    Returns:
        Tuple (masked data of shape (n, L * (d - len(hidden))), remapped target).
    """
    data = np.asarray(data)
    if data.ndim != 2 or data.shape[1] % L:
        raise ValidationError(f"Data of shape {data.shape} is not made of blocks of {L} columns")
    d = data.shape[1] // L
    if any(not 1 <= s <= d for s in hidden_species):
        raise ValidationError(f"Hidden species {list(hidden_species)} outside 1..{d}")

    masked = np.delete(data, hidden_columns(hidden_species, L), axis=1)
    return masked, remap_target(target, hidden_species)


__all__ = ["hidden_columns", "remap_target", "mask_hidden"]
