"""Post-hoc divergence check on terminal trajectory states."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from kinetix_bench.simulation.solver import Trajectory
from kinetix_bench.utils.constants import BLOWUP_THRESHOLD

logger = logging.getLogger(__name__)


def has_blown_up(trajectory: Trajectory, threshold: float = BLOWUP_THRESHOLD) -> bool:
    """True if any terminal coordinate is non-finite or exceeds ``threshold`` in magnitude."""
    terminal = np.abs(trajectory.terminal_state)
    return bool(np.any(~np.isfinite(terminal)) or np.any(terminal > threshold))


def detect_blowup(
    trajectories: Sequence[Trajectory],
    threshold: float = BLOWUP_THRESHOLD,
) -> list[int]:
    """Positions of trajectories whose terminal state diverged.

    Args:
        trajectories: One dense trajectory per environment.
        threshold: Magnitude above which a coordinate counts as diverged.

    Returns:
        Indices into ``trajectories`` that blew up (empty if none).
    """
    flagged = [i for i, traj in enumerate(trajectories) if has_blown_up(traj, threshold)]
    for i in flagged:
        logger.debug(f"Blow-up in environment {trajectories[i].environment}")
    return flagged


__all__ = ["has_blown_up", "detect_blowup"]
