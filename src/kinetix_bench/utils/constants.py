"""Fixed simulation constants shared across kinetix-bench."""

from __future__ import annotations

# Dense integration grid: 0, 0.005, ..., 100
TIME_HORIZON: float = 100.0
TIME_STEP: float = 0.005

# Terminal-state magnitude above which a trajectory counts as diverged
BLOWUP_THRESHOLD: float = 1e8

# Added to range-relative noise scales so a flat trajectory still gets noise
RELATIVE_NOISE_EPS: float = 1e-7

__all__ = ["TIME_HORIZON", "TIME_STEP", "BLOWUP_THRESHOLD", "RELATIVE_NOISE_EPS"]
