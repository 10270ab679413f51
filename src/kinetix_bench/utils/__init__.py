"""Utility modules: constants, logging and the registry system."""

from __future__ import annotations

from kinetix_bench.utils.constants import (
    BLOWUP_THRESHOLD,
    RELATIVE_NOISE_EPS,
    TIME_HORIZON,
    TIME_STEP,
)
from kinetix_bench.utils.logging import JSONFormatter, RunTracer, setup_logging
from kinetix_bench.utils.registry import INTERVENTION_REGISTRY, MODEL_REGISTRY, Registry

__all__ = [
    "Registry",
    "MODEL_REGISTRY",
    "INTERVENTION_REGISTRY",
    "TIME_HORIZON",
    "TIME_STEP",
    "BLOWUP_THRESHOLD",
    "RELATIVE_NOISE_EPS",
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
