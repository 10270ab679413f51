"""kinetix-bench exception hierarchy.

All library-specific exceptions inherit from :class:`KinetixBenchError`,
enabling callers to catch the broad base class or narrow subtypes.
"""

from __future__ import annotations


class KinetixBenchError(Exception):
    """Base exception for all kinetix-bench errors."""


class ConfigurationError(KinetixBenchError):
    """Invalid generator configuration (unknown intervention, bad options)."""


class SolverError(KinetixBenchError):
    """ODE solver could not produce a complete trajectory."""


class SolverTimeoutError(SolverError):
    """ODE integration exceeded its wall-clock budget."""


class DivergenceError(KinetixBenchError):
    """Every generation attempt blew up before the retry budget ran out."""


class ValidationError(KinetixBenchError):
    """Invalid inputs, shapes, types, or parameter values."""


class RegistryError(KinetixBenchError):
    """Registry lookup or registration failures."""


__all__ = [
    "KinetixBenchError",
    "ConfigurationError",
    "SolverError",
    "SolverTimeoutError",
    "DivergenceError",
    "ValidationError",
    "RegistryError",
]
