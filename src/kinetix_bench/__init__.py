"""kinetix-bench: multi-environment kinetic data for causal structure learning."""

from __future__ import annotations

# Version info
__version__ = "0.3.0"

from kinetix_bench.exceptions import (
    ConfigurationError,
    DivergenceError,
    KinetixBenchError,
    RegistryError,
    SolverError,
    SolverTimeoutError,
    ValidationError,
)
from kinetix_bench.generator import HiddenDataGenerator, SimulationResult, generate_data_hidden
from kinetix_bench.interventions import (
    AbstractIntervention,
    BlockReactions,
    InitialBlockReactions,
    InitialIntervention,
    InterventionType,
    make_intervention,
)
from kinetix_bench.models import AbstractReactionModel, HiddenVariableModel
from kinetix_bench.simulation import Trajectory, observation_indices, solve_trajectory
from kinetix_bench.utils.config import (
    GeneratorConfig,
    LoggingConfig,
    NoiseConfig,
    RunConfig,
    load_config,
)
from kinetix_bench.utils.logging import JSONFormatter, RunTracer, setup_logging

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "KinetixBenchError",
    "ConfigurationError",
    "SolverError",
    "SolverTimeoutError",
    "DivergenceError",
    "ValidationError",
    "RegistryError",
    # Models
    "AbstractReactionModel",
    "HiddenVariableModel",
    # Interventions
    "InterventionType",
    "AbstractIntervention",
    "InitialIntervention",
    "BlockReactions",
    "InitialBlockReactions",
    "make_intervention",
    # Simulation
    "Trajectory",
    "solve_trajectory",
    "observation_indices",
    # Generator
    "HiddenDataGenerator",
    "SimulationResult",
    "generate_data_hidden",
    # Configuration
    "GeneratorConfig",
    "NoiseConfig",
    "LoggingConfig",
    "RunConfig",
    "load_config",
    # Logging
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
