"""Configuration management for kinetix-bench."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, cast

import pydantic
import yaml
from pydantic import BaseModel, Field, field_validator

from kinetix_bench.exceptions import ConfigurationError
from kinetix_bench.interventions import InterventionType

logger = logging.getLogger(__name__)


class NoiseConfig(BaseModel):
    """Observation noise settings."""

    sd: float = Field(default=0.01, ge=0.0, description="Noise standard deviation (or relative level)")
    only_target: bool = Field(default=True, description="Add noise to the target species only")
    relative: bool = Field(
        default=False,
        description="Scale sd by each species' range over the observation grid",
    )


class GeneratorConfig(BaseModel):
    """Options for one call of the hidden-variable data generator."""

    env: list[int] = Field(
        default_factory=lambda: [1] * 10,
        description="Environment label of each repetition (1 = baseline)",
    )
    L: int = Field(default=15, ge=1, description="Observations per species")
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    intervention: InterventionType = Field(
        default=InterventionType.INITIAL_BLOCKREACTIONS,
        description="Intervention policy for non-baseline environments",
    )
    intervention_par: float = Field(
        default=0.1, ge=0.0, description="Half-width of the perturbation of k7"
    )
    hidden: bool = Field(default=True, description="Remove hidden species from output")
    solver_method: str = Field(default="LSODA", description="solve_ivp method name")
    rtol: float = Field(default=1e-6, gt=0.0, description="Solver relative tolerance")
    atol: float = Field(default=1e-6, gt=0.0, description="Solver absolute tolerance")
    timeout: float | None = Field(
        default=None, gt=0.0, description="Wall-clock budget per ODE solve (s)"
    )
    max_retries: int = Field(default=50, ge=0, description="Blow-up retries before giving up")
    seed: int | None = Field(default=None, description="Seed for the first attempt only")
    silent: bool = Field(default=False, description="Suppress progress reporting")
    reaction_model: str = Field(default="hidden", description="Registered reaction model")

    @field_validator("env")
    @classmethod
    def _check_env(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("env must contain at least one repetition")
        if any(label < 1 for label in value):
            raise ValueError("environment labels must be positive integers")
        return value


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format ('text' or 'json')")
    log_file: str | None = Field(None, description="Log file path")
    module_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module log levels",
    )


class RunConfig(BaseModel):
    """Top-level configuration file layout."""

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: str | None = Field(None, description="Where the CLI writes generated data")


def make_generator_config(**options: Any) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig`, reporting bad options as ConfigurationError.

    Args:
        **options: Field values; ``noise`` may be a dict or a NoiseConfig.

    Raises:
        ConfigurationError: If any option is invalid (e.g. unknown intervention).
    """
    try:
        return GeneratorConfig(**options)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid generator configuration: {exc}") from exc


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR:default} patterns with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(3)
        value = os.environ.get(var_name)
        if value is not None:
            return value
        if default is not None:
            return cast(str, default)
        return match.group(0)

    return re.sub(r"\$\{(\w+)(:([^}]*))?\}", _replace, text)


def load_config(path: str | Path) -> RunConfig:
    """Load a run configuration from YAML with env var interpolation.

    Supports ``${VAR}`` and ``${VAR:default}`` syntax for environment
    variable substitution in string values.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw_text = path.read_text()
        interpolated = _interpolate_env_vars(raw_text)
        data = yaml.safe_load(interpolated) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping")

    try:
        config = RunConfig(**data)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid config structure: {exc}") from exc

    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: RunConfig, path: str | Path) -> None:
    """Save a run configuration to YAML.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        data = config.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    except OSError as exc:
        raise ConfigurationError(f"Failed to save config to {path}: {exc}") from exc

    logger.info(f"Saved config to {path}")


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    For nested dicts, recursively merges rather than replacing.
    For all other types, the override value wins.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "NoiseConfig",
    "GeneratorConfig",
    "LoggingConfig",
    "RunConfig",
    "make_generator_config",
    "load_config",
    "save_config",
    "merge_configs",
]
