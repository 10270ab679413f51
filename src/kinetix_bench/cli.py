"""Command-line interface for kinetix-bench.

Provides commands for generating benchmark data and plotting it.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from kinetix_bench import __version__
from kinetix_bench.exceptions import ConfigurationError, DivergenceError

logger = logging.getLogger(__name__)


def _save_result(result, path: Path) -> None:
    """Write a SimulationResult to a compressed ``.npz`` archive."""
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        path,
        simulated_data=result.simulated_data,
        time=result.time,
        env=result.env,
        target=np.array(result.target),
        true_model=np.array(result.true_model),
        environments=np.array(result.environments),
        removed_species=np.array(result.removed_species, dtype=int),
        model_time=result.simulated_model[0].t,
        model_states=np.stack([traj.y for traj in result.simulated_model]),
    )


def _load_result(path: Path):
    """Rebuild a SimulationResult from an archive written by ``generate``."""
    from kinetix_bench.generator import SimulationResult
    from kinetix_bench.simulation.solver import Trajectory

    with np.load(path) as archive:
        environments = archive["environments"].tolist()
        model_time = archive["model_time"]
        trajectories = [
            Trajectory(t=model_time, y=states, initial=states[0], theta=np.array([]), environment=label)
            for label, states in zip(environments, archive["model_states"])
        ]
        return SimulationResult(
            simulated_data=archive["simulated_data"],
            time=archive["time"],
            env=archive["env"],
            simulated_model=trajectories,
            true_model=tuple(archive["true_model"].tolist()),
            target=int(archive["target"]),
            environments=environments,
            removed_species=tuple(archive["removed_species"].tolist()),
        )


def _apply_logging(settings, args: argparse.Namespace) -> None:
    """Reconfigure logging from a run file; command-line flags take precedence."""
    from kinetix_bench.utils.logging import setup_logging

    setup_logging(
        level=args.log_level or settings.level,
        log_format=args.log_format or settings.format,
        log_file=settings.log_file,
        module_levels=settings.module_levels,
    )


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate data from a YAML config and save it."""
    from kinetix_bench.generator import HiddenDataGenerator
    from kinetix_bench.utils.config import RunConfig, load_config

    run = load_config(args.config) if args.config else RunConfig()
    gen_config = run.generator
    if args.config:
        _apply_logging(run.logging, args)
    if args.seed is not None:
        gen_config = gen_config.model_copy(update={"seed": args.seed})

    output = args.output or run.output
    if output is None:
        print("No output path given (use --output or set 'output' in the config)")
        sys.exit(1)

    try:
        result = HiddenDataGenerator(gen_config).generate()
    except DivergenceError as exc:
        print(f"Generation diverged: {exc}")
        sys.exit(1)

    if result is None:
        print("ODE solver failed; no data written")
        sys.exit(1)

    _save_result(result, Path(output))
    print(
        f"Saved data of shape {result.simulated_data.shape} to {output} "
        f"(target={result.target}, attempts={result.attempts})"
    )

    if args.plot:
        _plot_to_file(result, Path(args.plot), environment=result.environments[0], species=1)


def cmd_plot(args: argparse.Namespace) -> None:
    """Plot observations of one species against its true trajectory."""
    path = Path(args.input)
    if not path.exists():
        print(f"Data file not found: {path}")
        sys.exit(1)

    result = _load_result(path)
    _plot_to_file(result, Path(args.output), environment=args.environment, species=args.species)


def _plot_to_file(result, path: Path, environment: int, species: int) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from kinetix_bench.utils.visualization import plot_observations

    fig = plot_observations(result, environment=environment, species=species)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    print(f"Plot saved to {path}")


def cmd_show_config(args: argparse.Namespace) -> None:
    """Print the effective configuration as JSON."""
    from kinetix_bench.utils.config import RunConfig, load_config

    run = load_config(args.config) if args.config else RunConfig()
    print(json.dumps(run.model_dump(mode="json"), indent=2))


def cmd_list(args: argparse.Namespace) -> None:
    """List registered reaction models and intervention policies."""
    from kinetix_bench.utils.registry import INTERVENTION_REGISTRY, MODEL_REGISTRY

    for registry in (MODEL_REGISTRY, INTERVENTION_REGISTRY):
        print(f"{registry.name}:")
        for key, summary in registry.describe().items():
            print(f"  {key:<24} {summary}")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the kinetix-bench CLI."""
    parser = argparse.ArgumentParser(
        prog="kinetix-bench",
        description="kinetix-bench: multi-environment kinetic data for causal structure learning",
    )
    parser.add_argument("--version", action="version", version=f"kinetix-bench {__version__}")
    parser.add_argument("--log-level", default=None, help="Log level (default INFO)")
    parser.add_argument("--log-format", default=None, choices=["text", "json"], help="Log format")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Simulate benchmark data")
    gen_parser.add_argument("--config", default=None, help="Path to YAML config file")
    gen_parser.add_argument("--output", default=None, help="Output .npz path")
    gen_parser.add_argument("--seed", type=int, default=None, help="Override the config seed")
    gen_parser.add_argument("--plot", default=None, help="Also save a plot of species 1")
    gen_parser.set_defaults(func=cmd_generate)

    # plot
    plot_parser = subparsers.add_parser("plot", help="Plot generated observations")
    plot_parser.add_argument("--input", required=True, help="Path to .npz written by generate")
    plot_parser.add_argument("--output", default="observations.png", help="Image path")
    plot_parser.add_argument("--environment", type=int, default=1, help="Environment label")
    plot_parser.add_argument("--species", type=int, default=1, help="1-based species index")
    plot_parser.set_defaults(func=cmd_plot)

    # config
    config_parser = subparsers.add_parser("config", help="Show effective configuration")
    config_parser.add_argument("--config", default=None, help="Path to YAML config file")
    config_parser.set_defaults(func=cmd_show_config)

    # list
    list_parser = subparsers.add_parser("list", help="List registered models and interventions")
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from kinetix_bench.utils.logging import setup_logging

    setup_logging(level=args.log_level or "INFO", log_format=args.log_format or "text")
    try:
        args.func(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}")
        sys.exit(2)


__all__ = ["main"]
