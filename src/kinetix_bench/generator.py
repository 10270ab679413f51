"""Generate multi-environment benchmark data from the hidden-variable model."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.exceptions import DivergenceError, SolverError
from kinetix_bench.interventions import make_intervention
from kinetix_bench.models.base import AbstractReactionModel
from kinetix_bench.simulation.blowup import detect_blowup
from kinetix_bench.simulation.masking import mask_hidden
from kinetix_bench.simulation.noise import add_noise
from kinetix_bench.simulation.sampling import observation_indices, sample_trajectory
from kinetix_bench.simulation.solver import Trajectory, dense_time_grid, solve_trajectory
from kinetix_bench.utils.config import GeneratorConfig, NoiseConfig, make_generator_config
from kinetix_bench.utils.logging import RunTracer
from kinetix_bench.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)

BASELINE_ENVIRONMENT = 1


@dataclass
class SimulationResult:
    """Output of one successful generation.

    Attributes:
        simulated_data: Noisy observations, shape (n, L * d) or
            (n, L * (d - num_hidden)) when hidden species are masked. Columns
            form contiguous blocks of L observations per species.
        time: Observation times, shape (L,).
        env: Environment label of each row, shape (n,).
        simulated_model: Dense trajectory of each environment, in the
            order given by ``environments``.
        true_model: 1-based species that causally drive the target.
        target: 1-based target species in the reported column layout.
        environments: Environment labels in processing order.
        attempts: Number of generation attempts (1 + blow-up retries).
        removed_species: 1-based species whose blocks were masked out.
    """

    simulated_data: npt.NDArray[Any]
    time: npt.NDArray[Any]
    env: npt.NDArray[Any]
    simulated_model: list[Trajectory]
    true_model: tuple[int, ...]
    target: int
    environments: list[int] = field(default_factory=list)
    attempts: int = 1
    removed_species: tuple[int, ...] = ()

    def trajectory(self, environment: int) -> Trajectory:
        """Dense trajectory of ``environment``."""
        try:
            return self.simulated_model[self.environments.index(environment)]
        except ValueError as exc:
            raise KeyError(f"No environment {environment} in result") from exc

    @property
    def num_species(self) -> int:
        return self.simulated_data.shape[1] // self.time.size


class HiddenDataGenerator:
    """Simulate noisy, partially observed data across intervention environments.

    For every environment the generator draws an intervention (the baseline
    environment 1 uses the model's unperturbed state and rates), integrates
    the reaction network on a dense grid, samples it on a log-spaced
    observation grid and adds noise independently for each repetition. If
    any environment ends in a blown-up state the whole batch is discarded
    and regenerated with an unseeded generator, up to ``max_retries`` times.

    Attributes:
        config: Validated generator configuration.
        model: Reaction model being simulated.
        time_grid: Dense integration grid, shared by all environments.
        time_index: Observation indices into ``time_grid``.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        model: AbstractReactionModel | None = None,
    ):
        """Initialize data generator.

        Args:
            config: Generator options. Defaults to ``GeneratorConfig()``.
            model: Reaction model. Defaults to the registered
                ``config.reaction_model``.
        """
        self.config = config if config is not None else GeneratorConfig()
        self.model = model if model is not None else MODEL_REGISTRY.create(self.config.reaction_model)
        self.time_grid = dense_time_grid()
        self.time_index = observation_indices(self.time_grid.size, self.config.L)

        logger.info(
            f"Initialized HiddenDataGenerator: model={self.model.name}, "
            f"intervention={self.config.intervention.value}, "
            f"n={len(self.config.env)}, L={self.config.L}"
        )

    def generate(self) -> SimulationResult | None:
        """Run the generation, retrying on blow-up.

        Returns:
            The simulated data, or None if the ODE solver failed for any
            environment.

        Raises:
            DivergenceError: If every allowed attempt blew up.
        """
        seed = self.config.seed
        max_attempts = self.config.max_retries + 1

        for attempt in range(1, max_attempts + 1):
            # the seed only applies to the first attempt
            rng = np.random.default_rng(seed if attempt == 1 else None)
            with RunTracer(attempt=attempt):
                try:
                    batch = self._simulate_batch(rng)
                except SolverError as exc:
                    if not self.config.silent:
                        logger.warning(f"Problem in ODE solver: {exc}")
                    return None

                data, trajectories, labels = batch
                blown_up = detect_blowup(trajectories)
                if not blown_up:
                    return self._finalize(data, trajectories, labels, attempt)

                if not self.config.silent:
                    bad = [labels[i] for i in blown_up]
                    logger.warning(f"Detected blow-up in environments {bad}; regenerating")

        raise DivergenceError(
            f"All {max_attempts} generation attempts blew up "
            f"(intervention={self.config.intervention.value})"
        )

    def _simulate_batch(
        self, rng: np.random.Generator
    ) -> tuple[npt.NDArray[Any], list[Trajectory], list[int]]:
        """Simulate every environment once with ``rng``.

        Returns:
            Tuple (unmasked data matrix, trajectories, environment labels).

        Raises:
            SolverError: If any environment fails to integrate.
        """
        cfg = self.config
        env = np.asarray(cfg.env)
        L = cfg.L
        d = self.model.num_species

        intervention = make_intervention(cfg.intervention, self.model, cfg.intervention_par, rng)

        data = np.full((env.size, L * d), np.nan)
        labels = sorted(set(env.tolist()))
        trajectories: list[Trajectory] = []

        for label in labels:
            rows = env == label
            if label == BASELINE_ENVIRONMENT:
                initial = self.model.get_initial_state()
                theta = self.model.get_parameters()
            else:
                initial, theta = intervention()

            if not cfg.silent:
                logger.info(f"Solving ODE system on environment {label}")

            traj = solve_trajectory(
                initial,
                self.time_grid,
                self.model.rhs,
                theta,
                method=cfg.solver_method,
                rtol=cfg.rtol,
                atol=cfg.atol,
                timeout=cfg.timeout,
            )
            traj = dataclasses.replace(traj, environment=label)
            trajectories.append(traj)

            sampled = sample_trajectory(traj.y, self.time_index)
            data[rows, :] = add_noise(sampled, int(rows.sum()), cfg.noise, self.model.target, rng)

        return data, trajectories, labels

    def _finalize(
        self,
        data: npt.NDArray[Any],
        trajectories: list[Trajectory],
        labels: list[int],
        attempt: int,
    ) -> SimulationResult:
        target = self.model.target
        if self.config.hidden:
            data, target = mask_hidden(data, self.config.L, self.model.hidden_species, target)

        logger.debug(f"Generated data of shape {data.shape} after {attempt} attempt(s)")
        return SimulationResult(
            simulated_data=data,
            time=self.time_grid[self.time_index],
            env=np.asarray(self.config.env),
            simulated_model=trajectories,
            true_model=self.model.true_model,
            target=target,
            environments=labels,
            attempts=attempt,
            removed_species=tuple(self.model.hidden_species) if self.config.hidden else (),
        )


def generate_data_hidden(
    env: list[int] | npt.NDArray[Any] | None = None,
    L: int = 15,
    noise: NoiseConfig | dict[str, Any] | None = None,
    intervention: str = "initial_blockreactions",
    intervention_par: float = 0.1,
    hidden: bool = True,
    solver_method: str = "LSODA",
    seed: int | None = None,
    silent: bool = False,
    **options: Any,
) -> SimulationResult | None:
    """Generate sample data from the hidden-variable model.

    Example:
        >>> result = generate_data_hidden(
        ...     env=[1, 2, 3, 4, 5] * 3,
        ...     L=15,
        ...     noise={"sd": 0.02, "only_target": False, "relative": True},
        ...     intervention="initial_blockreactions",
        ...     intervention_par=0.1,
        ... )
        >>> result.simulated_data.shape
        (15, 105)

    Args:
        env: Environment label of each repetition (default ten baseline rows).
        L: Number of observation time points per species.
        noise: Noise settings ``{sd, only_target, relative}``.
        intervention: 'initial', 'blockreactions' or 'initial_blockreactions'.
        intervention_par: Half-width of the uniform perturbation of k7.
        hidden: Remove the hidden species H1, H2 from the output.
        solver_method: solve_ivp method name.
        seed: Seed for the first attempt; blow-up retries are unseeded.
        silent: Suppress progress logging.
        **options: Further GeneratorConfig fields (rtol, atol, timeout,
            max_retries, reaction_model).

    Returns:
        SimulationResult, or None if the ODE solver failed.

    Raises:
        ConfigurationError: On unknown intervention or invalid options.
        DivergenceError: If every retry blew up.
    """
    config = make_generator_config(
        env=list(np.asarray(env).tolist()) if env is not None else [1] * 10,
        L=L,
        noise=noise if noise is not None else NoiseConfig(),
        intervention=intervention,
        intervention_par=intervention_par,
        hidden=hidden,
        solver_method=solver_method,
        seed=seed,
        silent=silent,
        **options,
    )
    return HiddenDataGenerator(config).generate()


__all__ = ["SimulationResult", "HiddenDataGenerator", "generate_data_hidden", "BASELINE_ENVIRONMENT"]
