"""Intervention policies producing per-environment (initial state, theta) pairs.

Each policy is a strategy object bound to a model's baseline and a random
generator. Calling it performs one randomized intervention draw and returns
fresh arrays; the baseline is never modified. The orchestrator calls a
policy exactly once per non-baseline environment, so every repetition in an
environment shares the same draw.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.exceptions import ConfigurationError
from kinetix_bench.models.base import AbstractReactionModel
from kinetix_bench.utils.registry import INTERVENTION_REGISTRY

logger = logging.getLogger(__name__)

# 1-based species whose initial concentrations are redrawn
INTERVENED_SPECIES = (1, 4, 5)
INITIAL_RANGE = (0.0, 10.0)

# 1-based rate constants that are never blocked
PROTECTED_REACTIONS = (4, 5, 7)
# 1-based rate constant perturbed by +/- intervention_par instead of blocked
PERTURBED_REACTION = 7


class InterventionType(str, Enum):
    """Supported intervention policies."""

    INITIAL = "initial"
    BLOCKREACTIONS = "blockreactions"
    INITIAL_BLOCKREACTIONS = "initial_blockreactions"


InterventionDraw = tuple[npt.NDArray[Any], npt.NDArray[Any]]


class AbstractIntervention(ABC):
    """Base class for intervention strategies.

    Attributes:
        initial_obs: Baseline initial state (private copy).
        theta_obs: Baseline rate constants (private copy).
        intervention_par: Half-width of the uniform perturbation of the
            perturbed rate constant.
        rng: Random generator consumed by every draw.
    """

    def __init__(
        self,
        initial_obs: npt.NDArray[Any],
        theta_obs: npt.NDArray[Any],
        intervention_par: float,
        rng: np.random.Generator,
    ):
        if intervention_par < 0:
            raise ConfigurationError(f"intervention_par must be non-negative, got {intervention_par}")
        self.initial_obs = np.array(initial_obs, dtype=float)
        self.theta_obs = np.array(theta_obs, dtype=float)
        self.intervention_par = float(intervention_par)
        self.rng = rng

    @abstractmethod
    def __call__(self) -> InterventionDraw:
        """Draw one intervention.

        Returns:
            Tuple (initial_state, theta) of freshly allocated arrays.
        """
        raise NotImplementedError("Subclasses must implement __call__()")

    def _draw_initial(self) -> npt.NDArray[Any]:
        initial = np.zeros_like(self.initial_obs)
        low, high = INITIAL_RANGE
        for species in INTERVENED_SPECIES:
            initial[species - 1] = self.rng.uniform(low, high)
        return initial

    def _draw_blocked_theta(self) -> npt.NDArray[Any]:
        theta = self.theta_obs.copy()
        protected = [r - 1 for r in PROTECTED_REACTIONS]
        r_vec = np.setdiff1d(np.arange(theta.size), protected)
        num_reactions = r_vec.size
        # each unprotected rate survives with probability 1/k
        keep = self.rng.binomial(1, 1.0 / num_reactions, size=num_reactions)
        theta[r_vec] = theta[r_vec] * keep

        p = PERTURBED_REACTION - 1
        shift = self.rng.uniform(-self.intervention_par, self.intervention_par)
        theta[p] = max(self.theta_obs[p] + shift, 0.0)
        return theta

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(intervention_par={self.intervention_par})"


@INTERVENTION_REGISTRY.register(InterventionType.INITIAL.value)
class InitialIntervention(AbstractIntervention):
    """Redraw initial concentrations of X1, X4, X5 from U(0, 10)."""

    def __call__(self) -> InterventionDraw:
        return self._draw_initial(), self.theta_obs.copy()


@INTERVENTION_REGISTRY.register(InterventionType.BLOCKREACTIONS.value)
class BlockReactions(AbstractIntervention):
    """Randomly block unprotected reactions and jitter rate constant k7."""

    def __call__(self) -> InterventionDraw:
        return self.initial_obs.copy(), self._draw_blocked_theta()


@INTERVENTION_REGISTRY.register(InterventionType.INITIAL_BLOCKREACTIONS.value)
class InitialBlockReactions(AbstractIntervention):
    """Block reactions and redraw initial concentrations in one draw."""

    def __call__(self) -> InterventionDraw:
        theta = self._draw_blocked_theta()
        initial = self._draw_initial()
        return initial, theta


def parse_intervention(intervention: str | InterventionType) -> InterventionType:
    """Resolve a policy name to :class:`InterventionType`.

    Raises:
        ConfigurationError: If the name is not a known policy.
    """
    try:
        return InterventionType(intervention)
    except ValueError as exc:
        available = ", ".join(t.value for t in InterventionType)
        raise ConfigurationError(
            f"Specified intervention does not exist: {intervention!r}. Available: {available}"
        ) from exc


def make_intervention(
    intervention: str | InterventionType,
    model: AbstractReactionModel,
    intervention_par: float,
    rng: np.random.Generator,
) -> AbstractIntervention:
    """Build the intervention strategy for ``model``'s baseline.

    Args:
        intervention: Policy name or enum member.
        model: Reaction model supplying the baseline state and theta.
        intervention_par: Perturbation half-width for rate constant k7.
        rng: Generator consumed by the strategy's draws.

    Returns:
        Zero-argument callable returning a fresh (initial, theta) pair.

    Raises:
        ConfigurationError: If the policy is unknown.
    """
    kind = parse_intervention(intervention)
    policy = INTERVENTION_REGISTRY.create(
        kind.value,
        model.get_initial_state(),
        model.get_parameters(),
        intervention_par,
        rng,
    )
    logger.debug(f"Created intervention policy {policy!r} for model '{model.name}'")
    return policy


__all__ = [
    "InterventionType",
    "AbstractIntervention",
    "InitialIntervention",
    "BlockReactions",
    "InitialBlockReactions",
    "parse_intervention",
    "make_intervention",
    "INTERVENED_SPECIES",
    "PROTECTED_REACTIONS",
    "PERTURBED_REACTION",
]
