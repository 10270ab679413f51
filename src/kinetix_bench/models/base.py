"""Base abstract class for reaction-network models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy.typing as npt

logger = logging.getLogger(__name__)


class AbstractReactionModel(ABC):
    """Abstract base class for fixed-topology reaction networks.

    A model owns its right-hand side, its unperturbed (baseline) initial
    state and rate constants, and the ground-truth metadata a causal
    benchmark reports alongside generated data. Species indices in the
    metadata (``hidden_species``, ``target``, ``true_model``) are 1-based,
    matching the usual species numbering x1..xd.

    Attributes:
        name: Model identifier.
        num_species: Number of chemical species (state dimension).
        num_params: Number of rate constants.
    """

    def __init__(self, name: str, num_species: int, num_params: int):
        """Initialize model.

        Args:
            name: Model identifier.
            num_species: Number of chemical species.
            num_params: Number of rate constants.
        """
        self.name = name
        self.num_species = num_species
        self.num_params = num_params
        logger.debug(
            f"Initialized {self.__class__.__name__}: "
            f"name={name}, species={num_species}, params={num_params}"
        )

    @abstractmethod
    def rhs(
        self,
        t: float,
        x: npt.NDArray[Any],
        theta: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """ODE right-hand side.

        Args:
            t: Time (scalar, unused by autonomous networks).
            x: State vector, shape (num_species,).
            theta: Rate constants, shape (num_params,).

        Returns:
            Time derivative dx/dt, shape (num_species,).
        """
        raise NotImplementedError("Subclasses must implement rhs()")

    @abstractmethod
    def get_initial_state(self) -> npt.NDArray[Any]:
        """Baseline initial concentrations, shape (num_species,)."""
        raise NotImplementedError("Subclasses must implement get_initial_state()")

    @abstractmethod
    def get_parameters(self) -> npt.NDArray[Any]:
        """Baseline rate constants, shape (num_params,)."""
        raise NotImplementedError("Subclasses must implement get_parameters()")

    @abstractmethod
    def get_state_labels(self) -> list[str]:
        """Human-readable species labels."""
        raise NotImplementedError("Subclasses must implement get_state_labels()")

    @property
    def hidden_species(self) -> tuple[int, ...]:
        """1-based indices of species removed from masked output."""
        return ()

    @property
    @abstractmethod
    def target(self) -> int:
        """1-based index of the target species in the full state."""
        raise NotImplementedError

    @property
    def true_model(self) -> tuple[int, ...]:
        """1-based species indices that causally drive the target."""
        return ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize model metadata to a dictionary."""
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "num_species": self.num_species,
            "num_params": self.num_params,
            "initial_state": self.get_initial_state().tolist(),
            "parameters": self.get_parameters().tolist(),
            "labels": self.get_state_labels(),
            "hidden_species": list(self.hidden_species),
            "target": self.target,
            "true_model": list(self.true_model),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"species={self.num_species}, "
            f"params={self.num_params})"
        )


__all__ = ["AbstractReactionModel"]
