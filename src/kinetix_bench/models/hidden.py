"""Hidden-variable reaction network (9 species, 2 unobserved intermediates)."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from kinetix_bench.models.base import AbstractReactionModel
from kinetix_bench.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)

INITIAL_OBS = np.array([5.0, 0.0, 0.0, 5.0, 0.0, 0.0, 0.0, 0.0, 0.0])
THETA_OBS = np.array([0.8, 0.8, 0.1, 1.0, 0.03, 0.6, 1.0, 0.2, 0.5]) * 0.1

SPECIES_LABELS = ["X1", "X2", "X3", "X4", "X5", "X6", "H1", "H2", "Y"]


@MODEL_REGISTRY.register("hidden")
class HiddenVariableModel(AbstractReactionModel):
    """Mass-action network with two hidden intermediates H1, H2.

    Reaction network (species 1-based, k_j = theta_j):
        X1 -> H1            (k1)
        H1 -> X2 + H2       (k2)
        H1 -> X1            (k3)
        H2 -> Y             (k4)
        X3 -> X4 + Y        (k5)
        X1 + X4 -> X3       (k6)
        X2 -> X6            (k7)
        X5 -> X3            (k8)
        X4 -> X5            (k9)

    The only bilinear term is k6 * X1 * X4. Under every supported
    intervention the target Y is driven directly by X3 (observed) and by H2
    (hidden), so the ground-truth model over observed species is {X3}.

    Baseline:
        - initial state (5, 0, 0, 5, 0, 0, 0, 0, 0)
        - theta = 0.1 * (0.8, 0.8, 0.1, 1, 0.03, 0.6, 1, 0.2, 0.5)
    """

    def __init__(self, name: str = "hidden_variable"):
        super().__init__(name, num_species=9, num_params=9)

    def rhs(
        self,
        t: float,
        x: npt.NDArray[Any],
        theta: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """Right-hand side dx/dt of the network.

        Args:
            t: Time (unused, the system is autonomous).
            x: Concentrations, shape (9,).
            theta: Rate constants, shape (9,).

        Returns:
            dx/dt, shape (9,).
        """
        x1, x2, x3, x4, x5, x6, x7, x8, x9 = x
        th1, th2, th3, th4, th5, th6, th7, th8, th9 = theta

        bilinear = th6 * x1 * x4

        return np.array(
            [
                th3 * x7 - th1 * x1 - bilinear,
                th2 * x7 - th7 * x2,
                bilinear - th5 * x3 + th8 * x5,
                th5 * x3 - bilinear - th9 * x4,
                th9 * x4 - th8 * x5,
                th7 * x2,
                th1 * x1 - (th2 + th3) * x7,
                th2 * x7 - th4 * x8,
                th4 * x8 + th5 * x3,
            ]
        )

    def get_initial_state(self) -> npt.NDArray[Any]:
        return INITIAL_OBS.copy()

    def get_parameters(self) -> npt.NDArray[Any]:
        return THETA_OBS.copy()

    def get_state_labels(self) -> list[str]:
        return list(SPECIES_LABELS)

    @property
    def hidden_species(self) -> tuple[int, ...]:
        return (7, 8)

    @property
    def target(self) -> int:
        return 9

    @property
    def true_model(self) -> tuple[int, ...]:
        return (3,)


__all__ = ["HiddenVariableModel", "INITIAL_OBS", "THETA_OBS", "SPECIES_LABELS"]
