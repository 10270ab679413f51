"""Reaction-network models used to simulate benchmark data."""

from __future__ import annotations

from kinetix_bench.models.base import AbstractReactionModel
from kinetix_bench.models.hidden import HiddenVariableModel

__all__ = ["AbstractReactionModel", "HiddenVariableModel"]
