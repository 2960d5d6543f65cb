"""Configuration dataclasses for measures and distance functions.

Frozen dataclasses with defaults. Nothing is read from the environment or
from files; callers override values at construction time and the factories
(``build_measure``, ``build_distance_function``) validate them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MeasureConfig:
    """Selects a distance rule and its acceptance threshold."""

    # "strict" or "soft"
    rule: str = "strict"
    max_threshold: float = 0.0


@dataclass(frozen=True)
class DistanceFunctionConfig:
    """Parameters for holon-style composite distance functions."""

    # "overlap" or "weighted"
    kind: str = "overlap"
    default_weight: float = 1.0
    must_match_weight: float = 1.0
    must_not_match_weight: float = 1.0
