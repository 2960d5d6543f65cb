"""Distance functions for holon-style composite comparisons.

A distance function compares either two whole profiles
(``implementation``) or one profile against a pair of constraint sets
(``composite``): traits that must be present and traits that must be
absent. Both return a non-negative float, 0.0 for a perfect match.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Protocol
from typing import runtime_checkable

from holonmem.config import DistanceFunctionConfig
from holonmem.models.traits import Trait
from holonmem.models.traits import trait_set
from holonmem.models.traits import TraitSource

# (must_match, must_not_match)
ConstraintPair = tuple[TraitSource, TraitSource]


@runtime_checkable
class DistanceFunction(Protocol):
    """Compares profiles directly or against must/must-not constraints."""

    def implementation(self, first: TraitSource, second: TraitSource) -> float:
        """Return the distance between two profiles."""

    def composite(self, profile: TraitSource, constraints: ConstraintPair) -> float:
        """Return the distance between *profile* and a constraint pair."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def split_constraints(
    constraints: ConstraintPair,
) -> tuple[frozenset[Trait], frozenset[Trait]]:
    """Unpack a constraint pair, rejecting overlapping sides."""
    must_match, must_not_match = constraints
    required = trait_set(must_match)
    forbidden = trait_set(must_not_match)
    overlap = required & forbidden
    if overlap:
        names = ", ".join(sorted(str(trait) for trait in overlap))
        msg = f"must_match and must_not_match must be disjoint, both contain: {names}"
        raise ValueError(msg)
    return required, forbidden


def _values_by_key(traits: frozenset[Trait]) -> dict[str, set]:
    # typed so True, 1 and 1.0 stay distinct, as in Trait equality
    grouped: dict[str, set] = {}
    for trait in traits:
        grouped.setdefault(trait.key, set()).add((type(trait.value), trait.value))
    return grouped


def _check_weight(name: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


# ---------------------------------------------------------------------------
# Overlap
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OverlapDistanceFunction:
    """Set-overlap distance.

    ``implementation`` is the Jaccard distance of the two trait sets.
    ``composite`` adds the fraction of required traits missing from the
    profile to the fraction of forbidden traits present in it, so it ranges
    over ``[0, 2]``.
    """

    def implementation(self, first: TraitSource, second: TraitSource) -> float:
        a = trait_set(first)
        b = trait_set(second)
        union = a | b
        if not union:
            return 0.0
        return 1.0 - len(a & b) / len(union)

    def composite(self, profile: TraitSource, constraints: ConstraintPair) -> float:
        required, forbidden = split_constraints(constraints)
        held = trait_set(profile)
        unmet = len(required - held) / len(required) if required else 0.0
        violated = len(forbidden & held) / len(forbidden) if forbidden else 0.0
        return unmet + violated


# ---------------------------------------------------------------------------
# Weighted mismatch
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WeightedMismatchDistanceFunction:
    """Per-key weighted mismatch distance.

    Keys missing from ``weights`` use ``default_weight``. In ``composite``
    each unmet required trait costs ``must_match_weight * weight(key)`` and
    each violated forbidden trait ``must_not_match_weight * weight(key)``.
    """

    weights: Mapping[str, float] = field(default_factory=dict)
    default_weight: float = 1.0
    must_match_weight: float = 1.0
    must_not_match_weight: float = 1.0

    def __post_init__(self) -> None:
        for key, value in self.weights.items():
            _check_weight(f"weight for {key!r}", value)
        _check_weight("default_weight", self.default_weight)
        _check_weight("must_match_weight", self.must_match_weight)
        _check_weight("must_not_match_weight", self.must_not_match_weight)
        # Copy so later mutation of the caller's mapping has no effect
        object.__setattr__(self, "weights", dict(self.weights))

    def __hash__(self) -> int:
        return hash(
            (
                tuple(sorted(self.weights.items())),
                self.default_weight,
                self.must_match_weight,
                self.must_not_match_weight,
            )
        )

    def weight(self, key: str) -> float:
        return self.weights.get(key, self.default_weight)

    def implementation(self, first: TraitSource, second: TraitSource) -> float:
        a = _values_by_key(trait_set(first))
        b = _values_by_key(trait_set(second))
        return float(
            sum(
                self.weight(key)
                for key in a.keys() | b.keys()
                if a.get(key) != b.get(key)
            )
        )

    def composite(self, profile: TraitSource, constraints: ConstraintPair) -> float:
        required, forbidden = split_constraints(constraints)
        held = trait_set(profile)
        unmet = sum(self.weight(trait.key) for trait in required - held)
        violated = sum(self.weight(trait.key) for trait in forbidden & held)
        return float(
            self.must_match_weight * unmet + self.must_not_match_weight * violated
        )


def build_distance_function(config: DistanceFunctionConfig) -> DistanceFunction:
    """Create the distance function named by ``config.kind``."""
    kind = config.kind.strip().lower()
    if kind == "overlap":
        return OverlapDistanceFunction()
    if kind == "weighted":
        return WeightedMismatchDistanceFunction(
            default_weight=config.default_weight,
            must_match_weight=config.must_match_weight,
            must_not_match_weight=config.must_not_match_weight,
        )
    raise ValueError(
        f"Unsupported distance function '{config.kind}'. "
        "Supported kinds: overlap, weighted."
    )
