"""Threshold measures scoring how closely a profile matches a context.

Distance 0 means the profile matches the context perfectly; the larger the
distance, the weaker the match. Two rules are available:

* ``strict``: every profile trait that the context does not confirm counts,
  so a context silent about a trait is treated as contradicting it.
* ``soft``: only the traits the context actually states are examined; a
  trait counts when the profile does not hold it.

A measure admits a match when ``distance <= max_threshold``.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from numbers import Real
from time import perf_counter
from typing import Protocol
from typing import TypeVar

from holonmem.config import MeasureConfig
from holonmem.models.traits import trait_set
from holonmem.models.traits import TraitSource
from holonmem.observability import record_latency

P = TypeVar("P", bound=TraitSource)


class InvalidThresholdError(ValueError):
    """Raised when a measure is built with a threshold outside ``[0, inf]``."""

    def __init__(self, threshold: object) -> None:
        self.threshold = threshold
        super().__init__(
            f"max_threshold must be a non-negative real number, got {threshold!r}"
        )


def validate_threshold(value: object) -> float:
    """Return *value* as a float, or raise ``InvalidThresholdError``."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidThresholdError(value)
    threshold = float(value)
    if math.isnan(threshold) or threshold < 0:
        raise InvalidThresholdError(value)
    return threshold


class Measure(Protocol):
    """Threshold-based acceptance policy around a distance score."""

    max_threshold: float

    def accepts(self, distance: float) -> bool:
        """Return ``True`` if *distance* is within the threshold."""


# ---------------------------------------------------------------------------
# Scoring rules (pure)
# ---------------------------------------------------------------------------


def strict_distance(profile: TraitSource, context: TraitSource) -> int:
    """Count profile traits not confirmed by the context: ``|P \\ C|``."""
    return len(trait_set(profile) - trait_set(context))


def soft_distance(profile: TraitSource, context: TraitSource) -> int:
    """Count context traits the profile does not hold: ``|C| - |C ∩ P|``."""
    from_context = trait_set(context)
    return len(from_context) - len(from_context & trait_set(profile))


class DistanceRule(str, Enum):
    strict = "strict"
    soft = "soft"


_RULES: dict[DistanceRule, Callable[[TraitSource, TraitSource], int]] = {
    DistanceRule.strict: strict_distance,
    DistanceRule.soft: soft_distance,
}


# ---------------------------------------------------------------------------
# Measures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Distance:
    """Distance measure between a profile and a context (strict by default)."""

    max_threshold: float = 0.0
    rule: DistanceRule = DistanceRule.strict

    def __post_init__(self) -> None:
        threshold = validate_threshold(self.max_threshold)
        object.__setattr__(self, "max_threshold", threshold)
        object.__setattr__(self, "rule", DistanceRule(self.rule))

    def score(self, profile: TraitSource, context: TraitSource) -> int:
        return _RULES[self.rule](profile, context)

    def accepts(self, distance: float) -> bool:
        return distance <= self.max_threshold

    def matches(self, profile: TraitSource, context: TraitSource) -> bool:
        """Score *profile* against *context* and apply the threshold."""
        return self.accepts(self.score(profile, context))

    def select(
        self, profiles: Iterable[P], context: TraitSource
    ) -> list[tuple[P, int]]:
        """Return accepted profiles with their scores, closest first.

        Profiles with equal scores keep their input order.
        """
        start = perf_counter()
        ok = False
        try:
            from_context = trait_set(context)
            scored = [
                (profile, self.score(profile, from_context)) for profile in profiles
            ]
            accepted = [item for item in scored if self.accepts(item[1])]
            accepted.sort(key=lambda item: item[1])
            ok = True
            return accepted
        finally:
            record_latency(
                operation="distance.select",
                duration_ms=(perf_counter() - start) * 1000,
                ok=ok,
            )


@dataclass(frozen=True)
class SoftDistance(Distance):
    """Lenient distance: profile traits the context omits are not penalized."""

    rule: DistanceRule = field(default=DistanceRule.soft, init=False)


def build_measure(config: MeasureConfig) -> Distance:
    """Create the measure named by ``config.rule``."""
    rule = config.rule.strip().lower()
    if rule == DistanceRule.strict.value:
        return Distance(config.max_threshold)
    if rule == DistanceRule.soft.value:
        return SoftDistance(config.max_threshold)
    raise ValueError(
        f"Unsupported measure rule '{config.rule}'. Supported rules: strict, soft."
    )
