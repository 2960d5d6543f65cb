"""Measures domain — distance scoring and threshold acceptance."""

from holonmem.measures.distance import build_measure
from holonmem.measures.distance import Distance
from holonmem.measures.distance import DistanceRule
from holonmem.measures.distance import InvalidThresholdError
from holonmem.measures.distance import Measure
from holonmem.measures.distance import soft_distance
from holonmem.measures.distance import SoftDistance
from holonmem.measures.distance import strict_distance
from holonmem.measures.distance import validate_threshold
from holonmem.measures.functions import build_distance_function
from holonmem.measures.functions import ConstraintPair
from holonmem.measures.functions import DistanceFunction
from holonmem.measures.functions import OverlapDistanceFunction
from holonmem.measures.functions import split_constraints
from holonmem.measures.functions import WeightedMismatchDistanceFunction

__all__ = [
    "ConstraintPair",
    "Distance",
    "DistanceFunction",
    "DistanceRule",
    "InvalidThresholdError",
    "Measure",
    "OverlapDistanceFunction",
    "SoftDistance",
    "WeightedMismatchDistanceFunction",
    "build_distance_function",
    "build_measure",
    "soft_distance",
    "split_constraints",
    "strict_distance",
    "validate_threshold",
]
