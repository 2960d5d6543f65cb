"""Semantic domain — individual models and identity resolution."""

from holonmem.semantic.registry import IndividualModelRegistry
from holonmem.semantic.registry import normalize_name

__all__ = ["IndividualModelRegistry", "normalize_name"]
