"""Models domain — trait sets and identity value objects."""

from __future__ import annotations

from holonmem.models.identity import Identifier
from holonmem.models.identity import IndividualModel
from holonmem.models.identity import Observation
from holonmem.models.identity import ReferentType
from holonmem.models.traits import Context
from holonmem.models.traits import Profile
from holonmem.models.traits import Trait
from holonmem.models.traits import trait_set
from holonmem.models.traits import TraitSet
from holonmem.models.traits import TraitSource

__all__ = [
    # Traits
    "Context",
    "Profile",
    "Trait",
    "TraitSet",
    "TraitSource",
    "trait_set",
    # Identity
    "Identifier",
    "IndividualModel",
    "Observation",
    "ReferentType",
]
