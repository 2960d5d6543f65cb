"""Identity value objects: identifiers, individual models and observations."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
from enum import Enum

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from holonmem.models.traits import Trait


class ReferentType(str, Enum):
    """Kind of real-world thing an identifier names."""

    person = "person"
    animal = "animal"
    object = "object"
    place = "place"
    organization = "organization"
    event = "event"
    unknown = "unknown"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Identifier(BaseModel):
    """Unique, typed key of one referent. Compared by value."""

    model_config = {"frozen": True}

    key: str = Field(description="Unique key of the referent.")
    type: ReferentType = Field(
        default=ReferentType.unknown,
        description="Kind of referent the key names.",
    )

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("identifier key must be a non-empty string")
        return value

    def __str__(self) -> str:
        return self.key


class IndividualModel(BaseModel):
    """Canonical internal representation of one referent."""

    model_config = {"frozen": True}

    identifier: Identifier
    type: ReferentType

    @classmethod
    def placeholder(cls, identifier: Identifier) -> IndividualModel:
        """Minimal model for an identifier that was named but never observed."""
        return cls(identifier=identifier, type=identifier.type)


class Observation(BaseModel):
    """An episodic sighting of some referent, produced by outer layers.

    Identity resolution reads only ``identifier`` and ``referent_type``.
    ``traits`` and ``observed_at`` are carried for the episodic layers that
    store and replay observations.
    """

    model_config = {"frozen": True}

    identifier: Identifier
    type: ReferentType | None = Field(
        default=None,
        description="Observed referent type; falls back to the identifier's.",
    )
    traits: frozenset[Trait] = Field(default_factory=frozenset)
    observed_at: datetime = Field(default_factory=_utcnow)

    @property
    def referent_type(self) -> ReferentType:
        return self.type if self.type is not None else self.identifier.type
