"""Trait value objects and the trait sets built from them.

A ``Trait`` is the atomic key/value observation unit. A ``Profile`` holds
what the agent believes about an entity or situation; a ``Context`` holds
what is currently observed, usually only part of it. Both are plain,
order-irrelevant sets of traits and compare by value.
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

TraitValue = str | int | float | bool


class Trait(BaseModel):
    """Immutable key/value pair.

    Two traits are equal iff key, value and the value's type are, so
    ``barks:True``, ``barks:1`` and ``barks:1.0`` are three different traits.
    """

    model_config = {"frozen": True}

    key: str = Field(description="Name of the observed property.")
    value: TraitValue = Field(description="Observed value of the property.")

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("trait key must be a non-empty string")
        return value

    def _identity(self) -> tuple[str, type, TraitValue]:
        return (self.key, type(self.value), self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trait):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __str__(self) -> str:
        return f"{self.key}:{self.value}"

    @classmethod
    def parse(cls, text: str) -> Trait:
        """Parse ``'key:value'`` (split on the first colon).

        The value is kept as a string: ``Trait.parse("size:3")`` is
        ``size:"3"``, which differs from ``Trait(key="size", value=3)``.
        """
        key, sep, value = text.partition(":")
        if not sep:
            msg = f"Invalid trait {text!r}, expected 'key:value'"
            raise ValueError(msg)
        return cls(key=key.strip(), value=value.strip())


class TraitSet(BaseModel):
    """Named, immutable set of traits."""

    model_config = {"frozen": True}

    name: str = Field(default="", description="Optional human-readable label.")
    traits: frozenset[Trait] = Field(
        default_factory=frozenset,
        description="The traits in this set; order is irrelevant.",
    )

    @property
    def size(self) -> int:
        return len(self.traits)

    def keys(self) -> frozenset[str]:
        """Return every trait key present in the set."""
        return frozenset(trait.key for trait in self.traits)

    @classmethod
    def from_pairs(
        cls,
        pairs: Mapping[str, TraitValue] | Iterable[tuple[str, TraitValue]],
        *,
        name: str = "",
    ) -> Self:
        """Build from a mapping or from ``(key, value)`` pairs."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls(
            name=name,
            traits=frozenset(Trait(key=key, value=value) for key, value in items),
        )


class Profile(TraitSet):
    """Belief state of the agent about one entity or situation."""


class Context(TraitSet):
    """Observed, possibly partial, state matched against profiles."""


TraitSource = TraitSet | Iterable[Trait]


def trait_set(source: TraitSource) -> frozenset[Trait]:
    """Normalize a profile, a context or any iterable of traits to a frozenset."""
    if isinstance(source, TraitSet):
        return source.traits
    if isinstance(source, frozenset):
        return source
    return frozenset(source)
