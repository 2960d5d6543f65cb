"""Registry of individual models with a case-insensitive name lexicon.

The registry turns observations and human-readable names into canonical
``IndividualModel`` instances and guarantees that each identifier is
represented at most once. Models are indexed by ``Identifier`` so every
lookup is O(1); nothing is ever removed.

All public methods hold one internal lock, so a registry can be shared
between threads and compound operations (name binding, capture) are atomic.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable
from collections.abc import Iterator
from threading import Lock
from time import perf_counter

from holonmem.models.identity import Identifier
from holonmem.models.identity import IndividualModel
from holonmem.models.identity import Observation
from holonmem.observability import record_latency

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Lexicon key for *name*: Unicode NFC, stripped, case-folded."""
    return unicodedata.normalize("NFC", name).strip().casefold()


class IndividualModelRegistry:
    """Owns the individual models of one memory layer and their names."""

    def __init__(self, models: Iterable[IndividualModel] | None = None) -> None:
        self._lock = Lock()
        self._models: dict[Identifier, IndividualModel] = {}
        self._lexicon: dict[str, Identifier] = {}
        if models is not None:
            self._merge(models)

    # -- read --

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, IndividualModel):
            item = item.identifier
        if not isinstance(item, Identifier):
            return False
        with self._lock:
            return item in self._models

    def __iter__(self) -> Iterator[IndividualModel]:
        return iter(self.models())

    def models(self) -> list[IndividualModel]:
        """Snapshot of all models in insertion order."""
        with self._lock:
            return list(self._models.values())

    def is_observation_represented(self, observation: Observation) -> bool:
        """Return ``True`` if a model exists for the observation's identifier."""
        with self._lock:
            return observation.identifier in self._models

    def get_by_identifier(self, identifier: Identifier) -> IndividualModel | None:
        with self._lock:
            return self._models.get(identifier)

    def get_by_name(self, name: str) -> IndividualModel | None:
        """Resolve a human-readable name, ignoring case."""
        with self._lock:
            identifier = self._lexicon.get(normalize_name(name))
            if identifier is None:
                return None
            return self._models.get(identifier)

    def names_for(self, identifier: Identifier) -> list[str]:
        """Return the normalized names bound to *identifier*, sorted."""
        with self._lock:
            return sorted(
                name for name, bound in self._lexicon.items() if bound == identifier
            )

    def lexicon_size(self) -> int:
        with self._lock:
            return len(self._lexicon)

    # -- write --

    def add(self, model: IndividualModel) -> bool:
        """Insert *model* unless its identifier is already represented."""
        with self._lock:
            return self._insert(model)

    def bind_name(self, identifier: Identifier, name: str) -> IndividualModel:
        """Bind *name* to *identifier* and return the identifier's model.

        An existing binding for the same name is overwritten. When the
        identifier has no model yet, a placeholder model is created for it.
        """
        key = normalize_name(name)
        if not key:
            raise ValueError("name must contain at least one non-space character")
        with self._lock:
            previous = self._lexicon.get(key)
            if previous is not None and previous != identifier:
                logger.debug(
                    "Rebinding name %r from %s to %s", key, previous, identifier
                )
            self._lexicon[key] = identifier
            model = self._models.get(identifier)
            if model is None:
                model = IndividualModel.placeholder(identifier)
                self._insert(model)
                logger.debug("Created placeholder model for %s", identifier)
            return model

    def capture_observation(self, observation: Observation) -> IndividualModel:
        """Return the model for the observed identifier, creating it once."""
        with self._lock:
            model = self._models.get(observation.identifier)
            if model is None:
                model = IndividualModel(
                    identifier=observation.identifier,
                    type=observation.referent_type,
                )
                self._insert(model)
                logger.debug("Created model for observed %s", observation.identifier)
            return model

    def capture_observations(
        self, models: Iterable[IndividualModel]
    ) -> list[IndividualModel]:
        """Merge *models*, skipping identifiers already represented.

        Returns the models that were inserted, in input order.
        """
        start = perf_counter()
        ok = False
        try:
            # Read the whole input first so a failing source inserts nothing
            staged = list(models)
            with self._lock:
                inserted = self._merge(staged)
            ok = True
            return inserted
        finally:
            record_latency(
                operation="registry.capture_observations",
                duration_ms=(perf_counter() - start) * 1000,
                ok=ok,
            )

    # -- internals (caller holds the lock) --

    def _insert(self, model: IndividualModel) -> bool:
        if model.identifier in self._models:
            return False
        self._models[model.identifier] = model
        return True

    def _merge(self, models: Iterable[IndividualModel]) -> list[IndividualModel]:
        inserted: list[IndividualModel] = []
        for model in models:
            if self._insert(model):
                inserted.append(model)
        if inserted:
            logger.debug("Captured %d new individual models", len(inserted))
        return inserted
