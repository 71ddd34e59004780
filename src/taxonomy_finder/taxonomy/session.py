"""Working set of species for a session.

The working set is the single owner of the active species list. Read-only
consumers (tree merge, comparison, export) receive its species tuple.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from taxonomy_finder.taxonomy.errors import DuplicateEntryError
from taxonomy_finder.taxonomy.models import Species

logger = logging.getLogger(__name__)

# Species needed before comparison views make sense
MIN_COMPARISON_SPECIES = 2


class SpeciesWorkingSet:
    """Ordered species collection, deduplicated by TaxID."""

    def __init__(self) -> None:
        self._species: list[Species] = []

    @property
    def species(self) -> tuple[Species, ...]:
        return tuple(self._species)

    @property
    def can_compare(self) -> bool:
        return len(self._species) >= MIN_COMPARISON_SPECIES

    def __len__(self) -> int:
        return len(self._species)

    def __iter__(self) -> Iterator[Species]:
        return iter(self.species)

    def __contains__(self, tax_id: object) -> bool:
        return any(s.tax_id == tax_id for s in self._species)

    def add(self, species: Species) -> Species | DuplicateEntryError:
        """Append a species unless its TaxID is already present.

        Returns:
            The added species, or DuplicateEntryError leaving the set unchanged
        """
        if species.tax_id in self:
            notice = DuplicateEntryError(tax_id=species.tax_id, name=species.display_name)
            logger.warning(f"Species already added: {notice.message}")
            return notice
        self._species.append(species)
        logger.info(f"Added {species.display_name} (TaxID {species.tax_id})")
        return species

    def remove(self, tax_id: str) -> bool:
        """Remove a species by TaxID. Returns True if one was removed."""
        before = len(self._species)
        self._species = [s for s in self._species if s.tax_id != tax_id]
        return len(self._species) < before

    def clear(self) -> None:
        self._species.clear()
