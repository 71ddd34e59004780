"""Domain models for species lookups.

This module defines the core data structures shared by the lineage parser,
the lookup orchestrator, the tree merge engine and the exporters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Sentinel rank used by NCBI for unclassified lineage levels
NO_RANK = "no rank"
SPECIES_RANK = "species"


@dataclass(frozen=True)
class TaxonomyRank:
    """One level of biological classification.

    Attributes:
        rank: Lowercase rank name (e.g., "genus")
        name: Scientific name of the taxon at this rank
        tax_id: NCBI Taxonomy ID of the taxon
    """

    rank: str
    name: str
    tax_id: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {"rank": self.rank, "name": self.name, "taxId": self.tax_id}


@dataclass
class GenomeStats:
    """Assembly statistics for an organism.

    Every field is optional. None means "not available", never zero.

    Attributes:
        size: Total assembly length in base pairs
        gc_content: GC percentage (0-100)
        assembly_level: e.g., "Complete Genome", "Scaffold"
    """

    size: int | None = None
    gc_content: float | None = None
    assembly_level: str | None = None

    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return self.size is None and self.gc_content is None and self.assembly_level is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting absent fields."""
        data: dict[str, Any] = {}
        if self.size is not None:
            data["size"] = self.size
        if self.gc_content is not None:
            data["gcContent"] = self.gc_content
        if self.assembly_level is not None:
            data["assemblyLevel"] = self.assembly_level
        return data


class GenomeStatsStatus(Enum):
    """Whether genome statistics were looked up and found."""

    NOT_REQUESTED = "not_requested"
    UNAVAILABLE = "unavailable"
    PRESENT = "present"


@dataclass
class Species:
    """A resolved organism with its lineage.

    Attributes:
        id: Record identifier (same as tax_id)
        name: Display name (scientific name)
        tax_id: NCBI Taxonomy ID, unique within a working set
        lineage: Ranks in root-to-leaf order; the last entry is the species itself
        synonyms: Synonym names, or None when the record lists none
        genome_stats: Assembly statistics when genome_stats_status is PRESENT
        genome_stats_status: Whether stats were requested and found
        scientific_name: Scientific name from the taxonomy record
        common_name: Common name, if NCBI lists one
    """

    id: str
    name: str
    tax_id: str
    lineage: list[TaxonomyRank] = field(default_factory=list)
    synonyms: list[str] | None = None
    genome_stats: GenomeStats | None = None
    genome_stats_status: GenomeStatsStatus = GenomeStatsStatus.NOT_REQUESTED
    scientific_name: str | None = None
    common_name: str | None = None

    @property
    def display_name(self) -> str:
        """Scientific name, falling back to name."""
        return self.scientific_name or self.name

    def rank_name(self, rank: str) -> str | None:
        """Name this species assigns to a rank, or None when the lineage lacks it."""
        for entry in self.lineage:
            if entry.rank == rank:
                return entry.name
        return None

    def with_genome_stats(self, stats: GenomeStats | None) -> Species:
        """Attach the outcome of a genome stats lookup.

        Args:
            stats: Fetched statistics, or None when nothing was found

        Returns:
            self, for chaining
        """
        if stats is None or stats.is_empty():
            self.genome_stats = None
            self.genome_stats_status = GenomeStatsStatus.UNAVAILABLE
        else:
            self.genome_stats = stats
            self.genome_stats_status = GenomeStatsStatus.PRESENT
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON export shape, omitting absent optional fields."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "taxId": self.tax_id,
            "lineage": [entry.to_dict() for entry in self.lineage],
        }
        if self.synonyms is not None:
            data["synonyms"] = list(self.synonyms)
        if self.genome_stats is not None:
            data["genomeStats"] = self.genome_stats.to_dict()
        if self.scientific_name is not None:
            data["scientificName"] = self.scientific_name
        if self.common_name is not None:
            data["commonName"] = self.common_name
        return data


@dataclass
class MergedTreeNode:
    """Node of the merged lineage tree.

    children is None for a known leaf and a list otherwise. The synthetic root
    has an empty name and no rank.
    """

    name: str
    rank: str | None = None
    tax_id: str | None = None
    children: list[MergedTreeNode] | None = field(default_factory=list)
    is_leaf_species: bool = False

    @property
    def is_root(self) -> bool:
        return self.name == "" and self.rank is None

    def find_child(self, name: str, rank: str | None) -> MergedTreeNode | None:
        """Return the child matching (name, rank), if any."""
        for child in self.children or []:
            if child.name == name and child.rank == rank:
                return child
        return None


@dataclass
class ComparisonRow:
    """One rank of the comparison matrix.

    Attributes:
        rank: Rank string shared by the row
        per_species_name: species id -> name at this rank (None if not present)
    """

    rank: str
    per_species_name: dict[str, str | None] = field(default_factory=dict)


@dataclass
class GenomeStatsRow:
    """One species in the genome statistics comparison table."""

    species: str
    tax_id: str
    genome_size: str
    gc_content: str
    assembly_level: str
