"""Species lookup and comparison subpackage.

This subpackage provides modular components for species data:
- models: Domain models (Species, TaxonomyRank, GenomeStats, MergedTreeNode)
- errors: Result-or-error types (NotFoundError, DuplicateEntryError)
- lineage: Taxonomy EFetch XML parsing
- genome: Assembly statistics lookup
- lookup: Name -> Species orchestration
- tree: Merged lineage tree construction and rendering
- comparison: Rank-aligned comparison matrix
- session: Working set of species
- export: CSV and JSON export
"""

from taxonomy_finder.taxonomy.comparison import aggregate_comparison, comparison_frame, genome_stats_rows
from taxonomy_finder.taxonomy.errors import DuplicateEntryError, NotFoundError, TransientFetchError
from taxonomy_finder.taxonomy.export import export_csv, export_json
from taxonomy_finder.taxonomy.genome import GenomeStatsFetcher
from taxonomy_finder.taxonomy.lineage import parse_taxonomy_document
from taxonomy_finder.taxonomy.lookup import SpeciesLookup
from taxonomy_finder.taxonomy.models import (
    ComparisonRow,
    GenomeStats,
    GenomeStatsStatus,
    MergedTreeNode,
    Species,
    TaxonomyRank,
)
from taxonomy_finder.taxonomy.session import SpeciesWorkingSet
from taxonomy_finder.taxonomy.tree import merge_lineages, render_text, to_newick

__all__ = [
    "ComparisonRow",
    "DuplicateEntryError",
    "GenomeStats",
    "GenomeStatsFetcher",
    "GenomeStatsStatus",
    "MergedTreeNode",
    "NotFoundError",
    "Species",
    "SpeciesLookup",
    "SpeciesWorkingSet",
    "TaxonomyRank",
    "TransientFetchError",
    "aggregate_comparison",
    "comparison_frame",
    "export_csv",
    "export_json",
    "genome_stats_rows",
    "merge_lineages",
    "parse_taxonomy_document",
    "render_text",
    "to_newick",
]
