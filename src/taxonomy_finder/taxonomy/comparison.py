"""Rank-aligned comparison of several species.

Species are outer-joined on the rank string: every rank present in any
lineage becomes a row, and a species lacking that rank gets None in its cell.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from taxonomy_finder.taxonomy.models import ComparisonRow, GenomeStatsRow, Species

# Display value for missing cells
MISSING_VALUE = "-"


def aggregate_comparison(species: Sequence[Species]) -> list[ComparisonRow]:
    """Build the comparison matrix.

    Args:
        species: Species in column order

    Returns:
        One row per distinct rank, sorted by rank string
    """
    ranks = sorted({entry.rank for sp in species for entry in sp.lineage})
    return [ComparisonRow(rank=rank, per_species_name={sp.id: sp.rank_name(rank) for sp in species}) for rank in ranks]


def comparison_frame(species: Sequence[Species]) -> pd.DataFrame:
    """Comparison matrix as a DataFrame (index=rank, columns=species names).

    Missing cells hold MISSING_VALUE.
    """
    rows = aggregate_comparison(species)
    columns = [sp.display_name for sp in species]
    data = [[row.per_species_name.get(sp.id) or MISSING_VALUE for sp in species] for row in rows]
    frame = pd.DataFrame(data, columns=columns, index=[row.rank for row in rows])
    frame.index.name = "Rank"
    return frame


def format_genome_size(size: int | None) -> str:
    """Format base pairs with thousands separators."""
    if not size:
        return MISSING_VALUE
    return f"{size:,}"


def format_gc_content(gc_content: float | None) -> str:
    """Format a GC percentage to two decimals."""
    if not gc_content:
        return MISSING_VALUE
    return f"{gc_content:.2f}%"


def genome_stats_rows(species: Sequence[Species]) -> list[GenomeStatsRow]:
    """One display row of genome statistics per species."""
    rows = []
    for sp in species:
        stats = sp.genome_stats
        rows.append(
            GenomeStatsRow(
                species=sp.display_name,
                tax_id=sp.tax_id,
                genome_size=format_genome_size(stats.size if stats else None),
                gc_content=format_gc_content(stats.gc_content if stats else None),
                assembly_level=(stats.assembly_level if stats else None) or MISSING_VALUE,
            )
        )
    return rows
