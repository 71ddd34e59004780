"""CSV and JSON export of species records.

Both exports are one-shot writes of the in-memory species list; there is no
import path back.
"""

from __future__ import annotations

import csv
import json
import logging
import time
from collections.abc import Sequence
from pathlib import Path  # noqa: TC003 - Path is used at runtime

from taxonomy_finder.taxonomy.models import Species

logger = logging.getLogger(__name__)

CSV_HEADER = ["Species", "TaxID", "Rank", "Taxonomic Name", "Genome Size", "GC Content", "Assembly Level"]


def default_export_name(extension: str) -> str:
    """Timestamped file name, e.g. taxonomy_export_1760000000000.csv."""
    return f"taxonomy_export_{int(time.time() * 1000)}.{extension}"


def species_csv_rows(species: Sequence[Species]) -> list[list[str]]:
    """One row per (species, lineage rank) pair. Missing stats are empty strings."""
    rows: list[list[str]] = []
    for sp in species:
        stats = sp.genome_stats
        size = "" if stats is None or stats.size is None else str(stats.size)
        gc_content = "" if stats is None or stats.gc_content is None else str(stats.gc_content)
        assembly_level = "" if stats is None or stats.assembly_level is None else stats.assembly_level
        for entry in sp.lineage:
            rows.append([sp.display_name, sp.tax_id, entry.rank, entry.name, size, gc_content, assembly_level])
    return rows


def export_csv(species: Sequence[Species], output_path: Path) -> int:
    """Write the lineage table as CSV with every field quoted.

    Args:
        species: Species to export
        output_path: Path to output CSV file

    Returns:
        Number of data rows written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = species_csv_rows(species)

    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        writer.writerows(rows)

    logger.info(f"Exported {len(rows)} lineage rows for {len(species)} species to {output_path}")
    return len(rows)


def export_json(species: Sequence[Species], output_path: Path) -> None:
    """Write the species list as indented JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump([sp.to_dict() for sp in species], f, indent=2, ensure_ascii=False)
    logger.info(f"Exported {len(species)} species to {output_path}")
