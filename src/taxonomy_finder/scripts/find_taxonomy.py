#!/usr/bin/env python3
"""Look up microbial species in NCBI and compare their lineages.

Each NAME is resolved in order (one NCBI lookup chain at a time) and added
to a working set deduplicated by TaxID. Names that cannot be resolved are
reported and skipped.
"""

import json
import logging
import sys
from pathlib import Path

import click

from taxonomy_finder.taxonomy.comparison import (
    comparison_frame,
    format_gc_content,
    format_genome_size,
    genome_stats_rows,
)
from taxonomy_finder.taxonomy.errors import DuplicateEntryError, NotFoundError
from taxonomy_finder.taxonomy.export import default_export_name, export_csv, export_json
from taxonomy_finder.taxonomy.lookup import SpeciesLookup
from taxonomy_finder.taxonomy.models import Species
from taxonomy_finder.taxonomy.session import SpeciesWorkingSet
from taxonomy_finder.taxonomy.tree import (
    count_leaves,
    merge_lineages,
    render_text,
    to_nested_dict,
    to_newick,
    tree_depth,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def collect_species(species_lookup: SpeciesLookup, names: tuple[str, ...]) -> SpeciesWorkingSet:
    """Resolve names one at a time into a working set, reporting failures."""
    working_set = SpeciesWorkingSet()
    for name in names:
        result = species_lookup.resolve(name)
        if isinstance(result, NotFoundError):
            click.echo(f"Species not found: {result.error_message}", err=True)
            continue
        added = working_set.add(result)
        if isinstance(added, DuplicateEntryError):
            click.echo(f"Species already added: {added.message}", err=True)
        else:
            click.echo(f"Species found: {result.display_name} (TaxID {result.tax_id})", err=True)
    return working_set


def echo_species(species: Species) -> None:
    """Print the lineage table, lineage tree and genome statistics for one species."""
    click.echo(f"{species.display_name}  [TaxID {species.tax_id}]")
    if species.common_name:
        click.echo(f"  Common name: {species.common_name}")
    if species.synonyms:
        click.echo(f"  Synonyms: {', '.join(species.synonyms)}")

    width = max(len(entry.rank) for entry in species.lineage)
    for entry in species.lineage:
        click.echo(f"  {entry.rank.capitalize():<{width}}  {entry.name}  ({entry.tax_id})")
    click.echo()
    click.echo(render_text(merge_lineages([species])))
    click.echo()

    stats = species.genome_stats
    click.echo(f"  Genome size (bp): {format_genome_size(stats.size if stats else None)}")
    click.echo(f"  GC content: {format_gc_content(stats.gc_content if stats else None)}")
    click.echo(f"  Assembly level: {(stats.assembly_level if stats else None) or '-'}")
    click.echo()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--no-genome-stats", is_flag=True, help="Skip the genome assembly statistics lookup")
@click.pass_context
def main(ctx: click.Context, verbose: bool, no_genome_stats: bool) -> None:
    """Retrieve microbial taxonomic lineages and genome statistics from NCBI."""
    _configure_logging(verbose)
    ctx.obj = SpeciesLookup(include_genome_stats=not no_genome_stats)
    ctx.call_on_close(ctx.obj.client.close)


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def lookup(species_lookup: SpeciesLookup, names: tuple[str, ...]) -> None:
    """Show the lineage and genome statistics of each species NAME."""
    working_set = collect_species(species_lookup, names)
    for species in working_set:
        echo_species(species)
    if not len(working_set):
        sys.exit(1)


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def compare(species_lookup: SpeciesLookup, names: tuple[str, ...]) -> None:
    """Compare the lineages of two or more species side by side."""
    working_set = collect_species(species_lookup, names)
    if not len(working_set):
        sys.exit(1)
    if not working_set.can_compare:
        click.echo("Add at least 2 species to enable comparison view")
        return

    species = working_set.species
    click.echo(f"Multi-Species Comparison ({len(species)} species)")
    click.echo()
    click.echo("Taxonomic Lineage Comparison")
    click.echo(comparison_frame(species).to_string())
    click.echo()

    click.echo("Genome Statistics Comparison")
    for row in genome_stats_rows(species):
        click.echo(f"  {row.species}\t{row.tax_id}\t{row.genome_size}\t{row.gc_content}\t{row.assembly_level}")
    click.echo()

    merged = merge_lineages(species)
    # Depth excludes the synthetic root
    click.echo(f"Phylogenetic Tree ({count_leaves(merged)} leaves, depth {tree_depth(merged) - 1})")
    click.echo(render_text(merged))


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--newick", is_flag=True, help="Print the tree in Newick format")
@click.option("--json", "as_json", is_flag=True, help="Print the tree as nested JSON")
@click.pass_obj
def tree(species_lookup: SpeciesLookup, names: tuple[str, ...], newick: bool, as_json: bool) -> None:
    """Print the merged lineage tree of the given species."""
    if newick and as_json:
        raise click.UsageError("--newick and --json are mutually exclusive")

    working_set = collect_species(species_lookup, names)
    if not len(working_set):
        sys.exit(1)
    if not working_set.can_compare:
        click.echo("Add at least 2 species to enable comparison view")
        return

    merged = merge_lineages(working_set.species)
    if as_json:
        click.echo(json.dumps(to_nested_dict(merged), indent=2))
    elif newick:
        click.echo(to_newick(merged))
    else:
        click.echo(render_text(merged))


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--format",
    "-f",
    "export_format",
    type=click.Choice(["csv", "json"]),
    default="csv",
    help="Export format",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file (default: taxonomy_export_<timestamp>.<format>)",
)
@click.pass_obj
def export(species_lookup: SpeciesLookup, names: tuple[str, ...], export_format: str, output: Path | None) -> None:
    """Export the species data as CSV or JSON."""
    working_set = collect_species(species_lookup, names)
    if not len(working_set):
        click.echo("Nothing to export", err=True)
        sys.exit(1)

    output_path = output or Path(default_export_name(export_format))
    if export_format == "csv":
        export_csv(working_set.species, output_path)
    else:
        export_json(working_set.species, output_path)
    click.echo(f"Exported {len(working_set)} species to {output_path}")


if __name__ == "__main__":
    main()
