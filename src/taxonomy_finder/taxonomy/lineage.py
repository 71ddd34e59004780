"""Parse NCBI Taxonomy EFetch XML into Species records.

The EFetch document for db=taxonomy is a TaxaSet holding one Taxon per
requested ID. Each Taxon lists its ancestors under LineageEx (root first) and
its alternative names under OtherNames. NCBI signals a bad request with an
ERROR element instead of a TaxaSet.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from taxonomy_finder.taxonomy.errors import NOT_FOUND, PARSE_ERROR, NotFoundError
from taxonomy_finder.taxonomy.models import NO_RANK, SPECIES_RANK, Species, TaxonomyRank

logger = logging.getLogger(__name__)


def _text(elem: ET.Element | None, path: str) -> str:
    """Stripped text of the child at path, or "" when missing."""
    if elem is None:
        return ""
    child = elem.find(path)
    if child is None or not child.text:
        return ""
    return child.text.strip()


def parse_lineage(taxon: ET.Element) -> list[TaxonomyRank]:
    """Extract ranked ancestors from a Taxon element.

    Ancestors missing a rank, name or id, and ancestors ranked "no rank", are
    dropped.

    Args:
        taxon: Taxon element from a TaxaSet

    Returns:
        Ancestors in root-to-parent order (may be empty)
    """
    lineage: list[TaxonomyRank] = []
    lineage_ex = taxon.find("LineageEx")
    if lineage_ex is None:
        return lineage

    for ancestor in lineage_ex.findall("Taxon"):
        rank = _text(ancestor, "Rank").lower()
        name = _text(ancestor, "ScientificName")
        ancestor_id = _text(ancestor, "TaxId")
        if not rank or not name or not ancestor_id or rank == NO_RANK:
            continue
        lineage.append(TaxonomyRank(rank=rank, name=name, tax_id=ancestor_id))

    return lineage


def parse_synonyms(taxon: ET.Element) -> list[str] | None:
    """Collect Synonym names in document order, or None when there are none."""
    other_names = taxon.find("OtherNames")
    if other_names is None:
        return None
    synonyms = [syn.text.strip() for syn in other_names.findall("Synonym") if syn.text and syn.text.strip()]
    return synonyms or None


def parse_common_name(taxon: ET.Element) -> str | None:
    """Prefer the GenBank common name, then any other common name."""
    other_names = taxon.find("OtherNames")
    common_name = _text(other_names, "GenbankCommonName") or _text(other_names, "CommonName")
    return common_name or None


def parse_taxonomy_document(document: bytes | str, tax_id: str | None = None) -> Species | NotFoundError:
    """Build a Species from an EFetch taxonomy document.

    The organism itself is appended to the parsed ancestors as a final
    "species" entry, so a successful parse always yields a non-empty lineage
    ending with the organism.

    Args:
        document: Raw EFetch XML (db=taxonomy, retmode=xml)
        tax_id: TaxID that was fetched; defaults to the document's own TaxId

    Returns:
        Species on success, NotFoundError if the document carries an error
        marker, holds no Taxon, or is not well-formed XML
    """
    query = tax_id or ""
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        logger.debug(f"Failed to parse taxonomy document for {query}: {e}")
        return NotFoundError(query=query, error_code=PARSE_ERROR, error_message=f"Malformed taxonomy XML: {e}")

    error_elem = root if root.tag == "ERROR" else root.find(".//ERROR")
    if error_elem is not None:
        message = (error_elem.text or "").strip() or "NCBI returned an error"
        return NotFoundError(query=query, error_code=NOT_FOUND, error_message=message)

    taxon = root if root.tag == "Taxon" else root.find("Taxon")
    if taxon is None:
        return NotFoundError(query=query, error_code=NOT_FOUND, error_message="No taxon in document")

    organism_id = tax_id or _text(taxon, "TaxId")
    # Tolerated: NCBI data is best-effort
    scientific_name = _text(taxon, "ScientificName")

    lineage = parse_lineage(taxon)
    lineage.append(TaxonomyRank(rank=SPECIES_RANK, name=scientific_name, tax_id=organism_id))

    logger.debug(f"Found {len(lineage)} lineage ranks for {scientific_name}")

    return Species(
        id=organism_id,
        name=scientific_name,
        tax_id=organism_id,
        scientific_name=scientific_name,
        common_name=parse_common_name(taxon),
        lineage=lineage,
        synonyms=parse_synonyms(taxon),
    )
