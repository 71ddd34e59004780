"""Pytest configuration for taxonomy-finder tests.

This file is automatically loaded by pytest and sets up test fixtures
and configuration that are shared across all test modules.
"""

from collections.abc import Callable

import pytest
from dotenv import load_dotenv

from taxonomy_finder.taxonomy.models import Species, TaxonomyRank

# Load .env file so integration tests can access NCBI_API_KEY
# This runs before any tests are collected
load_dotenv()

ECOLI_TAXONOMY_XML = b"""<?xml version="1.0" ?>
<!DOCTYPE TaxaSet PUBLIC "-//NLM//DTD Taxon, 14th January 2002//EN" "https://www.ncbi.nlm.nih.gov/entrez/query/DTD/taxon.dtd">
<TaxaSet><Taxon>
    <TaxId>562</TaxId>
    <ScientificName>Escherichia coli</ScientificName>
    <OtherNames>
        <GenbankCommonName>E. coli</GenbankCommonName>
        <Synonym>Bacillus coli</Synonym>
        <Synonym>Bacterium coli</Synonym>
        <EquivalentName>Escherichia coli (Migula 1895) Castellani and Chalmers 1919</EquivalentName>
        <Name>
            <ClassCDE>authority</ClassCDE>
            <DispName>Escherichia coli (Migula 1895) Castellani and Chalmers 1919</DispName>
        </Name>
    </OtherNames>
    <ParentTaxId>561</ParentTaxId>
    <Rank>species</Rank>
    <Division>Bacteria</Division>
    <Lineage>cellular organisms; Bacteria; Pseudomonadota; Gammaproteobacteria; Enterobacterales; Enterobacteriaceae; Escherichia</Lineage>
    <LineageEx>
        <Taxon>
            <TaxId>131567</TaxId>
            <ScientificName>cellular organisms</ScientificName>
            <Rank>no rank</Rank>
        </Taxon>
        <Taxon>
            <TaxId>2</TaxId>
            <ScientificName>Bacteria</ScientificName>
            <Rank>superkingdom</Rank>
        </Taxon>
        <Taxon>
            <TaxId>1224</TaxId>
            <ScientificName>Pseudomonadota</ScientificName>
            <Rank>phylum</Rank>
        </Taxon>
        <Taxon>
            <TaxId>1236</TaxId>
            <ScientificName>Gammaproteobacteria</ScientificName>
            <Rank>class</Rank>
        </Taxon>
        <Taxon>
            <TaxId>91347</TaxId>
            <ScientificName>Enterobacterales</ScientificName>
            <Rank>order</Rank>
        </Taxon>
        <Taxon>
            <TaxId>543</TaxId>
            <ScientificName>Enterobacteriaceae</ScientificName>
            <Rank>family</Rank>
        </Taxon>
        <Taxon>
            <TaxId>561</TaxId>
            <ScientificName>Escherichia</ScientificName>
            <Rank>genus</Rank>
        </Taxon>
    </LineageEx>
</Taxon></TaxaSet>
"""

EFETCH_ERROR_XML = b"""<?xml version="1.0" encoding="UTF-8" ?>
<eFetchResult>
    <ERROR>ID list is empty! Possibly it has no correct IDs.</ERROR>
</eFetchResult>
"""


@pytest.fixture
def ecoli_taxonomy_xml() -> bytes:
    """EFetch taxonomy document for Escherichia coli (TaxID 562)."""
    return ECOLI_TAXONOMY_XML


@pytest.fixture
def efetch_error_xml() -> bytes:
    """EFetch document signalling an error."""
    return EFETCH_ERROR_XML


@pytest.fixture
def assembly_summary() -> dict:
    """ESummary JSON for a complete E. coli assembly."""
    return {
        "header": {"type": "esummary", "version": "0.3"},
        "result": {
            "uids": ["79781"],
            "79781": {
                "uid": "79781",
                "assemblyaccession": "GCF_000005845.2",
                "speciesname": "Escherichia coli",
                "assemblylevel": "Complete Genome",
                "totallength": "4641652",
                "gc": "50.8",
            },
        },
    }


@pytest.fixture
def make_species() -> Callable[..., Species]:
    """Factory building a Species from (rank, name) pairs; the last pair is the species."""

    def _make(tax_id: str, ranks: list[tuple[str, str]]) -> Species:
        lineage = [TaxonomyRank(rank=rank, name=name, tax_id=f"{tax_id}-{i}") for i, (rank, name) in enumerate(ranks)]
        species_name = ranks[-1][1]
        lineage[-1] = TaxonomyRank(rank=ranks[-1][0], name=species_name, tax_id=tax_id)
        return Species(
            id=tax_id,
            name=species_name,
            tax_id=tax_id,
            scientific_name=species_name,
            lineage=lineage,
        )

    return _make


@pytest.fixture
def ecoli(make_species: Callable[..., Species]) -> Species:
    return make_species(
        "562",
        [("superkingdom", "Bacteria"), ("phylum", "Proteobacteria"), ("species", "Escherichia coli")],
    )


@pytest.fixture
def lacto(make_species: Callable[..., Species]) -> Species:
    return make_species(
        "1579",
        [("superkingdom", "Bacteria"), ("phylum", "Firmicutes"), ("species", "Lactobacillus acidophilus")],
    )
