"""Resolve a free-text species name into a Species record.

A lookup runs three steps in order:
1. esearch the taxonomy database for the name (first UID wins)
2. efetch that UID and parse its lineage
3. fetch genome assembly statistics by the original name

Steps 1 and 2 decide success. Step 3 only enriches the result: any failure
there leaves the species without genome statistics.
"""

from __future__ import annotations

import logging

import requests

from taxonomy_finder.clients.entrez import EntrezClient
from taxonomy_finder.taxonomy.errors import (
    EMPTY_QUERY,
    HTTP_ERROR,
    NOT_FOUND,
    NotFoundError,
    TransientFetchError,
)
from taxonomy_finder.taxonomy.genome import GenomeStatsFetcher
from taxonomy_finder.taxonomy.lineage import parse_taxonomy_document
from taxonomy_finder.taxonomy.models import Species

logger = logging.getLogger(__name__)

TAXONOMY_DB = "taxonomy"


def _status_code(error: requests.RequestException) -> int | None:
    response = getattr(error, "response", None)
    return response.status_code if response is not None else None


class SpeciesLookup:
    """Look up species lineage and genome statistics from NCBI.

    Example:
        >>> lookup = SpeciesLookup(EntrezClient())
        >>> result = lookup.resolve("Escherichia coli")
        >>> if isinstance(result, Species):
        ...     print([r.name for r in result.lineage])
    """

    def __init__(self, client: EntrezClient | None = None, include_genome_stats: bool = True):
        """Initialize the lookup.

        Args:
            client: Entrez client (a default client is created if not provided)
            include_genome_stats: Whether to fetch assembly statistics
        """
        self.client = client if client is not None else EntrezClient()
        self.include_genome_stats = include_genome_stats
        self.genome_fetcher = GenomeStatsFetcher(self.client)

    def search_tax_id(self, species_name: str) -> str | None:
        """Return the first taxonomy UID matching a name, or None.

        Raises:
            requests.RequestException: On network errors
        """
        ids = self.client.esearch(TAXONOMY_DB, species_name)
        return ids[0] if ids else None

    def fetch_species(self, tax_id: str) -> Species | NotFoundError:
        """Fetch and parse the lineage document for a TaxID.

        Raises:
            requests.RequestException: On network errors
        """
        logger.debug(f"Fetching taxonomy for TaxID: {tax_id}")
        document = self.client.efetch(TAXONOMY_DB, tax_id)
        return parse_taxonomy_document(document, tax_id)

    def resolve(self, species_name: str) -> Species | NotFoundError:
        """Resolve a species name.

        Args:
            species_name: Free-text species name (e.g., "Escherichia coli")

        Returns:
            Species on success (genome statistics possibly absent), NotFoundError
            when the name cannot be resolved or the taxonomy fetch fails
        """
        query = species_name.strip()
        if not query:
            return NotFoundError(query=species_name, error_code=EMPTY_QUERY, error_message="Species name is required")

        logger.info(f"Looking up species: {query}")

        try:
            tax_id = self.search_tax_id(query)
            if tax_id is None:
                return NotFoundError(
                    query=query,
                    error_code=NOT_FOUND,
                    error_message=f'No taxonomic data found for "{query}"',
                )
            species = self.fetch_species(tax_id)
        except requests.RequestException as e:
            logger.warning(f"Taxonomy lookup failed for {query}: {e}")
            return NotFoundError(
                query=query,
                error_code=HTTP_ERROR,
                error_message=str(e),
                status_code=_status_code(e),
            )

        if isinstance(species, NotFoundError):
            species.query = query
            return species

        if self.include_genome_stats:
            self._attach_genome_stats(species, query)

        logger.info(f"Completed lookup for {species.display_name} (TaxID {species.tax_id})")
        return species

    def _attach_genome_stats(self, species: Species, query: str) -> None:
        # Assembly search takes the query text, not the TaxID
        try:
            stats = self.genome_fetcher.fetch(query)
        except TransientFetchError as e:
            logger.warning(f"{e}; continuing without genome statistics")
            stats = None
        species.with_genome_stats(stats)
