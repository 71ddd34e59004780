"""Genome assembly statistics from NCBI Assembly.

Resolution is two-step: esearch the assembly database by species name and
take the first UID, then esummary that UID. The summary record is keyed by
UID under "result".
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from taxonomy_finder.clients.entrez import EntrezClient
from taxonomy_finder.taxonomy.errors import TransientFetchError
from taxonomy_finder.taxonomy.models import GenomeStats

logger = logging.getLogger(__name__)

ASSEMBLY_DB = "assembly"


def _to_int(value: Any) -> int | None:
    """Convert to non-negative int, None for blanks and bad values."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number >= 0 else None


def _to_gc(value: Any) -> float | None:
    """Convert a GC percentage to float.

    Blank and zero values are absent rather than 0.0, as are values outside
    0-100.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        gc = float(str(value).strip())
    except ValueError:
        return None
    if gc == 0 or not 0 <= gc <= 100:
        return None
    return gc


def parse_assembly_summary(record: dict[str, Any]) -> GenomeStats:
    """Extract size, GC content and assembly level from an esummary record."""
    assembly_level = str(record.get("assemblylevel") or "").strip() or None
    return GenomeStats(
        size=_to_int(record.get("totallength")),
        gc_content=_to_gc(record.get("gc")),
        assembly_level=assembly_level,
    )


class GenomeStatsFetcher:
    """Look up assembly statistics by species name."""

    def __init__(self, client: EntrezClient):
        self.client = client

    def fetch(self, species_name: str) -> GenomeStats | None:
        """Fetch statistics for the first assembly matching a species name.

        Args:
            species_name: Free-text species name

        Returns:
            GenomeStats, or None when no assembly or summary record exists

        Raises:
            TransientFetchError: On network or response format failures
        """
        logger.debug(f"Fetching genome stats for: {species_name}")
        try:
            assembly_ids = self.client.esearch(ASSEMBLY_DB, species_name)
            if not assembly_ids:
                logger.info(f"No assembly found for {species_name}")
                return None

            uid = assembly_ids[0]
            logger.debug(f"Found assembly ID: {uid}")

            summary = self.client.esummary(ASSEMBLY_DB, uid)
            record = (summary.get("result") or {}).get(uid)
        except requests.RequestException as e:
            raise TransientFetchError(species_name, str(e)) from e
        except AttributeError as e:
            raise TransientFetchError(species_name, f"Unexpected summary format: {e}") from e

        if not isinstance(record, dict):
            logger.info(f"No assembly data in response for {species_name}")
            return None

        stats = parse_assembly_summary(record)
        logger.debug(f"Genome stats for {species_name}: {stats}")
        return stats
