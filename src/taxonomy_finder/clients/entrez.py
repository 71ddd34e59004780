"""NCBI Entrez E-utilities client.

A thin wrapper around the three E-utilities endpoints used for species lookup:
- esearch: free-text search returning a list of UIDs
- efetch: full record retrieval (XML for the taxonomy database)
- esummary: document summaries (JSON for the assembly database)

Supports NCBI API key via NCBI_API_KEY environment variable to increase
rate limit from 3 requests/second to 10 requests/second.

References:
    - E-utilities docs: https://www.ncbi.nlm.nih.gov/books/NBK25501/
"""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv

from taxonomy_finder.clients.base import DEFAULT_TIMEOUT, HTTPClientBase

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

NCBI_EUTILS_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
NCBI_TOOL_NAME = "taxonomy-finder"

# Delay between requests with and without an API key
RATE_LIMIT_DELAY_NO_KEY = 0.34
RATE_LIMIT_DELAY_WITH_KEY = 0.1


class EntrezClient(HTTPClientBase):
    """Client for NCBI Entrez E-utilities.

    Example:
        >>> with EntrezClient() as client:
        ...     ids = client.esearch("taxonomy", "Escherichia coli")
        ...     xml = client.efetch("taxonomy", ids[0])
    """

    BASE_URL = NCBI_EUTILS_BASE_URL

    def __init__(
        self,
        api_key: str | None = None,
        email: str | None = None,
        rate_limit_delay: float | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
    ):
        """Initialize Entrez client.

        Args:
            api_key: NCBI API key (defaults to NCBI_API_KEY env var)
            email: Contact email sent to NCBI (defaults to NCBI_EMAIL env var)
            rate_limit_delay: Seconds between requests (derived from api_key if not given)
            timeout: Request timeout in seconds
            user_agent: Custom User-Agent string
        """
        self.api_key = api_key or os.getenv("NCBI_API_KEY")
        self.email = email or os.getenv("NCBI_EMAIL")
        if rate_limit_delay is None:
            rate_limit_delay = RATE_LIMIT_DELAY_WITH_KEY if self.api_key else RATE_LIMIT_DELAY_NO_KEY
        super().__init__(rate_limit_delay=rate_limit_delay, timeout=timeout, user_agent=user_agent)

    def _default_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"tool": NCBI_TOOL_NAME}
        if self.api_key:
            params["api_key"] = self.api_key
        if self.email:
            params["email"] = self.email
        return params

    def esearch(self, db: str, term: str) -> list[str]:
        """Search an Entrez database by free text.

        Args:
            db: Entrez database name (e.g., "taxonomy", "assembly")
            term: Free-text query; URL escaping is handled by requests

        Returns:
            List of UIDs in the order NCBI returned them (may be empty)

        Raises:
            requests.RequestException: On network errors or invalid JSON
        """
        data = self._get_json(
            f"{self.BASE_URL}/esearch.fcgi",
            params={"db": db, "term": term, "retmode": "json"},
        )
        id_list = data.get("esearchresult", {}).get("idlist") or []
        logger.debug(f"esearch db={db} term={term!r} -> {len(id_list)} ids")
        return [str(uid) for uid in id_list]

    def efetch(self, db: str, uid: str, retmode: str = "xml") -> bytes:
        """Fetch a full record.

        Args:
            db: Entrez database name
            uid: Record identifier
            retmode: Return format (default "xml")

        Returns:
            Raw response body

        Raises:
            requests.RequestException: On network errors
        """
        return self._get_content(
            f"{self.BASE_URL}/efetch.fcgi",
            params={"db": db, "id": uid, "retmode": retmode},
        )

    def esummary(self, db: str, uid: str) -> dict[str, Any]:
        """Fetch a document summary as JSON.

        Args:
            db: Entrez database name
            uid: Record identifier

        Returns:
            Parsed JSON body; the record itself is under result[uid]

        Raises:
            requests.RequestException: On network errors or invalid JSON
        """
        return self._get_json(
            f"{self.BASE_URL}/esummary.fcgi",
            params={"db": db, "id": uid, "retmode": "json"},
        )
