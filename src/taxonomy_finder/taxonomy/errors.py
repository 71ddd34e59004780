"""Error types for species lookups.

Expected failures are returned as dataclasses (result-or-error), matching
ClientError from the HTTP layer. Only TransientFetchError is raised, and it
never leaves the lookup orchestrator.
"""

from dataclasses import dataclass

from taxonomy_finder.clients.base import ClientError

# Error codes carried by NotFoundError
NOT_FOUND = "NOT_FOUND"
HTTP_ERROR = "HTTP_ERROR"
PARSE_ERROR = "PARSE_ERROR"
EMPTY_QUERY = "EMPTY_QUERY"


@dataclass
class NotFoundError(ClientError):
    """A species name could not be resolved to a taxonomy record."""


@dataclass
class DuplicateEntryError:
    """Notice that a species is already present in the working set.

    Attributes:
        tax_id: TaxID of the rejected species
        name: Display name of the rejected species
    """

    tax_id: str
    name: str

    @property
    def message(self) -> str:
        return f"{self.name} is already in your results."


class TransientFetchError(Exception):
    """A genome statistics fetch failed on the network or while parsing."""

    def __init__(self, query: str, reason: str):
        self.query = query
        self.reason = reason
        super().__init__(f"Genome stats fetch failed for {query!r}: {reason}")
