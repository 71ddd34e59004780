"""API clients for NCBI Entrez E-utilities."""

from taxonomy_finder.clients.base import ClientError, HTTPClientBase
from taxonomy_finder.clients.entrez import EntrezClient

__all__ = ["ClientError", "EntrezClient", "HTTPClientBase"]
