"""Retrieve microbial taxonomic lineages and genome statistics from NCBI."""

__version__ = "0.1.0"
