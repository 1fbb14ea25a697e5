"""Command line interface for the SatRate survey store."""
