"""Enrichment of persisted master records."""
