"""GTFS table ingestion.

This package discovers feed tables on disk and drives the two-phase
conversion pipeline over them.
"""
