"""Linked-data graph assembly.

This package resolves entity URIs, accumulates cross-table relations
and renders the Turtle statements for each conversion phase.
"""
