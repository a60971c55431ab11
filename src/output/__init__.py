"""Graph output layer.

This package writes statement batches in the selected encoding.
"""
