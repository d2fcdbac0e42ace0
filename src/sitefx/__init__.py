"""Interaction and animation core for a single-page personal site."""

__version__ = "0.1.0"
