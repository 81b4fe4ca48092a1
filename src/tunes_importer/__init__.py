"""Tunes Importer - normalize, tag, and import new music."""

__version__ = "0.1.0"
