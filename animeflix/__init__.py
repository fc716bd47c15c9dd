"""Animeflix - browse and search an anime catalog."""

__version__ = "0.1.0"
