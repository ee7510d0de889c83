"""Opendhamma: vault registry, GitHub content fetching and wikilink resolution."""

__version__ = "0.1.0"
