"""Source Finder - list package sources known to a set of providers."""

__version__ = "0.1.0"
