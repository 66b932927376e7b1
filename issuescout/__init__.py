"""Score and render open-source issues, parse watchlists, and keep a contribution ledger."""

__version__ = "0.1.0"

__all__ = ["__version__"]