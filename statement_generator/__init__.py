"""Bank statement generator: field resolution, running ledger and paginated statement layout."""

__version__ = "1.0.0"
