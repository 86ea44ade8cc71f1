"""Portfolio ledger: transaction aggregate, use cases and event publishing."""

__version__ = "0.1.0"
