"""Desktop client for a personal finance service: assets, debts and net worth."""

__version__ = "0.1.0"
