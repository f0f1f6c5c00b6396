"""Expensync personal finance tracker: REST API and client library."""

__version__ = "1.0.0"
