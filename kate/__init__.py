"""Toolkit for SQL building, query parameters, API results and Redis locking."""

__version__ = "0.1.0"