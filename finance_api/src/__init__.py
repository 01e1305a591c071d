"""FastAPI service for the Finance Tracker.

This package provides the REST API, request validation schemas and
presentation helpers for managing personal accounts, budgets and
transactions.
"""

__version__ = "0.1.0"
