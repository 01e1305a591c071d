"""Data models for the FastAPI service.

This package contains Pydantic models for identities and accounts, and the
validation schemas applied to request payloads and forms.
"""
