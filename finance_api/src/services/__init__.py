"""Collaborator services.

This package contains the identity provider integration used to resolve
the authenticated caller of each request.
"""
