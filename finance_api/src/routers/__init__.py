"""API routers mounted under the API base path."""
