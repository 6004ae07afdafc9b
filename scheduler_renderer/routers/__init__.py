"""API routers for render and health endpoints."""
