"""Request logging and exception handling middleware."""
