"""Application assembly: factory, lifespan and middleware."""
