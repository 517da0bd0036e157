"""FastAPI application for the Juander identity service."""
