"""Persistence implementations for juander_auth."""
