"""Juander - identity lifecycle for the Juander tourism application."""
