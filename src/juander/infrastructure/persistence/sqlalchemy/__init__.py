"""SQLAlchemy persistence for the juander domain."""
