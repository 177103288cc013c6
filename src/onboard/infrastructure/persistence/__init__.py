"""Persistence layer: SQLAlchemy models, database manager and repositories."""
