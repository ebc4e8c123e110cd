"""
Shared test fixtures and configuration.

Unit tests need no database. Integration tests use the PostgreSQL
instance at DATABASE_URL and are skipped when it cannot be reached.
"""
