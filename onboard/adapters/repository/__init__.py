"""Repository adapters - Database implementations."""

from .postgres import PostgresIdentityRepository, PostgresProfileRepository, run_migrations

__all__ = ["PostgresIdentityRepository", "PostgresProfileRepository", "run_migrations"]
