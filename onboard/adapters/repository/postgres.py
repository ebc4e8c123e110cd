"""
PostgreSQL repository adapters - Implement the domain repository protocols.

This module provides the PostgreSQL implementations of the domain's
repository ports using psycopg3 with raw SQL.

Integrity Design:
-----------------
1. **Unique constraints**: `identities.email` and `identities.phone` carry
   named UNIQUE constraints. The insert in `create()` is the authoritative
   duplicate check; a `UniqueViolation` is translated into the matching
   `ClaimResult` instead of an error, so a double-submit race yields exactly
   one record.

2. **Row locking**: `verify()` reads the record with SELECT FOR UPDATE so
   the read-check-update sequence is atomic per record.

3. **Constant-time code comparison**: `secrets.compare_digest()` is used for
   verification codes.

Any other database failure is logged and raised as the domain `ServerError`.
"""

import logging
import secrets
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from onboard.domain.exceptions import ServerError
from onboard.domain.ports import (
    ClaimResult,
    IdentityRecord,
    NewStudentProfile,
    StudentProfile,
    VerifyResult,
)

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "identities_email_key"
PHONE_CONSTRAINT = "identities_phone_key"

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

_IDENTITY_COLUMNS = "id, email, phone, credential_hash, verified, created_at"
_PROFILE_COLUMNS = (
    "id, full_name, email, date_of_birth, address, education_background, created_at"
)


class PostgresIdentityRepository:
    """
    Implements IdentityRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> IdentityRecord | None:
        return self._find_one("email", email)

    def find_by_phone(self, phone: str) -> IdentityRecord | None:
        return self._find_one("phone", phone)

    def _find_one(self, column: str, value: str) -> IdentityRecord | None:
        # column is one of two literals above, never caller input
        sql = f"SELECT {_IDENTITY_COLUMNS} FROM identities WHERE {column} = %s"
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(IdentityRecord)) as cursor:
                    cursor.execute(sql, (value,))
                    return cursor.fetchone()
        except psycopg.Error as e:
            logger.error(f"Identity lookup by {column} failed: {e}")
            raise ServerError() from e

    def create(
        self,
        email: str | None,
        phone: str | None,
        credential_hash: str,
        code: str,
        code_ttl_seconds: int,
    ) -> ClaimResult:
        """
        Insert a new unverified identity record.

        Relies on the UNIQUE constraints rather than the caller's earlier
        lookups, so concurrent inserts for the same identifier cannot both
        succeed.

        Returns:
            CREATED, EMAIL_TAKEN or PHONE_TAKEN
        """
        sql = """
            INSERT INTO identities (email, phone, credential_hash, verification_code, code_expires_at)
            VALUES (%s, %s, %s, %s, NOW() + %s::double precision * INTERVAL '1 second')
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email, phone, credential_hash, code, code_ttl_seconds))
                conn.commit()
        except UniqueViolation as e:
            constraint = e.diag.constraint_name
            logger.info(f"Identity insert rejected by {constraint}")
            if constraint == PHONE_CONSTRAINT:
                return ClaimResult.PHONE_TAKEN
            return ClaimResult.EMAIL_TAKEN
        except psycopg.Error as e:
            logger.error(f"Identity insert failed: {e}")
            raise ServerError() from e

        return ClaimResult.CREATED

    def verify(
        self,
        email: str,
        phone: str,
        code: str | None,
        require_code: bool,
    ) -> VerifyResult:
        """
        Mark the matching record verified.

        Email match wins over phone match. A record that is already
        verified returns ALREADY_VERIFIED without being touched. When a
        code is supplied (or required) it must equal the stored one and
        be unexpired; on success the code is cleared so it is single-use.
        """
        select_sql = """
            SELECT id, verified, verification_code, code_expires_at <= NOW()
            FROM identities
            WHERE {column} = %s
            FOR UPDATE
        """

        verify_sql = """
            UPDATE identities
            SET verified = TRUE,
                verified_at = NOW(),
                verification_code = NULL,
                code_expires_at = NULL
            WHERE id = %s
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(select_sql.format(column="email"), (email,))
                row = cursor.fetchone()
                if row is None:
                    cursor.execute(select_sql.format(column="phone"), (phone,))
                    row = cursor.fetchone()

                if row is None:
                    conn.commit()
                    return VerifyResult.NOT_FOUND

                record_id, verified, stored_code, expired = row

                if verified:
                    conn.commit()
                    return VerifyResult.ALREADY_VERIFIED

                if code is not None or require_code:
                    code_valid = stored_code is not None and code is not None
                    if code_valid:
                        code_valid = secrets.compare_digest(stored_code.encode(), code.encode())
                    if not code_valid:
                        conn.commit()
                        return VerifyResult.INVALID_CODE
                    if expired:
                        conn.commit()
                        return VerifyResult.EXPIRED

                cursor.execute(verify_sql, (record_id,))
                conn.commit()
        except psycopg.Error as e:
            logger.error(f"Identity verification failed: {e}")
            raise ServerError() from e

        logger.info(f"Identity {record_id} verified")
        return VerifyResult.SUCCESS


class PostgresProfileRepository:
    """
    Implements ProfileRepository protocol via psycopg3.

    Separate store from identities: its own table and, optionally,
    its own database.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create(self, profile: NewStudentProfile) -> StudentProfile:
        sql = f"""
            INSERT INTO student_profiles (full_name, email, date_of_birth, address, education_background)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_PROFILE_COLUMNS}
        """
        params = (
            profile.full_name,
            profile.email,
            profile.date_of_birth,
            profile.address,
            profile.education_background,
        )

        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(StudentProfile)) as cursor:
                    cursor.execute(sql, params)
                    stored = cursor.fetchone()
                conn.commit()
        except psycopg.Error as e:
            logger.error(f"Profile insert failed: {e}")
            raise ServerError() from e

        return stored

    def list_all(self) -> list[StudentProfile]:
        sql = f"SELECT {_PROFILE_COLUMNS} FROM student_profiles ORDER BY id"
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=class_row(StudentProfile)) as cursor:
                    cursor.execute(sql)
                    return cursor.fetchall()
        except psycopg.Error as e:
            logger.error(f"Profile listing failed: {e}")
            raise ServerError() from e

    def count_by_email(self, email: str) -> int:
        sql = "SELECT COUNT(*) FROM student_profiles WHERE lower(email) = lower(%s)"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                return cursor.fetchone()[0]
        except psycopg.Error as e:
            logger.error(f"Profile email count failed: {e}")
            raise ServerError() from e


def run_migrations(pool: ConnectionPool, store: str) -> None:
    """
    Execute all SQL migration files for one store.

    Migrations live in `migrations/<store>/` next to this module and are
    executed in sorted order (alphabetically by filename). Each migration
    should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        store: Migration subdirectory, "identity" or "profiles"
    """
    migrations_dir = MIGRATIONS_DIR / store

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info(f"No migration files found for {store}")
        return

    logger.info(f"Running {len(sql_files)} {store} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {store}/{sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {store}/{sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {store}/{sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
