"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Email Uniqueness:
-----------------
The users table carries a UNIQUE constraint on email. The domain's
find_by_email() pre-check cannot prevent two concurrent inserts of the
same address; the constraint does, and the resulting UniqueViolation is
translated into the domain's DuplicateEmail exception here.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from psycopg import errors, sql
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateEmail
from src.domain.ports import Account, Gender, NewAccount, Role, VerificationRecord

logger = logging.getLogger(__name__)

_ACCOUNT_COLUMNS = "id, first_name, family_name, email, password_hash, gender, role"

# Columns update() may write; id is immutable
_MUTABLE_COLUMNS = frozenset(
    {"first_name", "family_name", "email", "password_hash", "gender", "role"}
)


def _row_to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        first_name=row[1],
        family_name=row[2],
        email=row[3],
        password_hash=row[4],
        gender=Gender(row[5]),
        role=Role(row[6]),
    )


def _db_value(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_id(self, account_id: int) -> Account | None:
        query = f"SELECT {_ACCOUNT_COLUMNS} FROM users WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (account_id,))
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None

    def find_by_email(self, email: str) -> Account | None:
        query = f"SELECT {_ACCOUNT_COLUMNS} FROM users WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (email,))
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None

    def insert(self, fields: NewAccount) -> Account:
        """
        Insert a new account; the database assigns the id.

        Raises:
            DuplicateEmail: If the email violates the unique constraint
        """
        query = f"""
            INSERT INTO users (first_name, family_name, email, password_hash, gender, role)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_ACCOUNT_COLUMNS}
        """
        params = (
            fields.first_name,
            fields.family_name,
            fields.email,
            fields.password_hash,
            _db_value(fields.gender),
            _db_value(fields.role),
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            raise DuplicateEmail(fields.email) from e
        return _row_to_account(row)

    def update(self, account_id: int, fields: Mapping[str, object]) -> Account | None:
        """
        Update the given columns and return the new row.

        Column names are checked against a whitelist and quoted as
        identifiers; values are always passed as parameters.
        """
        unknown = set(fields) - _MUTABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")
        if not fields:
            return self.find_by_id(account_id)

        columns = list(fields)
        query = sql.SQL("UPDATE users SET {assignments} WHERE id = %s RETURNING {returning}").format(
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(column)) for column in columns
            ),
            returning=sql.SQL(_ACCOUNT_COLUMNS),
        )
        params = [_db_value(fields[column]) for column in columns] + [account_id]

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            raise DuplicateEmail(str(fields.get("email"))) from e
        return _row_to_account(row) if row is not None else None

    def delete(self, account_id: int) -> Account | None:
        """Delete an account; its verification records go with it (CASCADE)."""
        query = f"DELETE FROM users WHERE id = %s RETURNING {_ACCOUNT_COLUMNS}"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (account_id,))
            row = cursor.fetchone()
            conn.commit()
        return _row_to_account(row) if row is not None else None

    def list_all(self) -> list[Account]:
        query = f"SELECT {_ACCOUNT_COLUMNS} FROM users ORDER BY id"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query)
            rows = cursor.fetchall()
        return [_row_to_account(row) for row in rows]

    def create_verification_record(self, record: VerificationRecord) -> None:
        query = """
            INSERT INTO email_verifications (user_id, token, token_expiry, confirm_code)
            VALUES (%s, %s, %s, %s)
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                query,
                (record.account_id, record.token, record.token_expiry, record.confirm_code),
            )
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
