"""
PostgreSQL repository adapters - Implement the registry repository protocols.

This module provides the PostgreSQL implementation of the domain's
repository ports using psycopg3 with raw SQL.

Connection handling:
Each repository call borrows a connection from the pool with
``with pool.connection()`` and returns it on every exit path, so a
request never holds a connection beyond the call that needs it.

Uniqueness:
The administrators and users tables carry a UNIQUE index on email.
A rejected INSERT/UPDATE surfaces as psycopg's UniqueViolation, which
is re-raised as the domain's DuplicateRecordError.
"""

import logging
import uuid
from pathlib import Path
from typing import Generic, Optional

from psycopg import errors, sql
from psycopg_pool import ConnectionPool

from src.domain.entities import Administrator, SafeHouse, User
from src.domain.exceptions import DuplicateRecordError
from src.domain.ports import IdentityT

logger = logging.getLogger(__name__)

ADMINISTRATORS_TABLE = "administrators"
USERS_TABLE = "users"
SAFE_HOUSES_TABLE = "safe_houses"


class PostgresIdentityRepository(Generic[IdentityT]):
    """
    Implements IdentityRepository protocol via psycopg3.

    One class serves both identity tables; the table name and the
    entity type are passed in. Table names are quoted with
    sql.Identifier, values always go through query parameters.
    """

    def __init__(self, pool: ConnectionPool, table: str, entity_type: type[IdentityT]) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            table: Identity table name (administrators or users)
            entity_type: Administrator or User
        """
        self._pool = pool
        self._table = sql.Identifier(table)
        self._entity_type = entity_type

    def _row_to_entity(self, row: tuple) -> IdentityT:
        id, name, email, password_hash = row
        return self._entity_type._restore(
            id=id, name=name, email=email, password_hash=password_hash
        )

    def _fetch_one(self, where: str, value: object) -> Optional[IdentityT]:
        query = sql.SQL(
            "SELECT id, name, email, password_hash FROM {table} WHERE {column} = %s"
        ).format(table=self._table, column=sql.Identifier(where))

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (value,))
            row = cursor.fetchone()
        return self._row_to_entity(row) if row is not None else None

    def get_by_id(self, id: uuid.UUID) -> Optional[IdentityT]:
        return self._fetch_one("id", id)

    def get_by_email(self, email: str) -> Optional[IdentityT]:
        return self._fetch_one("email", email)

    def get_all(self) -> list[IdentityT]:
        query = sql.SQL("SELECT id, name, email, password_hash FROM {table}").format(
            table=self._table
        )
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query)
            rows = cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    def add(self, entity: IdentityT) -> None:
        """
        Insert a new record.

        Raises:
            DuplicateRecordError: If the email is already stored
        """
        query = sql.SQL(
            "INSERT INTO {table} (id, name, email, password_hash) VALUES (%s, %s, %s, %s)"
        ).format(table=self._table)

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    query, (entity.id, entity.name, entity.email, entity.password_hash)
                )
                conn.commit()
        except errors.UniqueViolation as exc:
            raise DuplicateRecordError(entity.email) from exc

    def update(self, entity: IdentityT) -> None:
        """
        Replace stored fields by id. No-op if the id is absent.

        Raises:
            DuplicateRecordError: If the new email belongs to another record
        """
        query = sql.SQL(
            "UPDATE {table} SET name = %s, email = %s, password_hash = %s WHERE id = %s"
        ).format(table=self._table)

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    query, (entity.name, entity.email, entity.password_hash, entity.id)
                )
                conn.commit()
        except errors.UniqueViolation as exc:
            raise DuplicateRecordError(entity.email) from exc

    def delete(self, id: uuid.UUID) -> None:
        query = sql.SQL("DELETE FROM {table} WHERE id = %s").format(table=self._table)
        with self._pool.connection() as conn:
            conn.execute(query, (id,))
            conn.commit()

    def exists(self, id: uuid.UUID) -> bool:
        query = sql.SQL("SELECT 1 FROM {table} WHERE id = %s").format(table=self._table)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (id,))
            return cursor.fetchone() is not None


def administrator_repository(pool: ConnectionPool) -> PostgresIdentityRepository[Administrator]:
    return PostgresIdentityRepository(pool, ADMINISTRATORS_TABLE, Administrator)


def user_repository(pool: ConnectionPool) -> PostgresIdentityRepository[User]:
    return PostgresIdentityRepository(pool, USERS_TABLE, User)


class PostgresSafeHouseRepository:
    """
    Implements SafeHouseRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def get_by_id(self, id: uuid.UUID) -> Optional[SafeHouse]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                "SELECT id, postal_code, number, complement FROM safe_houses WHERE id = %s",
                (id,),
            )
            row = cursor.fetchone()
        if row is None:
            return None
        return SafeHouse._restore(*row)

    def get_all(self) -> list[SafeHouse]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT id, postal_code, number, complement FROM safe_houses")
            rows = cursor.fetchall()
        return [SafeHouse._restore(*row) for row in rows]

    def add(self, entity: SafeHouse) -> None:
        with self._pool.connection() as conn:
            conn.execute(
                "INSERT INTO safe_houses (id, postal_code, number, complement) "
                "VALUES (%s, %s, %s, %s)",
                (entity.id, entity.postal_code, entity.number, entity.complement),
            )
            conn.commit()

    def update(self, entity: SafeHouse) -> None:
        with self._pool.connection() as conn:
            conn.execute(
                "UPDATE safe_houses SET postal_code = %s, number = %s, complement = %s "
                "WHERE id = %s",
                (entity.postal_code, entity.number, entity.complement, entity.id),
            )
            conn.commit()

    def delete(self, id: uuid.UUID) -> None:
        with self._pool.connection() as conn:
            conn.execute("DELETE FROM safe_houses WHERE id = %s", (id,))
            conn.commit()

    def exists(self, id: uuid.UUID) -> bool:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT 1 FROM safe_houses WHERE id = %s", (id,))
            return cursor.fetchone() is not None


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
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
