"""
PostgreSQL repository adapter - Implements HubRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with an async connection pool.

Column names come from the request body, so they are always composed
with ``psycopg.sql.Identifier`` and values are always bound as parameters.
The API treats ids as opaque strings. They are parsed with
``parse_hub_id`` before any query, so lookups use the primary key and an
id that is not a canonical integer is simply not found.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Any

import psycopg
from psycopg import errors, sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from hubs_api.adapters.repository.fields import parse_hub_id, writable_fields
from hubs_api.domain.exceptions import HubStoreError, InvalidHubData
from hubs_api.domain.ports import Hub

logger = logging.getLogger(__name__)

# Failures caused by the submitted data rather than by the database
_DATA_ERRORS = (psycopg.IntegrityError, psycopg.DataError, errors.UndefinedColumn)


@contextmanager
def _translate_errors() -> Iterator[None]:
    """Re-raise psycopg errors as domain errors, keeping the SQLSTATE."""
    try:
        yield
    except _DATA_ERRORS as e:
        raise InvalidHubData(str(e).strip(), code=e.sqlstate) from e
    except psycopg.Error as e:
        raise HubStoreError(str(e).strip(), code=e.sqlstate) from e


class PostgresHubRepository:
    """
    Implements HubRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Every method borrows one pooled connection for a single statement.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: Opened psycopg3 AsyncConnectionPool
        """
        self._pool = pool

    async def find(self) -> list[Hub]:
        with _translate_errors():
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute("SELECT * FROM hubs ORDER BY id")
                return await cursor.fetchall()

    async def find_by_id(self, hub_id: str) -> Hub | None:
        key = parse_hub_id(hub_id)
        if key is None:
            return None

        with _translate_errors():
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute("SELECT * FROM hubs WHERE id = %s", (key,))
                return await cursor.fetchone()

    async def add(self, data: Any) -> Hub:
        """
        Insert a hub and return the stored row.

        Uses INSERT ... RETURNING so the generated id and timestamps come
        back in the same round trip.
        """
        fields = writable_fields(data, creating=True)
        columns = list(fields)

        query = sql.SQL("INSERT INTO hubs ({columns}) VALUES ({values}) RETURNING *").format(
            columns=sql.SQL(", ").join([sql.Identifier(column) for column in columns]),
            values=sql.SQL(", ").join([sql.Placeholder()] * len(columns)),
        )

        with _translate_errors():
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, [fields[column] for column in columns])
                hub = await cursor.fetchone()
                await conn.commit()

        logger.debug("Inserted hub %s", hub["id"])
        return hub

    async def update(self, hub_id: str, data: Any) -> Hub | None:
        """
        Update the given columns and refresh ``updated_at``.

        Returns None when no row matched the id.
        """
        fields = writable_fields(data, creating=False)
        key = parse_hub_id(hub_id)
        if key is None:
            return None
        columns = list(fields)

        assignments = sql.SQL(", ").join(
            [sql.SQL("{} = {}").format(sql.Identifier(column), sql.Placeholder()) for column in columns]
        )
        query = sql.SQL(
            "UPDATE hubs SET {assignments}, updated_at = NOW() WHERE id = %s RETURNING *"
        ).format(assignments=assignments)

        with _translate_errors():
            async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                await cursor.execute(query, [*(fields[column] for column in columns), key])
                hub = await cursor.fetchone()
                await conn.commit()
                return hub

    async def remove(self, hub_id: str) -> int:
        key = parse_hub_id(hub_id)
        if key is None:
            return 0

        with _translate_errors():
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute("DELETE FROM hubs WHERE id = %s", (key,))
                await conn.commit()
                return cursor.rowcount


def migration_files() -> list[Traversable]:
    """
    List the SQL migrations shipped inside the package, in execution order.

    Raises:
        RuntimeError: If the package carries no migrations
    """
    migrations_dir = resources.files("hubs_api").joinpath("migrations")

    if not migrations_dir.is_dir():
        raise RuntimeError(f"Migrations directory not found: {migrations_dir}")

    sql_files = sorted(
        (entry for entry in migrations_dir.iterdir() if entry.name.endswith(".sql")),
        key=lambda entry: entry.name,
    )
    if not sql_files:
        raise RuntimeError(f"No migration files found in {migrations_dir}")
    return sql_files


async def run_migrations(pool: AsyncConnectionPool) -> None:
    """
    Execute all SQL migration files from the package's migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: Opened psycopg3 AsyncConnectionPool
    """
    sql_files = migration_files()

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text(encoding="utf-8")

            async with pool.connection() as conn:
                await conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
