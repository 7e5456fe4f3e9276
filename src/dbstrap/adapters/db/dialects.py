"""Per-backend execution of multi-statement SQL scripts.

The init and seed payloads are opaque scripts of several statements. Each
backend needs its own driver-level call to run such a script in one go:

- **PostgreSQL** (psycopg 3): a statement without parameters, which the
  driver accepts as a whole script.
- **SQLite**: ``executescript`` on the raw ``sqlite3`` connection.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class UnsupportedDialect(Exception):
    """Raised when no script runner exists for a database backend."""


class DialectName(str, Enum):
    """SQLAlchemy dialect names with a script runner."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def of(cls, connection: Connection) -> DialectName:
        """Return the dialect of ``connection``.

        Raises:
            UnsupportedDialect: For any other backend.
        """
        name = connection.dialect.name
        try:
            return cls(name)
        except ValueError as e:
            raise UnsupportedDialect(f"No script runner for the {name!r} backend") from e


def _run_postgres(connection: Connection, sql: str) -> None:
    connection.execution_options(no_parameters=True).exec_driver_sql(sql)


def _run_sqlite(connection: Connection, sql: str) -> None:
    connection.connection.driver_connection.executescript(sql)


SCRIPT_RUNNERS: dict[DialectName, Callable[[Connection, str], None]] = {
    DialectName.POSTGRES: _run_postgres,
    DialectName.SQLITE: _run_sqlite,
}


def run_script(connection: Connection, sql: str) -> None:
    """Run ``sql`` on ``connection`` with the runner of its backend.

    Raises:
        UnsupportedDialect: If the backend has no runner.
    """
    SCRIPT_RUNNERS[DialectName.of(connection)](connection, sql)
