"""SQLAlchemy implementation of the database client.

Scripts are submitted to the driver untouched, as one batch, by the runner
of the connection's backend (see `dialects`). Driver and SQLAlchemy errors
are translated into `DatabaseFailure`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from dbstrap.domain.errors import DatabaseFailure
from dbstrap.interfaces.database import DatabaseClient

from .dialects import UnsupportedDialect, run_script
from .engine import make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


@contextmanager
def _closing(connection: Connection, engine: Engine) -> Iterator[Connection]:
    try:
        yield connection
    finally:
        connection.close()
        engine.dispose()


class SqlAlchemyDatabase(DatabaseClient):
    """Database client backed by a SQLAlchemy engine.

    Args:
        echo: If True, SQLAlchemy logs every statement it sends.
    """

    def __init__(self, *, echo: bool = False) -> None:
        self._echo = echo

    def connect(self, url: str):
        """Open a connection to ``url`` eagerly.

        The connection is established before this method returns, so an
        unreachable database fails here rather than on first use.

        Raises:
            DatabaseFailure: If the URL is invalid or the database unreachable.
        """
        safe_url = make_url(url).render_as_string(hide_password=True)
        try:
            engine = make_engine(url, echo=self._echo)
        except ArgumentError as e:
            raise DatabaseFailure(f"Invalid database URL {safe_url}", e) from e
        logger.debug("Connecting to %s", safe_url)
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            engine.dispose()
            raise DatabaseFailure(f"Cannot connect to {safe_url}", e) from e
        return _closing(connection, engine)

    def batch_execute(self, connection: Connection, sql: str) -> None:
        """Execute ``sql`` as a single batch and commit.

        Raises:
            DatabaseFailure: If the script fails; the transaction is rolled back.
        """
        driver_error = connection.dialect.loaded_dbapi.Error
        try:
            run_script(connection, sql)
            connection.commit()
        except UnsupportedDialect as e:
            raise DatabaseFailure("Cannot execute SQL batch", e) from e
        except (SQLAlchemyError, driver_error) as e:
            connection.rollback()
            raise DatabaseFailure("SQL batch failed", e) from e
        logger.debug("Executed SQL batch of %d characters", len(sql))
