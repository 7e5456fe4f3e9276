"""Unit tests for SqlAlchemyDatabase.batch_execute error translation."""

from types import SimpleNamespace

import pytest

from dbstrap.adapters.db import SqlAlchemyDatabase
from dbstrap.adapters.db.dialects import UnsupportedDialect
from dbstrap.domain.errors import DatabaseFailure


class DriverError(Exception):
    """Stands in for the DBAPI ``Error`` base class."""


class RecordingConnection:
    """Connection-like object reporting a backend without a script runner."""

    def __init__(self, name: str):
        self.dialect = SimpleNamespace(
            name=name, loaded_dbapi=SimpleNamespace(Error=DriverError)
        )
        self.calls = []

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")


def test_unsupported_backend_is_a_database_failure():
    """A backend without a script runner fails before anything is sent."""
    connection = RecordingConnection("mysql")

    with pytest.raises(DatabaseFailure, match="Cannot execute SQL batch") as exc_info:
        SqlAlchemyDatabase().batch_execute(connection, "SELECT 1;")

    assert isinstance(exc_info.value.cause, UnsupportedDialect)
    assert connection.calls == []
