"""Database client interface for DBSTRAP.

The orchestrator opens one connection per invocation and submits whole SQL
scripts through it. Scripts are opaque: nothing here parses or splits them.
"""

from __future__ import annotations

import abc
from contextlib import AbstractContextManager
from typing import Any


class DatabaseClient(abc.ABC):
    """Contract for a database client.

    Both methods raise `DatabaseFailure` when the database cannot be reached
    or rejects the script.
    """

    @abc.abstractmethod
    def connect(self, url: str) -> AbstractContextManager[Any]:
        """Open a connection to ``url``.

        Returns:
            A context manager yielding the connection and closing it on exit.
        """

    @abc.abstractmethod
    def batch_execute(self, connection: Any, sql: str) -> None:
        """Execute the whole of ``sql`` as one batch and commit it."""
