"""Configuration utilities for DBSTRAP.

This module centralizes the development coordinates of the bootstrapped
database, the container runtime settings, and the SQL payloads applied by the
``init`` and ``seed`` steps. Every value has a development default and can be
overridden through ``DBSTRAP_*`` environment variables.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path

from sqlalchemy.engine import URL

ENV_PREFIX = "DBSTRAP_"  # pragma: no mutate

DEFAULT_IMAGE_NAME = "dbstrap-postgres"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_HOST_PORT = 45432
DEFAULT_CONTAINER_PORT = 5432
DEFAULT_DEV_CREDENTIAL = "docker"
DEFAULT_SETTLE_SECONDS = 5.0


class InvalidSettingError(ValueError):
    """Raised when a ``DBSTRAP_*`` environment variable has an invalid value."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"{name}={value!r} is invalid: expected {expected}.")
        self.name = name
        self.value = value


@dataclass(frozen=True)
class DatabaseSettings:
    """Coordinates of the development database inside the container.

    Defaults are the literals baked into the image; override them to point
    at an ephemeral test database.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_HOST_PORT
    db_name: str = DEFAULT_DEV_CREDENTIAL
    user: str = DEFAULT_DEV_CREDENTIAL
    password: str = DEFAULT_DEV_CREDENTIAL
    connect_timeout: int = 10

    @property
    def url(self) -> str:
        """SQLAlchemy URL (psycopg 3 driver) for these coordinates."""
        return URL.create(
            "postgresql+psycopg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db_name,
            query={"connect_timeout": str(self.connect_timeout)},
        ).render_as_string(hide_password=False)


@dataclass(frozen=True)
class RuntimeSettings:
    """How the image is built and the container launched."""

    image_name: str = DEFAULT_IMAGE_NAME
    build_context: Path = Path(".")
    docker_command: str = "docker"
    host_port: int = DEFAULT_HOST_PORT
    container_port: int = DEFAULT_CONTAINER_PORT
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    connect_attempts: int = 1
    retry_backoff: float = 1.0


@dataclass(frozen=True)
class Settings:
    """All settings of one bootstrap invocation."""

    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    runtime: RuntimeSettings = field(default_factory=RuntimeSettings)
    init_sql_path: Path | None = None
    seed_sql_path: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``DBSTRAP_*`` environment variables.

        Recognized variables: ``DBSTRAP_DB_HOST``, ``DBSTRAP_DB_PORT``,
        ``DBSTRAP_DB_NAME``, ``DBSTRAP_DB_USER``, ``DBSTRAP_DB_PASSWORD``,
        ``DBSTRAP_IMAGE_NAME``, ``DBSTRAP_BUILD_CONTEXT``,
        ``DBSTRAP_DOCKER_COMMAND``, ``DBSTRAP_SETTLE_SECONDS``,
        ``DBSTRAP_CONNECT_ATTEMPTS``, ``DBSTRAP_RETRY_BACKOFF``,
        ``DBSTRAP_INIT_SQL`` and ``DBSTRAP_SEED_SQL``.

        The database port doubles as the host port the container publishes.

        Args:
            environ: Mapping to read from. Defaults to `os.environ`.

        Returns:
            The resolved settings; unset variables keep their defaults.

        Raises:
            InvalidSettingError: If a numeric variable cannot be parsed or is
                out of range.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name) or None

        port = _parse(get("DB_PORT"), "DB_PORT", int, DEFAULT_HOST_PORT, minimum=1)
        database = DatabaseSettings(
            host=get("DB_HOST") or DEFAULT_HOST,
            port=port,
            db_name=get("DB_NAME") or DEFAULT_DEV_CREDENTIAL,
            user=get("DB_USER") or DEFAULT_DEV_CREDENTIAL,
            password=get("DB_PASSWORD") or DEFAULT_DEV_CREDENTIAL,
        )
        runtime = RuntimeSettings(
            image_name=get("IMAGE_NAME") or DEFAULT_IMAGE_NAME,
            build_context=Path(get("BUILD_CONTEXT") or "."),
            docker_command=get("DOCKER_COMMAND") or "docker",
            host_port=port,
            settle_seconds=_parse(
                get("SETTLE_SECONDS"),
                "SETTLE_SECONDS",
                float,
                DEFAULT_SETTLE_SECONDS,
                minimum=DEFAULT_SETTLE_SECONDS,
            ),
            connect_attempts=_parse(
                get("CONNECT_ATTEMPTS"), "CONNECT_ATTEMPTS", int, 1, minimum=1
            ),
            retry_backoff=_parse(
                get("RETRY_BACKOFF"), "RETRY_BACKOFF", float, 1.0, minimum=0
            ),
        )
        init_sql, seed_sql = get("INIT_SQL"), get("SEED_SQL")
        return cls(
            database=database,
            runtime=runtime,
            init_sql_path=Path(init_sql) if init_sql else None,
            seed_sql_path=Path(seed_sql) if seed_sql else None,
        )


def _parse(raw, name, kind, default, *, minimum):
    if raw is None:
        return default
    try:
        value = kind(raw)
    except ValueError as e:
        raise InvalidSettingError(
            ENV_PREFIX + name, raw, f"a {kind.__name__} >= {minimum}"
        ) from e
    if not math.isfinite(value) or value < minimum:
        raise InvalidSettingError(
            ENV_PREFIX + name, raw, f"a {kind.__name__} >= {minimum}"
        )
    return value


@dataclass(frozen=True)
class SqlPayloads:
    """Opaque SQL scripts applied by the ``init`` and ``seed`` steps."""

    init: str
    seed: str


def load_sql_payloads(
    init_path: Path | None = None, seed_path: Path | None = None
) -> SqlPayloads:
    """Load the init and seed SQL scripts.

    Args:
        init_path: Script replacing the packaged ``init.sql``, if given.
        seed_path: Script replacing the packaged ``seed.sql``, if given.

    Returns:
        The loaded scripts, unmodified.

    Raises:
        InvalidSettingError: If an override script cannot be read.
    """
    return SqlPayloads(
        init=_read_script(init_path, "INIT_SQL", "init.sql"),
        seed=_read_script(seed_path, "SEED_SQL", "seed.sql"),
    )


def _read_script(path: Path | None, name: str, packaged: str) -> str:
    if path is None:
        return files("dbstrap.sql").joinpath(packaged).read_text(encoding="utf-8")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidSettingError(
            ENV_PREFIX + name, str(path), "a readable UTF-8 SQL file"
        ) from e
