"""Wire settings, adapters and SQL payloads into an orchestrator."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from dbstrap import config
from dbstrap.adapters.db import SqlAlchemyDatabase
from dbstrap.adapters.docker_runtime import DockerRuntime
from dbstrap.interfaces.container_runtime import ContainerRuntime
from dbstrap.interfaces.database import DatabaseClient
from dbstrap.service_layer.orchestrator import BootstrapOrchestrator


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    settings: config.Settings
    orchestrator: BootstrapOrchestrator


def build_orchestrator(  # pylint: disable=too-many-arguments
    settings: config.Settings,
    *,
    runtime: ContainerRuntime | None = None,
    database: DatabaseClient | None = None,
    payloads: config.SqlPayloads | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> BootstrapOrchestrator:
    """Build an orchestrator, defaulting to the Docker and SQLAlchemy adapters.

    Args:
        settings: Resolved settings of this invocation.
        runtime: Container runtime override (e.g. a fake in tests).
        database: Database client override.
        payloads: SQL payloads override; loaded from the settings otherwise.
        sleep: Realization of the settle delay.
    """
    if payloads is None:
        payloads = config.load_sql_payloads(
            settings.init_sql_path, settings.seed_sql_path
        )
    return BootstrapOrchestrator(
        runtime or DockerRuntime(command=settings.runtime.docker_command),
        database or SqlAlchemyDatabase(),
        payloads,
        runtime_settings=settings.runtime,
        database_settings=settings.database,
        sleep=sleep,
    )


def bootstrap() -> AppContainer:
    """Read settings from the environment and build the orchestrator."""
    settings = config.Settings.from_env()
    return AppContainer(settings=settings, orchestrator=build_orchestrator(settings))
