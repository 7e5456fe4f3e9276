"""Logging helpers used by the DBSTRAP CLI.

Console logging goes through Rich on stderr, so the output of the spawned
``docker`` processes on stdout stays readable. A "flight recorder" keeps the
most recent records in memory at DEBUG granularity and writes them to a file
once something goes wrong.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import docker
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from dbstrap.config import Settings

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "dbstrap"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other libraries with a short ``[library]`` prefix.

    Records from ``dbstrap.*`` loggers get an empty prefix. The filter never
    drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # e.g. "docker.utils.config" -> "[docker]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Return a RichHandler writing to stderr.

    Args:
        level: Minimum level for console output (DEBUG when ``debug_mode``).
        debug_mode: Show timestamps, logger names and source locations.
        color: Disable to match click-extra's ``--no-color``.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s %(name)s: %(message)s")
        )
    else:
        handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Return an in-memory handler that dumps its buffer to ``path``.

    The buffer is flushed when a record at ``flush_level`` or above arrives,
    when it holds ``capacity`` records, or on close if ``flush_on_close``.

    Args:
        path: File receiving flushed records (truncated on open).
        capacity: Number of records kept in memory.
        flush_level: Level that triggers a flush.
        flush_on_close: Also flush when the handler is closed.

    Returns:
        MemoryHandler: Handler targeting a DEBUG-level FileHandler.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s "
            "%(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line summary at INFO and environment diagnostics at DEBUG.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Application version string to display.
        level: Effective console logging level (numeric).
        handlers: Handlers attached to the root logger.
        log_path: Flight-recorder output file, or None.
        flight_recorder: Whether the flight recorder is enabled.
        logger_levels: Per-logger level overrides.
    """
    logger.info(
        "DBSTRAP %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )
    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Docker SDK: %s", docker.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug("Flight recorder: path=%s", log_path or "<none>")
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
    )


def log_settings(logger: Logger, settings: Settings) -> None:
    """Log the resolved settings at DEBUG, with the password redacted."""
    runtime, database = settings.runtime, settings.database
    logger.debug(
        "Image: %s (context %s, binary %s)",
        runtime.image_name,
        runtime.build_context,
        runtime.docker_command,
    )
    logger.debug(
        "Ports: host %s -> container %s", runtime.host_port, runtime.container_port
    )
    logger.debug(
        "Database: %s@%s:%s/%s",
        database.user,
        database.host,
        database.port,
        database.db_name,
    )
    logger.debug(
        "Settle: %.1fs, connect attempts: %d, backoff: %.1fs",
        runtime.settle_seconds,
        runtime.connect_attempts,
        runtime.retry_backoff,
    )
