"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits log messages on a
project logger and a third-party logger, fixtures to register it, a
CliRunner, an isolated filesystem, and a way to run the step commands
against an orchestrator wired to in-memory fakes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
import pytest
from click.testing import CliRunner

from dbstrap.bootstrap import AppContainer, build_orchestrator
from dbstrap.config import Settings, SqlPayloads
from dbstrap.entrypoints.cli import steps
from dbstrap.entrypoints.cli.main import dbstrap
from tests.helpers.fakes import FakeDatabase, FakeRuntime, RecordingSleep

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests."""
    logger = logging.getLogger("dbstrap.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and the sections Click-Extra keeps."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command on `dbstrap` for one test."""
    dbstrap.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(dbstrap, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def cli_calls() -> list[str]:
    """Journal shared by the fakes behind the CLI."""
    return []


@pytest.fixture
def cli_runtime(cli_calls) -> FakeRuntime:
    """Fake runtime used by the step commands."""
    return FakeRuntime(calls=cli_calls)


@pytest.fixture
def cli_database(cli_calls) -> FakeDatabase:
    """Fake database used by the step commands."""
    return FakeDatabase(calls=cli_calls)


@pytest.fixture
def fake_bootstrap(
    monkeypatch, cli_runtime, cli_database, cli_calls
) -> Callable[[dict[str, str] | None], None]:
    """Make the step commands use fakes instead of Docker and PostgreSQL.

    Returns a function that installs the replacement, optionally with extra
    ``DBSTRAP_*`` variables read as the environment.
    """

    def install(environ: dict[str, str] | None = None) -> None:
        def fake() -> AppContainer:
            settings = Settings.from_env(environ or {})
            orchestrator = build_orchestrator(
                settings,
                runtime=cli_runtime,
                database=cli_database,
                payloads=SqlPayloads(init="init", seed="seed"),
                sleep=RecordingSleep(cli_calls),
            )
            return AppContainer(settings=settings, orchestrator=orchestrator)

        monkeypatch.setattr(steps, "bootstrap", fake)

    return install
