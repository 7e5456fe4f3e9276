"""DBSTRAP step commands: ``build``, ``run``, ``init`` and ``seed``.

Each command runs its step and every prerequisite step it still needs, in
this order::

    build -> run -> init -> seed

Behavior
- Settings come from ``DBSTRAP_*`` environment variables; commands take no
  flags of their own.
- Human-oriented notices go to **stderr**; stdout belongs to ``docker``.

Failure modes
- Invalid ``DBSTRAP_*`` value → ``ClickException`` naming the variable.
- Any bootstrap failure → error line on stderr and exit status 1.
"""

from __future__ import annotations

import logging

import click

from dbstrap.bootstrap import bootstrap
from dbstrap.config import InvalidSettingError
from dbstrap.domain.errors import BootstrapError, CompensationFailure
from dbstrap.domain.steps import Step
from dbstrap.logging import log_settings

from .helpers import error, sanitize_url, success, warn

logger = logging.getLogger(__name__)

FAILURE_EXIT_CODE = 1


def run_step(step: Step) -> None:
    """Execute ``step`` through a freshly bootstrapped orchestrator."""
    try:
        app = bootstrap()
    except InvalidSettingError as e:
        raise click.ClickException(str(e)) from e
    log_settings(logger, app.settings)

    try:
        outcome = app.orchestrator.execute(step)
    except BootstrapError as e:
        logger.debug("Step '%s' failed", step.value, exc_info=True)
        error(str(e))
        if isinstance(e, CompensationFailure):
            warn(
                f"Check `{app.settings.runtime.docker_command} ps` for a leftover "
                f"{app.settings.runtime.image_name} container."
            )
        raise click.exceptions.Exit(FAILURE_EXIT_CODE) from e

    image = app.settings.runtime.image_name
    if not outcome.actions:
        warn(f"A container from {image} is already running; nothing to do.")
    elif step is Step.BUILD:
        success(f"Built {image}.")
    elif step is Step.RUN:
        success(f"Started {image} on port {app.settings.runtime.host_port}.")
    else:
        verb = "Initialized" if step is Step.INIT else "Seeded"
        success(f"{verb} {sanitize_url(app.settings.database.url)}")


@click.command()
def build() -> None:
    """Build the postgres docker image."""
    run_step(Step.BUILD)


@click.command()
def run() -> None:
    """Run the postgres docker image (building it first if needed)."""
    run_step(Step.RUN)


@click.command()
def init() -> None:
    """Initialize the database in the postgres container."""
    run_step(Step.INIT)


@click.command()
def seed() -> None:
    """Seed dummy data into the postgres container."""
    run_step(Step.SEED)


STEP_COMMANDS = (build, run, init, seed)
