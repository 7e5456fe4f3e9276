"""Bootstrap orchestrator.

Executes the plan produced by the step resolver::

    Idle -> Resolving -> Building -> Launching -> Settling -> Connecting
         -> Executing -> Done | Failed(compensated) | Failed(uncompensated)

States are skipped when the resolver finds them unnecessary. Once a container
has been launched by the current invocation, any failure while settling,
connecting or executing SQL removes that container before the failure is
re-raised. A container that was already running is never touched.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from dbstrap.domain.errors import (
    BootstrapError,
    CompensationFailure,
    DatabaseFailure,
    ExitFailure,
)
from dbstrap.domain.steps import Action, Plan, Step, resolve
from dbstrap.domain.value_objects import RuntimeSnapshot

if TYPE_CHECKING:
    from dbstrap.config import DatabaseSettings, RuntimeSettings, SqlPayloads
    from dbstrap.interfaces.container_runtime import ContainerRuntime, ProcessHandle
    from dbstrap.interfaces.database import DatabaseClient

logger = logging.getLogger(__name__)

PROVISIONING = frozenset({Action.BUILD_IMAGE, Action.LAUNCH_CONTAINER})


class State(str, Enum):
    """Lifecycle states of one orchestrator invocation."""

    IDLE = "Idle"
    RESOLVING = "Resolving"
    BUILDING = "Building"
    LAUNCHING = "Launching"
    SETTLING = "Settling"
    CONNECTING = "Connecting"
    EXECUTING = "Executing"
    DONE = "Done"
    FAILED_COMPENSATED = "Failed(compensated)"
    FAILED_UNCOMPENSATED = "Failed(uncompensated)"


@dataclass(frozen=True)
class BootstrapOutcome:
    """Result of a successful invocation.

    Attributes:
        step: The step that was requested.
        actions: The actions that were executed, in order.
        launched: True if this invocation launched a fresh container.
    """

    step: Step
    actions: tuple[Action, ...]
    launched: bool


class BootstrapOrchestrator:  # pylint: disable=too-many-instance-attributes
    """Sequences build, launch, settle, connect and SQL execution.

    Args:
        runtime: Container runtime used to list, build, launch and kill.
        database: Database client used to connect and execute SQL batches.
        payloads: The init and seed SQL scripts.
        runtime_settings: Image name, build context, ports and timings.
        database_settings: Coordinates of the database inside the container.
        sleep: Suspends execution for the given number of seconds. This is
            the only suspension point; tests inject a recorder.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        runtime: ContainerRuntime,
        database: DatabaseClient,
        payloads: SqlPayloads,
        *,
        runtime_settings: RuntimeSettings,
        database_settings: DatabaseSettings,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.runtime = runtime
        self.database = database
        self.payloads = payloads
        self.runtime_settings = runtime_settings
        self.database_settings = database_settings
        self._sleep = sleep
        self.state = State.IDLE
        self._executed: list[Action] = []

    # --- resolution ---------------------------------------------------------

    def snapshot(self) -> RuntimeSnapshot:
        """Observe the images and containers currently visible to the runtime.

        Raises:
            RuntimeFailure: If the runtime cannot be listed.
        """
        return RuntimeSnapshot(
            images=tuple(self.runtime.list_images()),
            containers=tuple(self.runtime.list_containers()),
        )

    def plan(self, step: Step) -> Plan:
        """Resolve ``step`` against a fresh snapshot of the runtime.

        ``build`` never needs the runtime state, so no snapshot is taken for it.
        """
        if step is Step.BUILD:
            return resolve(step, RuntimeSnapshot(), self.runtime_settings.image_name)
        return resolve(step, self.snapshot(), self.runtime_settings.image_name)

    # --- execution ----------------------------------------------------------

    def execute(self, step: Step) -> BootstrapOutcome:
        """Run ``step`` and every prerequisite it still needs.

        Returns:
            The outcome of the invocation.

        Raises:
            BootstrapError: The typed failure that ended the invocation.
        """
        self._executed = []
        self.state = State.IDLE
        self._transition(State.RESOLVING)
        try:
            plan = self.plan(step)
            logger.info(
                "Plan for '%s': %s",
                step.value,
                ", ".join(a.value for a in plan) or "nothing to do",
            )
            handle = self._provision([a for a in plan if a in PROVISIONING])
        except BootstrapError:
            self._transition(State.FAILED_UNCOMPENSATED)
            raise

        remaining = [a for a in plan if a not in PROVISIONING]
        if handle is None:
            try:
                self._database_phase(remaining)
            except BootstrapError:
                self._transition(State.FAILED_UNCOMPENSATED)
                raise
        else:
            self._compensated_database_phase(handle, remaining)

        self._transition(State.DONE)
        return BootstrapOutcome(
            step=step, actions=tuple(self._executed), launched=handle is not None
        )

    def _provision(self, actions: Sequence[Action]) -> ProcessHandle | None:
        handle = None
        for action in actions:
            if action is Action.BUILD_IMAGE:
                self._build()
            else:
                handle = self._launch()
        return handle

    def _build(self) -> None:
        self._transition(State.BUILDING)
        settings = self.runtime_settings
        handle = self.runtime.build(settings.build_context, settings.image_name)
        self._check_exit(handle)
        self._executed.append(Action.BUILD_IMAGE)

    def _launch(self) -> ProcessHandle:
        self._transition(State.LAUNCHING)
        settings = self.runtime_settings
        handle = self.runtime.run(
            settings.image_name, settings.host_port, settings.container_port
        )
        self._check_exit(handle)
        self._executed.append(Action.LAUNCH_CONTAINER)
        return handle

    def _check_exit(self, handle: ProcessHandle) -> None:
        status = self.runtime.wait(handle)
        if status != 0:
            raise ExitFailure(handle.command, status)

    def _compensated_database_phase(
        self, handle: ProcessHandle, actions: Sequence[Action]
    ) -> None:
        try:
            self._database_phase(actions)
        except BaseException as failure:  # pylint: disable=broad-exception-caught
            logger.error("Bootstrap failed, removing the launched container")
            try:
                self.runtime.kill(handle)
            except Exception as cleanup_error:  # pylint: disable=broad-exception-caught
                self._transition(State.FAILED_UNCOMPENSATED)
                raise CompensationFailure(failure, cleanup_error) from failure
            self._transition(State.FAILED_COMPENSATED)
            raise

    def _database_phase(self, actions: Sequence[Action]) -> None:
        with ExitStack() as stack:
            connection: Any = None
            for action in actions:
                if action is Action.SETTLE:
                    self._settle()
                elif action is Action.CONNECT:
                    connection = stack.enter_context(self._connect())
                else:
                    self._execute_sql(connection, action)
                self._executed.append(action)

    def _settle(self) -> None:
        self._transition(State.SETTLING)
        seconds = self.runtime_settings.settle_seconds
        logger.info("Waiting %.1fs for the database to accept connections", seconds)
        self._sleep(seconds)

    def _connect(self):
        self._transition(State.CONNECTING)
        attempts = self.runtime_settings.connect_attempts
        delay = self.runtime_settings.retry_backoff
        for attempt in range(1, attempts + 1):
            try:
                return self.database.connect(self.database_settings.url)
            except DatabaseFailure as e:
                if attempt == attempts:
                    raise
                logger.info(
                    "Connection attempt %d/%d failed (%s), retrying in %.1fs",
                    attempt,
                    attempts,
                    e,
                    delay,
                )
                self._sleep(delay)
                delay *= 2
        raise AssertionError("unreachable")  # pragma: no cover

    def _execute_sql(self, connection: Any, action: Action) -> None:
        self._transition(State.EXECUTING)
        sql = self.payloads.init if action is Action.EXECUTE_INIT else self.payloads.seed
        logger.info("Executing %s", action.value)
        self.database.batch_execute(connection, sql)

    def _transition(self, state: State) -> None:
        logger.debug("State: %s -> %s", self.state.value, state.value)
        self.state = state
