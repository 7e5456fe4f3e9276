"""Container runtime interface for DBSTRAP.

Defines the ContainerRuntime contract: listing images and containers,
spawning build/run processes, and waiting for or killing them.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from dbstrap.domain.value_objects import ContainerDescriptor, ImageDescriptor

# pylint: disable=too-few-public-methods


class ProcessHandle(Protocol):
    """A spawned runtime process (e.g. ``docker build`` or ``docker run``)."""

    @property
    def command(self) -> str:
        """Name of the binary the process was spawned from."""


class ContainerRuntime(abc.ABC):
    """Contract for a container runtime client.

    Listing failures and spawn failures raise `RuntimeFailure` (or its
    `CommandNotFoundError` refinement). Exit statuses are reported by `wait`
    and never raised here.
    """

    @abc.abstractmethod
    def list_images(self) -> Sequence[ImageDescriptor]:
        """Return the images known to the runtime."""

    @abc.abstractmethod
    def list_containers(self) -> Sequence[ContainerDescriptor]:
        """Return the running containers known to the runtime."""

    @abc.abstractmethod
    def build(self, context: Path, tag: str) -> ProcessHandle:
        """Spawn a process building an image from ``context`` tagged ``tag``."""

    @abc.abstractmethod
    def run(self, image: str, host_port: int, container_port: int) -> ProcessHandle:
        """Spawn a process launching a container from ``image``.

        ``host_port`` on the host is published to ``container_port`` inside the
        container. The container keeps running after the process returns.
        """

    @abc.abstractmethod
    def wait(self, handle: ProcessHandle) -> int:
        """Block until the process terminates and return its exit status."""

    @abc.abstractmethod
    def kill(self, handle: ProcessHandle) -> None:
        """Terminate whatever ``handle`` started.

        Raises:
            RuntimeFailure: If termination fails.
        """
