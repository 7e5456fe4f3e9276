"""Docker implementation of the container runtime.

Listing goes through the Docker SDK; building and launching spawn the
``docker`` binary so the user sees its usual build output. Containers are
launched detached (``docker run -d``): the spawned process exits once the
container is started and prints the container id, which is kept on the
handle so the container itself can be removed during compensation.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import docker
import requests
from docker.errors import DockerException, NotFound

from dbstrap.domain.errors import CommandNotFoundError, RuntimeFailure
from dbstrap.domain.value_objects import ContainerDescriptor, ImageDescriptor
from dbstrap.interfaces.container_runtime import ContainerRuntime

logger = logging.getLogger(__name__)

# The SDK lets transport errors from requests escape unwrapped.
DAEMON_ERRORS = (DockerException, requests.RequestException)


@dataclass
class DockerProcess:
    """A spawned ``docker`` process and, for launches, the container it started."""

    command: str
    args: tuple[str, ...]
    popen: subprocess.Popen = field(repr=False)
    container_id: str | None = None


class DockerRuntime(ContainerRuntime):
    """Container runtime driving a local Docker daemon.

    Args:
        command: Name (or path) of the docker binary.
        client_factory: Returns a Docker SDK client; called lazily, once.
    """

    def __init__(
        self,
        command: str = "docker",
        client_factory: Callable[[], docker.DockerClient] = docker.from_env,
    ) -> None:
        self.command = command
        self._client_factory = client_factory
        self._client: docker.DockerClient | None = None

    @property
    def client(self) -> docker.DockerClient:
        """The Docker SDK client, created on first use."""
        if self._client is None:
            try:
                self._client = self._client_factory()
            except DAEMON_ERRORS as e:
                raise RuntimeFailure("Cannot reach the Docker daemon", e) from e
        return self._client

    # --- listing ------------------------------------------------------------

    def list_images(self) -> Sequence[ImageDescriptor]:
        try:
            images = self.client.images.list()
        except DAEMON_ERRORS as e:
            raise RuntimeFailure("Cannot list docker images", e) from e
        return [
            ImageDescriptor(id=image.id, repo_tags=frozenset(image.tags))
            for image in images
        ]

    def list_containers(self) -> Sequence[ContainerDescriptor]:
        try:
            containers = self.client.containers.list(sparse=True)
        except DAEMON_ERRORS as e:
            raise RuntimeFailure("Cannot list docker containers", e) from e
        return [
            ContainerDescriptor(id=c.id, image=c.attrs.get("Image", ""))
            for c in containers
        ]

    # --- processes ----------------------------------------------------------

    def build(self, context: Path, tag: str) -> DockerProcess:
        return self._spawn(("build", str(context), "-t", tag))

    def run(self, image: str, host_port: int, container_port: int) -> DockerProcess:
        return self._spawn(
            ("run", "-d", "-p", f"{host_port}:{container_port}", image),
            capture=True,
        )

    def wait(self, handle: DockerProcess) -> int:
        if handle.popen.stdout is None:
            return handle.popen.wait()
        out, _ = handle.popen.communicate()
        if handle.popen.returncode == 0 and out.strip():
            handle.container_id = out.strip().splitlines()[-1]
            logger.info("Started container %s", handle.container_id[:12])
        return handle.popen.returncode

    def kill(self, handle: DockerProcess) -> None:
        if handle.container_id is None:
            if handle.popen.poll() is None:
                logger.info("Killing `%s %s`", handle.command, handle.args[0])
                try:
                    handle.popen.kill()
                    handle.popen.wait()
                except OSError as e:
                    raise RuntimeFailure("Cannot kill docker process", e) from e
            return
        logger.info("Removing container %s", handle.container_id[:12])
        try:
            self.client.containers.get(handle.container_id).remove(force=True)
        except NotFound:
            logger.warning("Container %s is already gone", handle.container_id[:12])
        except DAEMON_ERRORS as e:
            raise RuntimeFailure(
                f"Cannot remove container {handle.container_id[:12]}", e
            ) from e

    def _spawn(self, args: tuple[str, ...], *, capture: bool = False) -> DockerProcess:
        argv = [self.command, *args]
        logger.info("Running `%s`", " ".join(argv))
        try:
            popen = subprocess.Popen(  # pylint: disable=consider-using-with
                argv,
                stdout=subprocess.PIPE if capture else None,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(self.command, e) from e
        except OSError as e:
            raise RuntimeFailure(f"Cannot run {self.command}", e) from e
        return DockerProcess(command=self.command, args=args, popen=popen)
