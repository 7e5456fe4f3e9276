"""Steps, actions and the step resolver.

A *step* is what the caller asks for (``build``, ``run``, ``init``, ``seed``).
Each step implies the ones before it, in this order::

    build -> run -> init -> seed

The resolver turns a requested step into an ordered plan of *actions*,
skipping prerequisites that the observed runtime state already satisfies:

- ``build`` always builds the image.
- ``run`` builds only if no ``<name>:latest`` image exists, then launches.
  Nothing is launched when a container from the image is already running.
- ``init`` reuses a running container if there is one; otherwise it builds
  if needed, launches, waits for the database to settle, and connects.
- ``seed`` resolves like ``init`` and then also executes the seed SQL. Init
  SQL is re-applied even against a running container, so it must be safe to
  run twice (e.g. ``CREATE TABLE IF NOT EXISTS``).
"""

from __future__ import annotations

from enum import Enum

from .value_objects import RuntimeSnapshot


class Step(str, Enum):
    """A unit of orchestration requested by the caller."""

    BUILD = "build"
    RUN = "run"
    INIT = "init"
    SEED = "seed"


class Action(str, Enum):
    """A single action of a resolved plan."""

    BUILD_IMAGE = "build image"
    LAUNCH_CONTAINER = "launch container"
    SETTLE = "settle"
    CONNECT = "connect"
    EXECUTE_INIT = "execute init sql"
    EXECUTE_SEED = "execute seed sql"


Plan = tuple[Action, ...]


def _provision(snapshot: RuntimeSnapshot, image_name: str) -> list[Action]:
    actions = [] if snapshot.has_image(image_name) else [Action.BUILD_IMAGE]
    actions.append(Action.LAUNCH_CONTAINER)
    return actions


def _database(snapshot: RuntimeSnapshot, image_name: str) -> list[Action]:
    if snapshot.running_container(image_name) is not None:
        return [Action.CONNECT, Action.EXECUTE_INIT]
    return [
        *_provision(snapshot, image_name),
        Action.SETTLE,
        Action.CONNECT,
        Action.EXECUTE_INIT,
    ]


def resolve(step: Step, snapshot: RuntimeSnapshot, image_name: str) -> Plan:
    """Resolve a requested step into an ordered plan of actions.

    Args:
        step: The step requested by the caller.
        snapshot: Images and containers currently visible to the runtime.
        image_name: Name of the target image (``:latest`` is implied when untagged).

    Returns:
        The actions to execute, in order.
    """
    if step is Step.BUILD:
        return (Action.BUILD_IMAGE,)
    if step is Step.RUN:
        if snapshot.running_container(image_name) is not None:
            return ()
        return tuple(_provision(snapshot, image_name))
    actions = _database(snapshot, image_name)
    if step is Step.SEED:
        actions.append(Action.EXECUTE_SEED)
    return tuple(actions)
