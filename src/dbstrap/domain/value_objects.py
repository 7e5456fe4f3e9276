"""Value objects describing what the container runtime reports."""

from __future__ import annotations

from dataclasses import dataclass, field

LATEST_TAG = "latest"


def has_tag(image_name: str) -> bool:
    """Return True if ``image_name`` already names a tag (``repo:tag``).

    A colon before the last ``/`` belongs to a registry port, not a tag.
    """
    return ":" in image_name.rsplit("/", 1)[-1]


def latest_tag(image_name: str) -> str:
    """Return the tag an image built as ``image_name`` is listed under.

    Untagged names get the implicit ``:latest``; tagged names are kept.
    """
    return image_name if has_tag(image_name) else f"{image_name}:{LATEST_TAG}"


@dataclass(frozen=True)
class ImageDescriptor:
    """An image as reported by the container runtime."""

    id: str
    repo_tags: frozenset[str] = field(default_factory=frozenset)

    def matches(self, image_name: str) -> bool:
        """Return True if this image carries the tag ``image_name`` resolves to."""
        return latest_tag(image_name) in self.repo_tags


@dataclass(frozen=True)
class ContainerDescriptor:
    """A running container as reported by the container runtime."""

    id: str
    image: str

    def matches(self, image_name: str) -> bool:
        """Return True if this container was started from ``image_name``.

        Runtimes report the image either by the name it was started with or
        with the implicit ``:latest`` tag, so both forms are accepted.
        """
        return self.image in {image_name, latest_tag(image_name)}


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Images and containers visible to the runtime at one point in time.

    A snapshot is taken once per invocation and never cached across
    invocations.
    """

    images: tuple[ImageDescriptor, ...] = ()
    containers: tuple[ContainerDescriptor, ...] = ()

    def has_image(self, image_name: str) -> bool:
        """Return True if an image carrying the tag of ``image_name`` exists."""
        return any(image.matches(image_name) for image in self.images)

    def running_container(self, image_name: str) -> ContainerDescriptor | None:
        """Return the first container started from ``image_name``, if any."""
        return next((c for c in self.containers if c.matches(image_name)), None)
