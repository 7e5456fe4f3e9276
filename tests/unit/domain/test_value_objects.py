"""Unit tests for runtime descriptors and snapshots."""

from dbstrap.domain.value_objects import (
    ContainerDescriptor,
    ImageDescriptor,
    RuntimeSnapshot,
    has_tag,
    latest_tag,
)


def test_latest_tag():
    """latest_tag() appends the implicit docker tag to untagged names only."""
    assert latest_tag("dbstrap-postgres") == "dbstrap-postgres:latest"
    assert latest_tag("pg:dev") == "pg:dev"
    assert latest_tag("localhost:5000/pg") == "localhost:5000/pg:latest"
    assert latest_tag("localhost:5000/pg:16") == "localhost:5000/pg:16"


def test_has_tag_ignores_registry_port():
    """A registry port is not mistaken for a tag."""
    assert has_tag("pg:dev")
    assert not has_tag("pg")
    assert not has_tag("registry.local:5000/team/pg")


def test_tagged_image_name_matches_its_own_tag():
    """An image name carrying a tag is looked up under that tag."""
    image = ImageDescriptor(id="sha256:1", repo_tags=frozenset({"pg:dev"}))
    assert image.matches("pg:dev")
    assert not image.matches("pg")
    assert ContainerDescriptor(id="1", image="pg:dev").matches("pg:dev")
    assert RuntimeSnapshot(images=(image,)).has_image("pg:dev")


def test_image_matches_by_latest_tag_only():
    """Images match by their ``<name>:latest`` tag, never by id."""
    tagged = ImageDescriptor(id="sha256:1", repo_tags=frozenset({"pg:latest"}))
    other_tag = ImageDescriptor(id="sha256:2", repo_tags=frozenset({"pg:v1"}))
    named_by_id = ImageDescriptor(id="pg")
    assert tagged.matches("pg")
    assert not other_tag.matches("pg")
    assert not named_by_id.matches("pg")


def test_container_matches_plain_and_latest_image_names():
    """Containers match whether the runtime reports the tag or not."""
    assert ContainerDescriptor(id="1", image="pg").matches("pg")
    assert ContainerDescriptor(id="1", image="pg:latest").matches("pg")
    assert not ContainerDescriptor(id="1", image="postgres:16").matches("pg")


def test_snapshot_lookups():
    """A snapshot answers image existence and running-container queries."""
    running = ContainerDescriptor(id="c1", image="pg")
    snapshot = RuntimeSnapshot(
        images=(ImageDescriptor(id="i1", repo_tags=frozenset({"pg:latest"})),),
        containers=(ContainerDescriptor(id="c0", image="redis"), running),
    )
    assert snapshot.has_image("pg")
    assert not snapshot.has_image("redis")
    assert snapshot.running_container("pg") is running
    assert snapshot.running_container("mysql") is None


def test_empty_snapshot():
    """An empty snapshot has no images and no containers."""
    snapshot = RuntimeSnapshot()
    assert not snapshot.has_image("pg")
    assert snapshot.running_container("pg") is None
