"""Unit tests for the bootstrap error taxonomy."""

import pytest

from dbstrap.domain import errors


class TestExitFailure:
    """Tests for the ExitFailure error."""

    @staticmethod
    def test_attributes() -> None:
        """Test that the error keeps the command name and the exit status."""
        error = errors.ExitFailure("docker", 1)
        assert error.command == "docker"
        assert error.status == 1

    @staticmethod
    def test_error_message() -> None:
        """Test that the message names both the command and the status."""
        error = errors.ExitFailure("docker", 125)
        assert str(error) == "Command `docker` did not exit successfully: status 125"


class TestRuntimeFailure:
    """Tests for RuntimeFailure and its CommandNotFoundError refinement."""

    @staticmethod
    def test_message_includes_cause() -> None:
        """Test that the originating cause is appended to the message."""
        cause = ConnectionError("daemon unreachable")
        error = errors.RuntimeFailure("Cannot list docker images", cause)
        assert error.cause is cause
        assert str(error) == "Cannot list docker images: daemon unreachable"

    @staticmethod
    def test_message_without_cause() -> None:
        """Test that the message is used as-is when there is no cause."""
        assert str(errors.RuntimeFailure("boom")) == "boom"

    @staticmethod
    def test_command_not_found_is_a_runtime_failure() -> None:
        """Test that a missing binary is reported as a RuntimeFailure with a hint."""
        error = errors.CommandNotFoundError("docker")
        assert isinstance(error, errors.RuntimeFailure)
        assert error.command == "docker"
        assert str(error).startswith("docker not found on this system")
        assert "PATH" in str(error)


class TestCompensationFailure:
    """Tests for the CompensationFailure error."""

    @staticmethod
    def test_keeps_both_errors() -> None:
        """Test that neither the original nor the cleanup error is dropped."""
        original = errors.DatabaseFailure("Cannot connect")
        cleanup = errors.RuntimeFailure("Cannot remove container")
        error = errors.CompensationFailure(original, cleanup)
        assert error.original is original
        assert error.cleanup_error is cleanup
        assert "Cannot connect" in str(error)
        assert "Cannot remove container" in str(error)


@pytest.mark.parametrize(
    "error",
    [
        errors.RuntimeFailure("x"),
        errors.CommandNotFoundError("docker"),
        errors.ExitFailure("docker", 1),
        errors.DatabaseFailure("x"),
        errors.CompensationFailure(ValueError("a"), ValueError("b")),
    ],
)
def test_every_error_is_a_bootstrap_error(error) -> None:
    """Every failure derives from BootstrapError, so one handler catches all."""
    assert isinstance(error, errors.BootstrapError)
