"""Error taxonomy shared by the step resolver and the bootstrap orchestrator."""

# ============================================================================
#                           Base error
# ============================================================================


class BootstrapError(Exception):
    """Base class for every failure surfaced by a bootstrap invocation."""


# ============================================================================
#                   Container runtime errors
# ============================================================================


class RuntimeFailure(BootstrapError):
    """Raised when the container runtime fails to list, build or launch.

    Attributes:
        cause: The originating exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message if cause is None else f"{message}: {cause}")
        self.cause = cause


class CommandNotFoundError(RuntimeFailure):
    """Raised when the container binary is absent from the host."""

    def __init__(self, command: str, cause: BaseException | None = None) -> None:
        super().__init__(
            f"{command} not found on this system. "
            f"Install it or make sure '{command}' is on your PATH",
            cause,
        )
        self.command = command


class ExitFailure(BootstrapError):
    """Raised when a spawned build/run process exits with a non-zero status.

    Attributes:
        command: The name of the command that was spawned (e.g. "docker").
        status: The exit status reported by the process.
    """

    def __init__(self, command: str, status: int) -> None:
        super().__init__(
            f"Command `{command}` did not exit successfully: status {status}"
        )
        self.command = command
        self.status = status


# ============================================================================
#                   Database errors
# ============================================================================


class DatabaseFailure(BootstrapError):
    """Raised when connecting to, or executing SQL against, the database fails."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message if cause is None else f"{message}: {cause}")
        self.cause = cause


# ============================================================================
#                   Compensation errors
# ============================================================================


class CompensationFailure(BootstrapError):
    """Raised when killing a freshly launched container fails after an error.

    Both the original failure and the cleanup failure are kept.

    Attributes:
        original: The failure that triggered the compensation.
        cleanup_error: The failure raised while terminating the container.
    """

    def __init__(
        self, original: BaseException, cleanup_error: BaseException
    ) -> None:
        super().__init__(
            f"{original} (cleanup also failed, the container may still be "
            f"running: {cleanup_error})"
        )
        self.original = original
        self.cleanup_error = cleanup_error
