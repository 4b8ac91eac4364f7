"""Errors raised while acquiring credentials and running e2e targets."""

from collections.abc import Sequence


class E2ERunnerError(Exception):
    """Base class for runner errors."""


class ConfigurationError(E2ERunnerError):
    """Required input (env var, option, auth selector) is missing or invalid."""


class TransportError(E2ERunnerError):
    """A network call could not be sent or completed."""


class RemoteError(E2ERunnerError):
    """A remote endpoint answered with an error status or error body."""

    def __init__(self, message: str, status: int | None = None, body: str = "") -> None:
        """Initialize with the HTTP status and raw response body."""
        super().__init__(message)
        self.status = status
        self.body = body


class InvalidLoggerError(E2ERunnerError):
    """A logger collaborator does not provide a callable ``info``."""


class CommandError(E2ERunnerError):
    """An external command exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int) -> None:
        """Initialize with the argument vector and exit status."""
        self.command = list(args)
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        )
