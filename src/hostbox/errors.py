"""Error types raised by hostbox.

Every error carries the process exit code the CLI should terminate with.
"""

from typing import Optional, Sequence


class HostboxError(Exception):
    """Base error for all hostbox failures."""

    exit_code: int = 1


class DependencyMissingError(HostboxError):
    """No supported container engine is installed."""

    exit_code = 127


class HelperMissingError(DependencyMissingError):
    """The init or export helper binary cannot be located on the host."""


class InvalidArgumentError(HostboxError):
    """Conflicting or malformed caller arguments."""

    exit_code = 2


class ConfigurationError(HostboxError):
    """Configuration file or resolved settings are unusable."""


class ContainerNotFoundError(HostboxError):
    """Target container does not exist."""

    def __init__(self, name: str, hint: Optional[str] = None):
        message = f"Cannot find container {name}, does it exist?"
        if hint:
            message = f"{message}\nTry running first:\n\t{hint}"
        super().__init__(message)
        self.name = name


class CloneSourceRunningError(HostboxError):
    """Clone source must be stopped before it can be committed."""

    def __init__(self, name: str):
        super().__init__(f"Container {name} is running. Please stop it first.")
        self.name = name


class UserDeclinedError(HostboxError):
    """Caller declined an interactive prompt; a benign abort."""

    exit_code = 0


class EngineOperationError(HostboxError):
    """A container engine call reported failure."""

    def __init__(
        self,
        action: str,
        cmd: Sequence[str] = (),
        stderr: str = "",
        returncode: Optional[int] = None,
    ):
        message = f"Failed to {action}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.action = action
        self.cmd = list(cmd)
        self.stderr = stderr
        self.returncode = returncode


class StartupFailedError(HostboxError):
    """In-container initialization reported an error or never finished."""

    def __init__(self, message: str, logs: str = ""):
        super().__init__(message)
        self.logs = logs
