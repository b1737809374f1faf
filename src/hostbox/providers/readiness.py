"""Signals that tell the lifecycle when in-container setup has finished."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from hostbox.engine.client import EngineClient
from hostbox.errors import StartupFailedError


logger = logging.getLogger(__name__)

SETUP_DONE_SENTINEL = "container_setup_done"
ERROR_MARKER = "Error"


def warning_lines(logs: str) -> List[str]:
    """Log lines mentioning a warning, in any case."""
    return [line for line in logs.splitlines() if "warning" in line.lower()]


@dataclass
class ReadinessResult:
    """Outcome of waiting for a container to become ready."""
    ready: bool
    logs: str = ""
    warnings: List[str] = field(default_factory=list)


class ReadinessSignal(ABC):
    """Waits until the initializer reports success or failure."""

    @abstractmethod
    async def wait(self, name: str, since: int) -> ReadinessResult:
        """Block until container ``name`` is ready or has failed.

        ``since`` is the unix timestamp recorded just before the start call;
        anything logged earlier belongs to a previous boot.
        """
        pass


class LogTailReadiness(ReadinessSignal):
    """Polls engine logs for the initializer's sentinel or an error marker.

    With ``timeout=None`` the poll never gives up, which tolerates slow
    first-boot provisioning.
    """

    def __init__(
        self,
        client: EngineClient,
        interval: float = 1.0,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.interval = interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    async def wait(self, name: str, since: int) -> ReadinessResult:
        deadline = None if self.timeout is None else self._clock() + self.timeout
        attempts = 0

        while True:
            attempts += 1
            logs = await self.client.logs(name, since)

            if ERROR_MARKER in logs:
                logger.debug(f"Error marker in logs of {name} after {attempts} polls")
                return ReadinessResult(ready=False, logs=logs)

            if SETUP_DONE_SENTINEL in logs:
                logger.debug(f"Container {name} ready after {attempts} polls")
                return ReadinessResult(ready=True, logs=logs, warnings=warning_lines(logs))

            if deadline is not None and self._clock() >= deadline:
                raise StartupFailedError(
                    f"Container {name} did not finish setup within {self.timeout}s",
                    logs=logs,
                )

            await self._sleep(self.interval)


class CallbackReadiness(ReadinessSignal):
    """Readiness reported directly by the initializer through a callback."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._event = asyncio.Event()
        self._result = ReadinessResult(ready=False)

    def notify_ready(self, logs: str = "") -> None:
        self._result = ReadinessResult(ready=True, logs=logs, warnings=warning_lines(logs))
        self._event.set()

    def notify_failed(self, logs: str = "") -> None:
        self._result = ReadinessResult(ready=False, logs=logs)
        self._event.set()

    async def wait(self, name: str, since: int) -> ReadinessResult:
        try:
            await asyncio.wait_for(self._event.wait(), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise StartupFailedError(
                f"Container {name} did not finish setup within {self.timeout}s"
            )
        return self._result
