"""Base provider interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from rich.console import Console

from hostbox.engine.client import EngineClient


class ProviderStatus(Enum):
    """Provider resource status."""
    PRESENT = "present"
    ABSENT = "absent"


class BaseProvider(ABC):
    """Base provider interface that all providers must implement.

    Providers talk to the engine through an EngineClient and report progress
    to the caller on ``console``.
    """

    def __init__(self, client: EngineClient, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console(stderr=True)

    @abstractmethod
    async def status(self, name: str) -> Any:
        """Check the current status of a resource."""
        pass
