"""Container engine handle models."""

from enum import Enum
from typing import FrozenSet, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EngineKind(str, Enum):
    """Supported container engines."""
    PODMAN = "podman"
    DOCKER = "docker"


class EngineCapability(str, Enum):
    """Optional engine features the builders may rely on."""
    USERNS_KEEP_ID = "userns-keep-id"
    ULIMIT_HOST = "ulimit-host"
    DEVPTS_MOUNT = "devpts-mount"
    REMOTE_TRANSPORT = "remote-transport"


ENGINE_CAPABILITIES = {
    EngineKind.PODMAN: frozenset(EngineCapability),
    EngineKind.DOCKER: frozenset(),
}


class EngineHandle(BaseModel):
    """Engine chosen for this invocation."""
    model_config = ConfigDict(frozen=True)

    kind: EngineKind
    binary: str = Field(default="", description="Engine executable, defaults to the kind name")
    remote_transport: bool = False
    verbose: bool = False

    @model_validator(mode="after")
    def check_remote_transport(self):
        """Only engines with a control socket can use the remote transport."""
        if self.remote_transport and not self.supports(EngineCapability.REMOTE_TRANSPORT):
            raise ValueError(f"{self.kind.value} has no remote transport")
        return self

    @property
    def capabilities(self) -> FrozenSet[EngineCapability]:
        return ENGINE_CAPABILITIES[self.kind]

    def supports(self, capability: EngineCapability) -> bool:
        return capability in self.capabilities

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def base_command(self) -> List[str]:
        """Argv prefix shared by every engine invocation."""
        cmd = [self.binary or self.kind.value]
        if self.remote_transport:
            cmd.append("--remote")
        if self.verbose:
            cmd.extend(["--log-level", "debug"])
        return cmd
