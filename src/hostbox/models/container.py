"""Container specification models."""

from datetime import date
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from hostbox.models.identity import Identity


CONTAINER_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$"


class ContainerState(str, Enum):
    """Container state as observed through the engine."""
    ABSENT = "absent"
    STOPPED = "stopped"
    STARTING = "starting"
    PAUSED = "paused"
    RUNNING = "running"
    FAILED = "failed"

    @classmethod
    def from_status(cls, status: Optional[str]) -> "ContainerState":
        """Map an engine ``.State.Status`` string onto a state."""
        if status is None:
            return cls.ABSENT
        status = status.strip().lower()
        if status == "running":
            return cls.RUNNING
        if status == "restarting":
            return cls.STARTING
        if status == "paused":
            return cls.PAUSED
        if status in ("dead", "removing"):
            return cls.FAILED
        # created, exited, stopped, configured and anything newer
        # all need a start before exec
        return cls.STOPPED


class MountSpec(BaseModel):
    """A single mount handed to the engine."""
    model_config = ConfigDict(frozen=True)

    destination: str
    source: Optional[str] = None
    options: Tuple[str, ...] = ()
    type: Literal["bind", "devpts"] = "bind"

    def render(self) -> List[str]:
        if self.type == "devpts":
            return ["--mount", f"type=devpts,destination={self.destination}"]
        value = f"{self.source}:{self.destination}"
        if self.options:
            value = f"{value}:{','.join(self.options)}"
        return ["--volume", value]


class NamespaceSharing(BaseModel):
    """Namespaces joined with the host."""
    model_config = ConfigDict(frozen=True)

    ipc: str = "host"
    network: str = "host"
    pid: str = "host"


class ImageRef(BaseModel):
    """Reference to an image in the engine's store."""
    model_config = ConfigDict(frozen=True)

    repository: str
    tag: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> "ImageRef":
        # a colon after the last slash separates the tag, not a registry port
        head, _, last = value.rpartition("/")
        if ":" in last:
            name, _, tag = last.partition(":")
            repository = f"{head}/{name}" if head else name
            return cls(repository=repository, tag=tag)
        return cls(repository=value)

    def __str__(self) -> str:
        return f"{self.repository}:{self.tag}" if self.tag else self.repository


class CloneRequest(BaseModel):
    """Commit a stopped container into a new image."""
    source_name: str = Field(..., pattern=CONTAINER_NAME_PATTERN)
    tag_date: date = Field(default_factory=date.today)

    @property
    def image_ref(self) -> ImageRef:
        return ImageRef(repository=self.source_name, tag=self.tag_date.isoformat())


class ContainerSpec(BaseModel):
    """Everything the engine's create call needs for one container."""
    name: str = Field(..., pattern=CONTAINER_NAME_PATTERN)
    image: str = Field(..., min_length=1)
    identity: Identity
    hostname: str
    mounts: List[MountSpec] = Field(default_factory=list)
    namespaces: NamespaceSharing = Field(default_factory=NamespaceSharing)
    privileged: bool = True
    security_opts: List[str] = Field(default_factory=lambda: ["label=disable"])
    env: Dict[str, str] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)
    init_path: str
    export_path: str
    entrypoint: str = "/usr/bin/entrypoint"

    @property
    def destinations(self) -> List[str]:
        return [mount.destination for mount in self.mounts]


class CreateRequest(BaseModel):
    """Caller input for the create operation."""
    name: str = Field(..., pattern=CONTAINER_NAME_PATTERN)
    image: Optional[str] = None
    clone: Optional[str] = None
    custom_home: Optional[str] = None
    non_interactive: bool = False
    dry_run: bool = False


class EnterRequest(BaseModel):
    """Caller input for the enter operation."""
    name: str = Field(..., pattern=CONTAINER_NAME_PATTERN)
    command: List[str] = Field(default_factory=list)
    headless: bool = False
    dry_run: bool = False
