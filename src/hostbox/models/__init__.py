"""Pydantic models for configuration and validation."""

from hostbox.models.config import HostboxConfig, HelpersConfig, ReadinessConfig
from hostbox.models.container import (
    CloneRequest,
    ContainerSpec,
    ContainerState,
    CreateRequest,
    EnterRequest,
    ImageRef,
    MountSpec,
    NamespaceSharing,
)
from hostbox.models.engine import EngineCapability, EngineHandle, EngineKind
from hostbox.models.identity import Identity

__all__ = [
    "HostboxConfig",
    "HelpersConfig",
    "ReadinessConfig",
    "CloneRequest",
    "ContainerSpec",
    "ContainerState",
    "CreateRequest",
    "EnterRequest",
    "ImageRef",
    "MountSpec",
    "NamespaceSharing",
    "EngineCapability",
    "EngineHandle",
    "EngineKind",
    "Identity",
]
