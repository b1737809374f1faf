"""
Hostbox - host-integrated container sandboxes.

Creates podman or docker containers that share the user's home directory,
devices and namespaces with the host, and enters them as if they were a
native shell.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from hostbox.models.config import HostboxConfig
from hostbox.models.container import ContainerSpec, ContainerState
from hostbox.models.engine import EngineHandle
from hostbox.models.identity import Identity

__all__ = [
    "HostboxConfig",
    "ContainerSpec",
    "ContainerState",
    "EngineHandle",
    "Identity",
]
