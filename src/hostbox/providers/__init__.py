"""Resource providers for hostbox."""

from hostbox.providers.base import BaseProvider, ProviderStatus
from hostbox.providers.container import ContainerProvider
from hostbox.providers.image import ImageProvider
from hostbox.providers.readiness import (
    CallbackReadiness,
    LogTailReadiness,
    ReadinessResult,
    ReadinessSignal,
)

__all__ = [
    "BaseProvider",
    "ProviderStatus",
    "ContainerProvider",
    "ImageProvider",
    "CallbackReadiness",
    "LogTailReadiness",
    "ReadinessResult",
    "ReadinessSignal",
]
