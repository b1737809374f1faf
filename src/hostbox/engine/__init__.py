"""Container engine selection and CLI access."""

from hostbox.engine.client import EngineClient
from hostbox.engine.selector import select_engine

__all__ = [
    "EngineClient",
    "select_engine",
]
