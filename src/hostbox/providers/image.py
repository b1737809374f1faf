"""Image provider: pulling base images and cloning containers into images."""

import logging
from typing import Callable, Optional

from rich.console import Console

from hostbox.engine.client import EngineClient
from hostbox.errors import (
    CloneSourceRunningError,
    ContainerNotFoundError,
    EngineOperationError,
    UserDeclinedError,
)
from hostbox.models.container import CloneRequest, ContainerState, ImageRef
from hostbox.providers.base import BaseProvider, ProviderStatus


logger = logging.getLogger(__name__)


class ImageProvider(BaseProvider):
    """Provider for engine images."""

    def __init__(
        self,
        client: EngineClient,
        console: Optional[Console] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        super().__init__(client, console)
        self.confirm = confirm

    async def status(self, name: str) -> ProviderStatus:
        """Check if image exists."""
        if await self.client.image_exists(name):
            return ProviderStatus.PRESENT
        return ProviderStatus.ABSENT

    async def ensure_present(self, image: str, non_interactive: bool = False) -> None:
        """Pull ``image`` unless the engine already has it.

        Interactive callers are asked first; declining aborts creation.
        """
        if await self.status(image) == ProviderStatus.PRESENT:
            logger.debug(f"Image {image} already present")
            return

        if not non_interactive and self.confirm is not None:
            if not self.confirm("Image not found. Do you want to pull the image now?"):
                raise UserDeclinedError(
                    "Next time, run this command first:\n"
                    f"\t{self.client.handle.name} pull {image}"
                )

        logger.info(f"Pulling image {image}")
        await self.client.pull(image)
        logger.info(f"Image {image} pulled successfully")

    async def check_clone_source(self, request: CloneRequest) -> None:
        """Refuse a clone source that is missing or still running."""
        name = request.source_name
        state = await self.client.container_state(name)
        if state == ContainerState.ABSENT:
            raise ContainerNotFoundError(name)
        if state in (ContainerState.RUNNING, ContainerState.STARTING, ContainerState.PAUSED):
            raise CloneSourceRunningError(name)

    async def clone(self, request: CloneRequest) -> ImageRef:
        """Commit a stopped container's filesystem as a new image.

        Nothing is committed when the source is missing or still running.
        """
        name = request.source_name
        await self.check_clone_source(request)

        container_id = await self.client.container_id(name)
        if not container_id:
            raise EngineOperationError(f"resolve the id of container {name}")

        image = request.image_ref
        self.console.print(f"Cloning container {name} into image {image}...")
        await self.client.commit(container_id, image)
        logger.info(f"Committed {name} ({container_id[:12]}) as {image}")
        return image
