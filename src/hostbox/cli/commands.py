"""Command implementations for CLI."""

import asyncio
from typing import Callable, List, Optional

from rich.console import Console

from hostbox.engine import EngineClient, select_engine
from hostbox.models.config import HostboxConfig
from hostbox.models.container import CreateRequest, EnterRequest
from hostbox.models.identity import Identity
from hostbox.providers import ContainerProvider, ImageProvider


console = Console(stderr=True)


async def build_provider(
    config: HostboxConfig,
    verbose: bool = False,
    identity: Optional[Identity] = None,
    confirm: Optional[Callable[[str], bool]] = None,
) -> ContainerProvider:
    """Select the engine and wire providers for one invocation."""
    handle = await select_engine(
        preference=config.engine,
        verbose=verbose,
        use_remote_transport=config.use_remote_transport,
    )
    client = EngineClient(handle)
    images = ImageProvider(client, console=console, confirm=confirm)
    return ContainerProvider(
        client,
        identity or Identity.from_host(),
        config=config,
        image_provider=images,
        console=console,
    )


def create_container(
    config: HostboxConfig,
    name: Optional[str] = None,
    image: Optional[str] = None,
    clone: Optional[str] = None,
    home: Optional[str] = None,
    non_interactive: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    confirm: Optional[Callable[[str], bool]] = None,
) -> int:
    """Create a container."""
    request = CreateRequest(
        name=name or config.default_name,
        image=image,
        clone=clone,
        custom_home=home,
        non_interactive=non_interactive or config.non_interactive,
        dry_run=dry_run,
    )

    async def _run():
        provider = await build_provider(config, verbose=verbose, confirm=confirm)
        await provider.create(request)

    asyncio.run(_run())
    return 0


def enter_container(
    config: HostboxConfig,
    name: Optional[str] = None,
    command: Optional[List[str]] = None,
    headless: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
) -> int:
    """Enter a container, returning the exit code of the command run inside."""
    request = EnterRequest(
        name=name or config.default_name,
        command=command or [],
        headless=headless,
        dry_run=dry_run,
    )

    async def _run() -> int:
        provider = await build_provider(config, verbose=verbose)
        return await provider.enter(request)

    return asyncio.run(_run())
