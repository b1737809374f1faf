"""Container provider: creating, starting and entering hostbox containers."""

import logging
import os
import shlex
import time
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from rich.console import Console
from rich.markup import escape

from hostbox.builder.create import CreateCommandBuilder, HostFilesystem, locate_helpers
from hostbox.builder.env import EnvFilterPolicy
from hostbox.builder.execute import ExecCommandBuilder
from hostbox.engine.client import EngineClient
from hostbox.errors import (
    ContainerNotFoundError,
    InvalidArgumentError,
    StartupFailedError,
)
from hostbox.models.config import HostboxConfig
from hostbox.models.container import CloneRequest, ContainerState, CreateRequest, EnterRequest
from hostbox.models.identity import Identity
from hostbox.providers.base import BaseProvider
from hostbox.providers.image import ImageProvider
from hostbox.providers.readiness import LogTailReadiness, ReadinessSignal


logger = logging.getLogger(__name__)

# dry runs print the command on stdout so it can be piped
stdout_console = Console()


class ContainerProvider(BaseProvider):
    """Drives a container from creation through readiness to exec.

    State is read from the engine right before every decision and never kept
    between calls; another process may start or stop the container at any
    time.
    """

    def __init__(
        self,
        client: EngineClient,
        identity: Identity,
        config: Optional[HostboxConfig] = None,
        image_provider: Optional[ImageProvider] = None,
        readiness: Optional[ReadinessSignal] = None,
        console: Optional[Console] = None,
        fs: Optional[HostFilesystem] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(client, console)
        self.identity = identity
        self.config = config or HostboxConfig()
        self.image_provider = image_provider or ImageProvider(client, self.console)
        self.readiness = readiness or LogTailReadiness(
            client,
            interval=self.config.readiness.interval,
            timeout=self.config.readiness.timeout,
        )
        self.fs = fs or HostFilesystem()
        self._clock = clock

    async def status(self, name: str) -> ContainerState:
        """Current state of container ``name`` according to the engine."""
        return await self.client.container_state(name)

    async def create(self, request: CreateRequest) -> List[str]:
        """Create a container and return the create arguments used.

        An existing container with the same name is left untouched.
        """
        if request.image and request.clone:
            raise InvalidArgumentError(
                "Invalid arguments, choose only one between image and clone."
            )

        if await self.status(request.name) != ContainerState.ABSENT:
            self.console.print(f"Hostbox named '{escape(request.name)}' already exists.")
            self.console.print("To enter, run:\n")
            self.console.print(f"\thostbox enter --name {escape(request.name)}\n")
            return []

        init_path, export_path = locate_helpers(
            self.config.helpers.init_path,
            self.config.helpers.export_path,
        )

        if request.clone:
            clone_request = CloneRequest(source_name=request.clone)
            if request.dry_run:
                await self.image_provider.check_clone_source(clone_request)
                image = str(clone_request.image_ref)
            else:
                image = str(await self.image_provider.clone(clone_request))
        else:
            image = request.image or self.config.default_image
            if not request.dry_run:
                await self.image_provider.ensure_present(image, request.non_interactive)

        custom_home = None
        if request.custom_home:
            custom_home = str(Path(request.custom_home).expanduser().absolute())
            if not request.dry_run:
                Path(custom_home).mkdir(parents=True, exist_ok=True)

        builder = CreateCommandBuilder(
            name=request.name,
            identity=self.identity,
            engine=self.client.handle,
            init_path=init_path,
            export_path=export_path,
            fs=self.fs,
        ).with_image(image).with_custom_home(custom_home)
        args = builder.render()

        if request.dry_run:
            stdout_console.print(escape(shlex.join(self.client.command(*args))), soft_wrap=True, highlight=False)
            return args

        self.console.print(f"Creating {escape(request.name)} using {escape(image)}")
        await self.client.create(args)
        logger.info(f"Created container {request.name} from {image}")

        self.console.print(f"[green]✓[/green] Hostbox '{escape(request.name)}' successfully created.")
        self.console.print("To enter, run:\n")
        self.console.print(f"\thostbox enter --name {escape(request.name)}\n")
        return args

    async def start(self, name: str, issue_start: bool = True) -> None:
        """Start ``name`` and wait until its initializer reports readiness."""
        since = int(self._clock())
        if issue_start:
            await self.client.start(name)

        self.console.print(f"Starting container {escape(name)}")
        self.console.print("run this command to follow along:\n")
        self.console.print(f"\t{self.client.handle.name} logs -f {escape(name)}\n")

        result = await self.readiness.wait(name, since)
        if not result.ready:
            raise StartupFailedError(
                f"Container {name} failed to start:\n{result.logs.strip()}",
                logs=result.logs,
            )

        for line in result.warnings:
            self.console.print(f"[yellow]{escape(line)}[/yellow]")
        logger.debug(f"Container {name} is ready")

    async def enter(
        self,
        request: EnterRequest,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        policy: Optional[EnvFilterPolicy] = None,
    ) -> int:
        """Run a command (or login shell) inside ``request.name``.

        Returns the exit code of the exec session.
        """
        name = request.name
        state = await self.status(name)

        if state == ContainerState.ABSENT:
            raise ContainerNotFoundError(name, hint=f"hostbox create --name {name}")
        if state == ContainerState.FAILED:
            raise StartupFailedError(f"Container {name} is not usable, recreate it.")

        if not request.dry_run:
            if state == ContainerState.STOPPED:
                await self.start(name)
            elif state == ContainerState.STARTING:
                await self.start(name, issue_start=False)
            elif state == ContainerState.PAUSED:
                # the initializer already finished before the pause
                await self.client.unpause(name)

        container_env = await self.client.container_env(name)
        builder = ExecCommandBuilder(
            name=name,
            identity=self.identity,
            policy=policy,
            headless=request.headless,
            command=request.command,
            environ=os.environ if environ is None else environ,
            cwd=cwd,
            home=container_env.get("HOME"),
        )
        args = builder.render()

        if request.dry_run:
            stdout_console.print(escape(shlex.join(self.client.command(*args))), soft_wrap=True, highlight=False)
            return 0

        return await self.client.execute(args)
