"""Thin async wrapper over the container engine CLI."""

import logging
import subprocess
from typing import Dict, List, Optional

from hostbox.errors import EngineOperationError
from hostbox.models.container import ContainerState, ImageRef
from hostbox.models.engine import EngineHandle
from hostbox.utils.process import CommandResult, run_command


logger = logging.getLogger(__name__)


class EngineClient:
    """Issues engine commands for one EngineHandle.

    Nothing is cached: every query goes back to the engine, which is the only
    authority on container and image state.
    """

    def __init__(self, handle: EngineHandle):
        self.handle = handle

    def command(self, *args: str) -> List[str]:
        """Full argv for an engine subcommand."""
        return [*self.handle.base_command, *args]

    async def _call(self, action: str, *args: str, capture_output: bool = True) -> CommandResult:
        cmd = self.command(*args)
        try:
            return await run_command(cmd, capture_output=capture_output)
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to {action}: {e}. Stderr: {e.stderr}")
            raise EngineOperationError(action, cmd, e.stderr or "", e.returncode) from e

    async def inspect(self, kind: str, name: str, fmt: str) -> Optional[str]:
        """Inspect a container or image; None when it does not exist."""
        result = await run_command(
            self.command("inspect", "--type", kind, "--format", fmt, name),
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    async def container_state(self, name: str) -> ContainerState:
        status = await self.inspect("container", name, "{{.State.Status}}")
        return ContainerState.from_status(status)

    async def container_id(self, name: str) -> Optional[str]:
        return await self.inspect("container", name, "{{.Id}}")

    async def container_env(self, name: str) -> Dict[str, str]:
        """Environment the container was created with."""
        raw = await self.inspect("container", name, "{{range .Config.Env}}{{println .}}{{end}}")
        env = {}
        for line in (raw or "").splitlines():
            key, sep, value = line.partition("=")
            if sep:
                env[key] = value
        return env

    async def image_exists(self, image: str) -> bool:
        return await self.inspect("image", image, "{{.Id}}") is not None

    async def create(self, create_args: List[str]) -> str:
        result = await self._call("create container", *create_args)
        return result.stdout.strip()

    async def start(self, name: str) -> None:
        await self._call(f"start container {name}", "start", name)

    async def unpause(self, name: str) -> None:
        await self._call(f"unpause container {name}", "unpause", name)

    async def logs(self, name: str, since: int) -> str:
        """Logs emitted since a unix timestamp, stdout and stderr combined."""
        result = await self._call(
            f"read logs of {name}", "logs", "-t", "--since", str(since), name
        )
        return result.stdout + result.stderr

    async def commit(self, container_id: str, image: ImageRef) -> ImageRef:
        await self._call(f"commit container {container_id}", "container", "commit", container_id, str(image))
        return image

    async def pull(self, image: str) -> None:
        # progress goes straight to the terminal
        await self._call(f"pull image {image}", "pull", image, capture_output=False)

    async def execute(self, exec_args: List[str]) -> int:
        """Run an exec session attached to the caller's terminal."""
        result = await run_command(self.command(*exec_args), check=False, capture_output=False)
        return result.returncode
