"""Pick the container engine to drive for this invocation."""

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Callable, Mapping, Optional

from hostbox.errors import DependencyMissingError
from hostbox.models.engine import EngineHandle, EngineKind
from hostbox.utils.systemd import SystemdDBus


logger = logging.getLogger(__name__)

PODMAN_SOCKET_UNIT = "podman.socket"

# probe order when no engine is configured
ENGINE_PREFERENCE = (EngineKind.PODMAN, EngineKind.DOCKER)


def podman_socket_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the rootless podman control socket."""
    environ = os.environ if environ is None else environ
    runtime_dir = environ.get("XDG_RUNTIME_DIR") or f"/run/user/{os.getuid()}"
    return Path(runtime_dir) / "podman" / "podman.sock"


def _is_socket(path: Path) -> bool:
    try:
        return stat.S_ISSOCK(path.stat().st_mode)
    except OSError:
        return False


async def remote_transport_available(
    socket_path: Path,
    systemd: Optional[SystemdDBus] = None,
) -> bool:
    """True when the podman socket exists and its systemd unit is active."""
    if not _is_socket(socket_path):
        logger.debug(f"No podman socket at {socket_path}")
        return False

    systemd = systemd or SystemdDBus()
    await systemd.connect()
    try:
        active = await systemd.is_active(PODMAN_SOCKET_UNIT)
    finally:
        await systemd.disconnect()

    logger.debug(f"{PODMAN_SOCKET_UNIT} active: {active}")
    return active


async def select_engine(
    preference: str = "auto",
    verbose: bool = False,
    use_remote_transport: bool = True,
    which: Callable[[str], Optional[str]] = shutil.which,
    environ: Optional[Mapping[str, str]] = None,
    systemd: Optional[SystemdDBus] = None,
) -> EngineHandle:
    """Resolve the engine handle.

    Probes podman first, then docker. A configured preference restricts the
    probe to that engine only.
    """
    if preference == "auto":
        candidates = ENGINE_PREFERENCE
    else:
        candidates = (EngineKind(preference),)

    for kind in candidates:
        binary = which(kind.value)
        if not binary:
            continue

        remote = False
        if kind == EngineKind.PODMAN and use_remote_transport:
            remote = await remote_transport_available(podman_socket_path(environ), systemd)

        handle = EngineHandle(kind=kind, binary=binary, remote_transport=remote, verbose=verbose)
        logger.debug(f"Using engine {kind.value} at {binary} (remote={remote})")
        return handle

    names = " or ".join(kind.value for kind in candidates)
    raise DependencyMissingError(
        f"Missing dependency: we need a container manager. Please install {names}."
    )
