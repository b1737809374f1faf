"""Assemble the engine ``create`` invocation for a hostbox container."""

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from hostbox.errors import ConfigurationError, HelperMissingError
from hostbox.models.container import ContainerSpec, MountSpec
from hostbox.models.engine import EngineCapability, EngineHandle
from hostbox.models.identity import Identity


logger = logging.getLogger(__name__)

INIT_HELPER = "hostbox-init"
EXPORT_HELPER = "hostbox-export"
ENTRYPOINT_PATH = "/usr/bin/entrypoint"
EXPORT_PATH = "/usr/bin/hostbox-export"
HOST_ROOT = "/run/host"
MANAGER_LABEL = ("manager", "hostbox")

# Host files that are commonly symlinks into /run or /usr and would dangle
# inside the container's mount namespace unless resolved first
HOST_CONFIG_FILES = (
    "/etc/hosts",
    "/etc/resolv.conf",
    "/etc/localtime",
    "/etc/host.conf",
)


class HostFilesystem:
    """Host-side probes used while building mounts."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)

    def hostname(self) -> str:
        return os.uname().nodename


def locate_helpers(
    init_path: Optional[str] = None,
    export_path: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> Tuple[str, str]:
    """Resolve host paths of the init and export helpers."""
    resolved = []
    for configured, helper in ((init_path, INIT_HELPER), (export_path, EXPORT_HELPER)):
        path = configured or which(helper)
        if not path or not Path(path).is_file():
            raise HelperMissingError(
                f"Cannot find {helper}. Please check your installation."
            )
        resolved.append(str(Path(path).resolve()))
    return resolved[0], resolved[1]


class CreateCommandBuilder:
    """Builds a ContainerSpec and renders it as engine ``create`` arguments."""

    def __init__(
        self,
        name: str,
        identity: Identity,
        engine: EngineHandle,
        init_path: str,
        export_path: str,
        fs: Optional[HostFilesystem] = None,
    ):
        self.name = name
        self.identity = identity
        self.engine = engine
        self.init_path = init_path
        self.export_path = export_path
        self.fs = fs or HostFilesystem()
        self.image: Optional[str] = None

    def with_image(self, image: Optional[str]) -> "CreateCommandBuilder":
        self.image = str(image) if image else None
        return self

    def with_custom_home(self, custom_home: Optional[str]) -> "CreateCommandBuilder":
        self.identity = self.identity.with_custom_home(custom_home)
        return self

    def build_spec(self) -> ContainerSpec:
        """Resolve every mount and variable into a ContainerSpec."""
        if not self.image:
            raise ConfigurationError(
                f"No image or clone source resolvable for container {self.name}"
            )

        identity = self.identity
        env = {
            "SHELL": identity.shell_name,
            "HOME": identity.effective_home,
        }
        if identity.custom_home:
            env["HOSTBOX_HOST_HOME"] = identity.home

        return ContainerSpec(
            name=self.name,
            image=self.image,
            identity=identity,
            hostname=f"{self.name}.{self.fs.hostname()}",
            mounts=self._mounts(),
            env=env,
            labels=dict([MANAGER_LABEL]),
            init_path=self.init_path,
            export_path=self.export_path,
            entrypoint=ENTRYPOINT_PATH,
        )

    def _mounts(self) -> List[MountSpec]:
        identity = self.identity
        mounts: List[MountSpec] = []

        def add(mount: MountSpec):
            if mount.destination in (m.destination for m in mounts):
                logger.debug(f"Skipping duplicate mount for {mount.destination}")
                return
            mounts.append(mount)

        add(MountSpec(source=identity.home, destination=identity.home, options=("rslave",)))
        add(MountSpec(source=self.init_path, destination=ENTRYPOINT_PATH, options=("ro",)))
        add(MountSpec(source=self.export_path, destination=EXPORT_PATH, options=("ro",)))
        add(MountSpec(source="/", destination=HOST_ROOT, options=("rslave",)))
        for path in ("/dev", "/sys", "/tmp"):
            add(MountSpec(source=path, destination=path, options=("rslave",)))

        for path in HOST_CONFIG_FILES:
            if self.fs.exists(path):
                add(MountSpec(source=self.fs.realpath(path), destination=path, options=("ro",)))

        # the caller creates the directory before the engine sees it
        if identity.custom_home:
            add(MountSpec(
                source=identity.custom_home,
                destination=identity.custom_home,
                options=("rslave",),
            ))

        # OSTree-based hosts keep homes under /var/home behind a /home symlink
        ostree_home = f"/var/home/{identity.user_name}"
        if self.fs.is_dir(ostree_home):
            add(MountSpec(source=ostree_home, destination=ostree_home, options=("rslave",)))

        runtime_dir = f"/run/user/{identity.uid}"
        if self.fs.is_dir(runtime_dir):
            add(MountSpec(source=runtime_dir, destination=runtime_dir, options=("rslave",)))

        if self.engine.supports(EngineCapability.DEVPTS_MOUNT):
            add(MountSpec(destination="/dev/pts", type="devpts"))

        return mounts

    def render(self, spec: Optional[ContainerSpec] = None) -> List[str]:
        """Engine ``create`` arguments, excluding the engine argv prefix."""
        spec = spec or self.build_spec()
        identity = spec.identity

        args = [
            "create",
            "--hostname", spec.hostname,
            "--name", spec.name,
        ]
        if spec.privileged:
            args.append("--privileged")
        for opt in spec.security_opts:
            args.extend(["--security-opt", opt])
        # the entrypoint drops to the real user once it has provisioned it
        args.extend(["--user", "root:root"])
        args.extend([
            "--ipc", spec.namespaces.ipc,
            "--network", spec.namespaces.network,
            "--pid", spec.namespaces.pid,
        ])
        for key, value in spec.labels.items():
            args.extend(["--label", f"{key}={value}"])
        for key, value in spec.env.items():
            args.extend(["--env", f"{key}={value}"])
        for mount in spec.mounts:
            args.extend(mount.render())

        if self.engine.supports(EngineCapability.USERNS_KEEP_ID):
            args.extend(["--userns", "keep-id"])
        if self.engine.supports(EngineCapability.ULIMIT_HOST):
            args.extend(["--ulimit", "host"])

        args.extend(["--entrypoint", spec.entrypoint, spec.image])
        if self.engine.verbose:
            args.append("--verbose")
        args.extend([
            "--name", identity.user_name,
            "--user", str(identity.uid),
            "--group", str(identity.gid),
            "--home", identity.effective_home,
        ])
        return args
