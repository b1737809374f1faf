"""Shared fixtures."""

import pytest

from hostbox.builder.create import HostFilesystem
from hostbox.models.engine import EngineHandle, EngineKind
from hostbox.models.identity import Identity


class FakeFilesystem(HostFilesystem):
    """Host filesystem with a fixed set of paths."""

    def __init__(self, files=(), dirs=(), links=None, hostname="myhost"):
        self.files = set(files)
        self.dirs = set(dirs)
        self.links = dict(links or {})
        self._hostname = hostname

    def exists(self, path):
        return path in self.files or path in self.dirs or path in self.links

    def is_dir(self, path):
        return path in self.dirs

    def realpath(self, path):
        return self.links.get(path, path)

    def hostname(self):
        return self._hostname


@pytest.fixture
def identity():
    """Host identity of a regular user."""
    return Identity(
        user_name="alice",
        uid=1000,
        gid=1000,
        home="/home/alice",
        shell="/usr/bin/zsh",
    )


@pytest.fixture
def podman():
    return EngineHandle(kind=EngineKind.PODMAN, binary="podman")


@pytest.fixture
def docker():
    return EngineHandle(kind=EngineKind.DOCKER, binary="docker")


@pytest.fixture
def host_fs():
    """Typical host: resolv.conf is a symlink into /run."""
    return FakeFilesystem(
        files={"/etc/hosts", "/etc/resolv.conf", "/etc/localtime"},
        dirs={"/run/user/1000"},
        links={
            "/etc/resolv.conf": "/run/systemd/resolve/stub-resolv.conf",
            "/etc/localtime": "/usr/share/zoneinfo/Europe/Lisbon",
        },
    )


@pytest.fixture
def make_fs():
    """Factory for FakeFilesystem instances."""
    return FakeFilesystem
