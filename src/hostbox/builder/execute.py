"""Assemble the engine ``exec`` invocation that enters a container."""

import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from hostbox.builder.env import EnvFilterPolicy, synthesize_path
from hostbox.models.identity import Identity


def enter_path(argv0: Optional[str] = None) -> str:
    """Resolved path of the executable the caller used to enter."""
    return str(Path(argv0 or sys.argv[0]).resolve())


def login_shell_command(identity: Identity) -> List[str]:
    # by name, so it resolves even when the container keeps shells elsewhere
    return [identity.shell_name, "-l"]


class ExecCommandBuilder:
    """Renders ``exec`` arguments for one enter request."""

    def __init__(
        self,
        name: str,
        identity: Identity,
        policy: Optional[EnvFilterPolicy] = None,
        headless: bool = False,
        command: Optional[Sequence[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        entry_path: Optional[str] = None,
        home: Optional[str] = None,
    ):
        self.name = name
        self.identity = identity
        self.policy = policy or EnvFilterPolicy()
        self.headless = headless
        self.command = list(command) if command else login_shell_command(identity)
        self.environ = os.environ if environ is None else environ
        self.cwd = cwd
        self.entry_path = entry_path or enter_path()
        self.home = home or identity.effective_home

    def workdir(self) -> str:
        if self.cwd is not None:
            return self.cwd or self.home or "/"
        try:
            return os.getcwd()
        except OSError:
            return self.home or "/"

    def render(self) -> List[str]:
        """Engine ``exec`` arguments, excluding the engine argv prefix."""
        args = ["exec", f"--user={self.identity.user_name}"]
        if not self.headless:
            args.extend(["--interactive", "--tty"])
        args.append(f"--workdir={self.workdir()}")
        args.append(f"--env=HOSTBOX_ENTER_PATH={self.entry_path}")

        for key, value in self.policy.apply(self.environ):
            args.append(f"--env={key}={value}")

        args.append(f"--env=HOME={self.home}")
        args.append(f"--env=PATH={synthesize_path(self.environ.get('PATH', ''))}")
        args.append(self.name)
        args.extend(self.command)
        return args
