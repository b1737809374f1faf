"""Invoking user identity."""

import os
import pwd
from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """The host user the container is provisioned for."""
    model_config = ConfigDict(frozen=True)

    user_name: str
    uid: int = Field(..., ge=0)
    gid: int = Field(..., ge=0)
    home: str
    custom_home: Optional[str] = None
    shell: str = "/bin/bash"

    @property
    def effective_home(self) -> str:
        """HOME as seen inside the container."""
        return self.custom_home or self.home

    @property
    def shell_name(self) -> str:
        return PurePosixPath(self.shell).name or "bash"

    def with_custom_home(self, custom_home: Optional[str]) -> "Identity":
        return self.model_copy(update={"custom_home": custom_home or None})

    @classmethod
    def from_host(cls, environ=None, custom_home: Optional[str] = None) -> "Identity":
        """Resolve the identity of the invoking process."""
        environ = os.environ if environ is None else environ
        uid = os.getuid()
        try:
            entry = pwd.getpwuid(uid)
        except KeyError:
            entry = None

        user_name = environ.get("USER") or (entry.pw_name if entry else str(uid))
        home = environ.get("HOME") or (entry.pw_dir if entry else "/")
        shell = environ.get("SHELL") or (entry.pw_shell if entry else "") or "/bin/bash"

        return cls(
            user_name=user_name,
            uid=uid,
            gid=os.getgid(),
            home=home,
            custom_home=custom_home or None,
            shell=shell,
        )
