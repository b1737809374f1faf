"""Host environment forwarding rules and PATH synthesis."""

from typing import FrozenSet, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field


# Filesystem-hierarchy directories every container shell should be able to see
STANDARD_PATHS = (
    "/usr/local/sbin",
    "/usr/local/bin",
    "/usr/sbin",
    "/usr/bin",
    "/sbin",
    "/bin",
)


class EnvFilterPolicy(BaseModel):
    """Which host variables may be forwarded into an exec session.

    HOME and PATH are always excluded here and synthesized explicitly by the
    exec builder instead.
    """
    model_config = ConfigDict(frozen=True)

    excluded_names: FrozenSet[str] = Field(
        default=frozenset({"HOME", "PATH", "SHELL", "USER"})
    )
    excluded_prefixes: Tuple[str, ...] = ("HOST",)
    forbidden_value_chars: str = "\"'`"
    reject_whitespace: bool = True

    def allows_name(self, name: str) -> bool:
        if not name or "=" in name:
            return False
        if name in self.excluded_names:
            return False
        return not name.startswith(self.excluded_prefixes)

    def allows_value(self, value: str) -> bool:
        if self.reject_whitespace and any(char.isspace() for char in value):
            return False
        return not any(char in value for char in self.forbidden_value_chars)

    def allows(self, name: str, value: str) -> bool:
        return self.allows_name(name) and self.allows_value(value)

    def apply(self, environ: Mapping[str, str]) -> List[Tuple[str, str]]:
        """Forwardable variables, sorted by name."""
        return sorted(
            (name, value) for name, value in environ.items() if self.allows(name, value)
        )


def synthesize_path(host_path: str) -> str:
    """Host PATH with any missing standard directories appended.

    Host entries keep their order and precedence. Running the result through
    again returns it unchanged.
    """
    entries = [entry for entry in host_path.split(":") if entry]
    for standard in STANDARD_PATHS:
        if standard not in entries:
            entries.append(standard)
    return ":".join(entries)
