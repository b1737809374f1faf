"""Engine argument builders for container creation and execution."""

from hostbox.builder.create import CreateCommandBuilder, HostFilesystem, locate_helpers
from hostbox.builder.env import EnvFilterPolicy, synthesize_path
from hostbox.builder.execute import ExecCommandBuilder

__all__ = [
    "CreateCommandBuilder",
    "HostFilesystem",
    "locate_helpers",
    "EnvFilterPolicy",
    "synthesize_path",
    "ExecCommandBuilder",
]
