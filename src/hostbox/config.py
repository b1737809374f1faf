"""Configuration loading."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from hostbox.errors import ConfigurationError
from hostbox.models.config import HostboxConfig


logger = logging.getLogger(__name__)

SYSTEM_CONFIG = Path("/etc/hostbox/config.yaml")

# environment variable -> top-level config key
ENV_OVERRIDES = {
    "HOSTBOX_CONTAINER_MANAGER": "engine",
    "HOSTBOX_LOG_LEVEL": "log_level",
}


def user_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    environ = os.environ if environ is None else environ
    base = environ.get("XDG_CONFIG_HOME") or str(Path(environ.get("HOME", "~")).expanduser() / ".config")
    return Path(base) / "hostbox" / "config.yaml"


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


class ConfigManager:
    """Loads HostboxConfig from YAML files and the environment.

    Files are read in order, later ones overriding earlier keys; environment
    overrides apply last.
    """

    def __init__(
        self,
        paths: Optional[List[Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.paths = paths if paths is not None else [SYSTEM_CONFIG, user_config_path(self.environ)]
        self.yaml = YAML(typ="safe")
        self.config: Optional[HostboxConfig] = None

    def load(self) -> HostboxConfig:
        """Load and validate configuration."""
        data: Dict[str, Any] = {}
        for path in self.paths:
            if not path.is_file():
                continue
            data = merge_dicts(data, self._read_yaml(path))
            logger.debug(f"Loaded config: {path}")

        for env_name, key in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                data[key] = value

        try:
            self.config = HostboxConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        return self.config

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            content = self.yaml.load(file_path.read_text())
        except (OSError, YAMLError) as e:
            raise ConfigurationError(f"Cannot read {file_path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"{file_path} must contain a mapping")
        return dict(content)
