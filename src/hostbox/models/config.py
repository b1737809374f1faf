"""Configuration models."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReadinessConfig(BaseModel):
    """Startup readiness polling."""
    interval: float = Field(default=1.0, gt=0)
    timeout: Optional[float] = Field(default=None, gt=0, description="None waits forever")


class HelpersConfig(BaseModel):
    """Host paths of the helper binaries mounted into containers."""
    init_path: Optional[str] = None
    export_path: Optional[str] = None


class HostboxConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    engine: Literal["auto", "podman", "docker"] = Field(default="auto")
    use_remote_transport: bool = Field(default=True)
    log_level: str = Field(default="WARNING")
    default_name: str = Field(default="my-hostbox")
    default_image: str = Field(default="registry.fedoraproject.org/fedora-toolbox:latest")
    non_interactive: bool = Field(default=False)
    readiness: ReadinessConfig = Field(default_factory=ReadinessConfig)
    helpers: HelpersConfig = Field(default_factory=HelpersConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
