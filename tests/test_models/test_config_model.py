"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from hostbox.models.config import HostboxConfig, ReadinessConfig


class TestHostboxConfig:
    """Test HostboxConfig model."""

    def test_default_values(self):
        config = HostboxConfig()

        assert config.engine == "auto"
        assert config.use_remote_transport is True
        assert config.log_level == "WARNING"
        assert config.default_name == "my-hostbox"
        assert config.readiness.interval == 1.0
        assert config.readiness.timeout is None
        assert config.helpers.init_path is None

    def test_log_level_validation(self):
        assert HostboxConfig(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError) as exc_info:
            HostboxConfig(log_level="INVALID")

        assert "log_level" in str(exc_info.value)

    def test_engine_validation(self):
        with pytest.raises(ValidationError):
            HostboxConfig(engine="lxc")

    def test_readiness_bounds(self):
        with pytest.raises(ValidationError):
            ReadinessConfig(interval=0)
        with pytest.raises(ValidationError):
            ReadinessConfig(timeout=-1)

    def test_extra_keys_ignored(self):
        config = HostboxConfig(unknown_key="value")
        assert not hasattr(config, "unknown_key")
