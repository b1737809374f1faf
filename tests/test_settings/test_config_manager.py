"""Tests for configuration loading."""

import pytest

from hostbox.config import ConfigManager, merge_dicts, user_config_path
from hostbox.errors import ConfigurationError


@pytest.fixture
def config_files(tmp_path):
    """System and user config files."""
    system = tmp_path / "etc.yaml"
    user = tmp_path / "user.yaml"
    system.write_text("""
engine: docker
default_image: alpine:latest
readiness:
  interval: 2
  timeout: 300
""")
    user.write_text("""
engine: podman
readiness:
  interval: 0.5
""")
    return [system, user]


class TestConfigManager:
    """Test ConfigManager."""

    def test_defaults_without_files(self, tmp_path):
        config = ConfigManager(paths=[tmp_path / "missing.yaml"], environ={}).load()
        assert config.engine == "auto"

    def test_later_files_override(self, config_files):
        config = ConfigManager(paths=config_files, environ={}).load()

        assert config.engine == "podman"
        assert config.default_image == "alpine:latest"
        # nested keys are merged, not replaced
        assert config.readiness.interval == 0.5
        assert config.readiness.timeout == 300

    def test_environment_overrides(self, config_files):
        environ = {"HOSTBOX_CONTAINER_MANAGER": "docker", "HOSTBOX_LOG_LEVEL": "info"}
        config = ConfigManager(paths=config_files, environ=environ).load()

        assert config.engine == "docker"
        assert config.log_level == "INFO"

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("engine: lxc\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(paths=[path], environ={}).load()

        assert "engine" in str(exc_info.value)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(paths=[path], environ={}).load()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        config = ConfigManager(paths=[path], environ={}).load()
        assert config.default_name == "my-hostbox"


def test_user_config_path():
    assert str(user_config_path({"XDG_CONFIG_HOME": "/cfg"})) == "/cfg/hostbox/config.yaml"
    assert str(user_config_path({"HOME": "/home/alice"})) == "/home/alice/.config/hostbox/config.yaml"


def test_merge_dicts():
    merged = merge_dicts({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1}
