"""Tests for CLI main module."""

import pytest
from unittest.mock import MagicMock, patch

import typer
from typer.testing import CliRunner

from hostbox.cli.main import _run_cli_command, app
from hostbox.errors import (
    ContainerNotFoundError,
    DependencyMissingError,
    InvalidArgumentError,
    UserDeclinedError,
)
from hostbox.models.config import HostboxConfig


runner = CliRunner()


@pytest.fixture(autouse=True)
def config_manager():
    """Avoid reading real configuration files."""
    with patch("hostbox.cli.main.ConfigManager") as mock_manager:
        mock_manager.return_value.load.return_value = HostboxConfig()
        yield mock_manager


@patch("hostbox.cli.main.setup_logging")
@patch("hostbox.cli.main.console")
def test_run_cli_command_success(mock_console, mock_logging):
    """Test the CLI command runner on a successful execution."""
    mock_handler = MagicMock(return_value=0)

    with pytest.raises(typer.Exit) as exc_info:
        _run_cli_command(mock_handler, verbose=True, arg1="value1")

    assert exc_info.value.exit_code == 0
    mock_logging.assert_called_once_with("DEBUG")
    args, kwargs = mock_handler.call_args
    assert isinstance(args[0], HostboxConfig)
    assert kwargs == {"verbose": True, "arg1": "value1"}
    mock_console.print.assert_not_called()


@pytest.mark.parametrize("error,code", [
    (DependencyMissingError("no engine"), 127),
    (InvalidArgumentError("choose one"), 2),
    (ContainerNotFoundError("test1"), 1),
])
@patch("hostbox.cli.main.setup_logging")
@patch("hostbox.cli.main.console")
def test_run_cli_command_errors(mock_console, mock_logging, error, code):
    """Errors are printed and mapped onto exit codes."""
    mock_handler = MagicMock(side_effect=error)

    with pytest.raises(typer.Exit) as exc_info:
        _run_cli_command(mock_handler, verbose=False)

    assert exc_info.value.exit_code == code
    printed = mock_console.print.call_args[0][0]
    assert printed.startswith("[red]Error:[/red]")


@patch("hostbox.cli.main.setup_logging")
@patch("hostbox.cli.main.console")
def test_run_cli_command_declined(mock_console, mock_logging):
    mock_handler = MagicMock(side_effect=UserDeclinedError("Next time, pull first"))

    with pytest.raises(typer.Exit) as exc_info:
        _run_cli_command(mock_handler, verbose=False)

    assert exc_info.value.exit_code == 0
    mock_console.print.assert_called_once_with("Next time, pull first")


@patch("hostbox.cli.main.create_container")
def test_create_command_flags(mock_create):
    mock_create.return_value = 0

    result = runner.invoke(app, ["create", "-n", "test1", "-i", "alpine", "-Y", "-H", "/srv/box"])

    assert result.exit_code == 0
    kwargs = mock_create.call_args.kwargs
    assert kwargs["name"] == "test1"
    assert kwargs["image"] == "alpine"
    assert kwargs["non_interactive"] is True
    assert kwargs["home"] == "/srv/box"
    assert kwargs["clone"] is None


@patch("hostbox.cli.main.create_container")
def test_create_command_environment(mock_create):
    mock_create.return_value = 0
    env = {
        "HOSTBOX_CONTAINER_NAME": "envbox",
        "HOSTBOX_CONTAINER_IMAGE": "debian",
        "HOSTBOX_NON_INTERACTIVE": "1",
    }

    result = runner.invoke(app, ["create"], env=env)

    assert result.exit_code == 0
    kwargs = mock_create.call_args.kwargs
    assert kwargs["name"] == "envbox"
    assert kwargs["image"] == "debian"
    assert kwargs["non_interactive"] is True


@patch("hostbox.cli.main.enter_container")
def test_enter_command_passes_trailing_command(mock_enter):
    mock_enter.return_value = 7

    result = runner.invoke(app, ["enter", "--name", "test1", "--headless", "--", "ls", "-la"])

    assert result.exit_code == 7
    kwargs = mock_enter.call_args.kwargs
    assert kwargs["name"] == "test1"
    assert kwargs["headless"] is True
    assert kwargs["command"] == ["ls", "-la"]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
