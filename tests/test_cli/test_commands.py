"""Tests for CLI command implementations."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from hostbox.cli.commands import build_provider, create_container, enter_container
from hostbox.models.config import HostboxConfig
from hostbox.models.container import CreateRequest, EnterRequest
from hostbox.providers import ContainerProvider


@patch("hostbox.cli.commands.build_provider", new_callable=AsyncMock)
def test_create_container_uses_defaults(mock_build):
    """The configured default name is used when none is given."""
    provider = MagicMock()
    provider.create = AsyncMock(return_value=[])
    mock_build.return_value = provider

    code = create_container(HostboxConfig(non_interactive=True), image="alpine")

    assert code == 0
    request = provider.create.call_args[0][0]
    assert isinstance(request, CreateRequest)
    assert request.name == "my-hostbox"
    assert request.image == "alpine"
    assert request.non_interactive is True


@patch("hostbox.cli.commands.build_provider", new_callable=AsyncMock)
def test_enter_container_returns_exit_code(mock_build):
    provider = MagicMock()
    provider.enter = AsyncMock(return_value=5)
    mock_build.return_value = provider

    code = enter_container(HostboxConfig(), name="test1", command=["echo", "hi"], headless=True)

    assert code == 5
    request = provider.enter.call_args[0][0]
    assert isinstance(request, EnterRequest)
    assert request.command == ["echo", "hi"]
    assert request.headless is True


@pytest.mark.asyncio
@patch("hostbox.cli.commands.select_engine", new_callable=AsyncMock)
async def test_build_provider_wires_engine(mock_select, podman, identity):
    mock_select.return_value = podman
    config = HostboxConfig(engine="podman", use_remote_transport=False)

    provider = await build_provider(config, verbose=True, identity=identity)

    assert isinstance(provider, ContainerProvider)
    assert provider.client.handle is podman
    assert provider.identity is identity
    mock_select.assert_awaited_once_with(
        preference="podman", verbose=True, use_remote_transport=False
    )
