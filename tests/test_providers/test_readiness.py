"""Tests for readiness signals."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from hostbox.engine.client import EngineClient
from hostbox.errors import StartupFailedError
from hostbox.providers.readiness import (
    CallbackReadiness,
    LogTailReadiness,
    warning_lines,
)


def _client(*logs):
    client = MagicMock(spec=EngineClient)
    client.logs = AsyncMock(side_effect=list(logs))
    return client


@pytest.mark.asyncio
class TestLogTailReadiness:
    """Test log polling."""

    async def test_error_marker_fails(self):
        client = _client("", "setting up user\nError: boom\n")
        sleep = AsyncMock()

        result = await LogTailReadiness(client, interval=0.5, sleep=sleep).wait("test1", 100)

        assert result.ready is False
        assert "Error: boom" in result.logs
        sleep.assert_awaited_once_with(0.5)
        client.logs.assert_awaited_with("test1", 100)

    async def test_sentinel_succeeds_with_warnings(self):
        client = _client(
            "",
            "",
            "provisioning\ncontainer_setup_done\nWarning: locale not found\n",
        )
        sleep = AsyncMock()

        result = await LogTailReadiness(client, sleep=sleep).wait("test1", 100)

        assert result.ready is True
        assert result.warnings == ["Warning: locale not found"]
        assert sleep.await_count == 2

    async def test_error_wins_over_sentinel(self):
        client = _client("Error: x\ncontainer_setup_done\n")

        result = await LogTailReadiness(client, sleep=AsyncMock()).wait("test1", 0)

        assert result.ready is False

    async def test_timeout(self):
        client = _client("", "", "")
        ticks = iter([0.0, 1.0, 2.5, 4.0])

        readiness = LogTailReadiness(
            client, interval=1.0, timeout=2.0, sleep=AsyncMock(), clock=lambda: next(ticks)
        )
        with pytest.raises(StartupFailedError) as exc_info:
            await readiness.wait("test1", 0)

        assert "did not finish setup" in str(exc_info.value)


@pytest.mark.asyncio
class TestCallbackReadiness:
    """Test direct completion callbacks."""

    async def test_notify_ready(self):
        readiness = CallbackReadiness()
        asyncio.get_running_loop().call_soon(readiness.notify_ready, "WARNING: slow disk")

        result = await readiness.wait("test1", 0)

        assert result.ready is True
        assert result.warnings == ["WARNING: slow disk"]

    async def test_notify_failed(self):
        readiness = CallbackReadiness()
        readiness.notify_failed("Error: no user")

        result = await readiness.wait("test1", 0)

        assert result.ready is False

    async def test_timeout(self):
        with pytest.raises(StartupFailedError):
            await CallbackReadiness(timeout=0.01).wait("test1", 0)


def test_warning_lines_case_insensitive():
    logs = "ok\nwarning: a\nWARNING: b\nError-free\n"
    assert warning_lines(logs) == ["warning: a", "WARNING: b"]
