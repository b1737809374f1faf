"""Systemd user-manager queries over DBus."""

import logging
from typing import Optional

from dbus_next.aio import MessageBus
from dbus_next import BusType

from hostbox.utils.process import run_command


logger = logging.getLogger(__name__)


class SystemdDBus:
    """DBus interface to the per-user systemd instance."""

    def __init__(self, bus_type: BusType = BusType.SESSION):
        """Initialize DBus connection state."""
        self.bus_type = bus_type
        self.bus: Optional[MessageBus] = None
        self.systemd = None

    async def connect(self):
        """Connect to DBus.

        A missing session bus is not fatal; queries fall back to systemctl.
        """
        try:
            self.bus = await MessageBus(bus_type=self.bus_type).connect()
            introspection = await self.bus.introspect(
                "org.freedesktop.systemd1",
                "/org/freedesktop/systemd1"
            )
            self.systemd = self.bus.get_proxy_object(
                "org.freedesktop.systemd1",
                "/org/freedesktop/systemd1",
                introspection
            ).get_interface("org.freedesktop.systemd1.Manager")
            logger.debug("Connected to systemd DBus")
        except Exception as e:
            logger.debug(f"Failed to connect to DBus: {e}")
            self.systemd = None

    async def disconnect(self):
        """Disconnect from DBus."""
        if self.bus:
            self.bus.disconnect()
            self.bus = None
            self.systemd = None

    async def get_unit_state(self, unit_name: str) -> str:
        """Get the active state of a unit."""
        if self.systemd:
            try:
                unit_path = await self.systemd.call_get_unit(unit_name)

                introspection = await self.bus.introspect(
                    "org.freedesktop.systemd1",
                    unit_path
                )
                unit_proxy = self.bus.get_proxy_object(
                    "org.freedesktop.systemd1",
                    unit_path,
                    introspection
                ).get_interface("org.freedesktop.DBus.Properties")

                state = await unit_proxy.call_get(
                    "org.freedesktop.systemd1.Unit",
                    "ActiveState"
                )
                return state.value

            except Exception as e:
                logger.debug(f"Failed to get unit state via DBus: {e}")

        cmd = ["systemctl"]
        if self.bus_type == BusType.SESSION:
            cmd.append("--user")
        cmd.extend(["is-active", unit_name])
        try:
            result = await run_command(cmd, check=False, capture_output=True)
        except FileNotFoundError:
            logger.debug("systemctl not available")
            return "unknown"
        return result.stdout.strip()

    async def is_active(self, unit_name: str) -> bool:
        return await self.get_unit_state(unit_name) == "active"
