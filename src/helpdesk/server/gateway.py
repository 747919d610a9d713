"""Gateway runtime: the in-memory chat backend behind the HTTP API."""

import logging
from collections.abc import Mapping
from pathlib import Path

from helpdesk.config.loader import ConfigLoader
from helpdesk.config.models import AppConfig
from helpdesk.config.settings import SettingsConfig
from helpdesk.runtime.listener import HelpdeskListener
from helpdesk.runtime.roles import TemporaryRoleService
from helpdesk.transport.memory import InMemoryTransport
from helpdesk.tree.models import DialogueTree

logger = logging.getLogger(__name__)


class Gateway:
    """Bundles transport, listener and temporary role service.

    Usage:
        gateway = Gateway.from_config_file("helpdesk.yaml")
        await gateway.start()
        ...
        await gateway.stop()
    """

    def __init__(
        self,
        trees: Mapping[int, DialogueTree],
        guilds: Mapping[int, int],
        settings: SettingsConfig | None = None,
        transport: InMemoryTransport | None = None,
    ) -> None:
        """
        Args:
            trees: Dialogue tree per helpdesk channel id
            guilds: Guild id per helpdesk channel id
            settings: Global settings
            transport: Backing transport (a fresh one if omitted)
        """
        self.settings = settings or SettingsConfig()
        self.transport = transport or InMemoryTransport()
        for channel_id in trees:
            self.transport.add_channel(channel_id, guilds[channel_id])

        self.role_service = TemporaryRoleService(
            self.transport, lifetime_seconds=self.settings.temporary_role_minutes * 60
        )
        self.listener = HelpdeskListener(
            self.transport,
            trees,
            settings=self.settings,
            grant_registry=self.role_service,
        )

    @classmethod
    def from_config(cls, config: AppConfig, base_dir: Path | str) -> "Gateway":
        trees = ConfigLoader.load_trees(config, base_dir)
        guilds = {helpdesk.channel_id: helpdesk.guild_id for helpdesk in config.helpdesks}
        for helpdesk in config.helpdesks:
            node_count = len(trees[helpdesk.channel_id])
            logger.info(
                f"Helpdesk '{helpdesk.name or helpdesk.channel_id}' listens in channel "
                f"{helpdesk.channel_id} of guild {helpdesk.guild_id} ({node_count} nodes)"
            )
        return cls(trees, guilds, settings=config.settings)

    @classmethod
    def from_config_file(cls, path: Path | str) -> "Gateway":
        config_file = ConfigLoader.resolve(path)
        config = ConfigLoader.load(config_file)
        return cls.from_config(config, config_file.parent)

    async def start(self) -> None:
        self.role_service.start(self.settings.role_sweep_seconds)
        logger.info(f"Gateway started with {len(self.listener.trees)} helpdesk(s)")

    async def stop(self) -> None:
        await self.listener.shutdown()
        await self.role_service.stop()
        logger.info("Gateway stopped")
