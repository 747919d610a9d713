"""Interactive chat runner for the Helpdesk CLI."""

import asyncio
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from helpdesk.config.settings import SettingsConfig
from helpdesk.dialogue.session import DialogueSession
from helpdesk.observability.logging import setup_logging
from helpdesk.runtime.listener import HelpdeskListener
from helpdesk.runtime.roles import TemporaryRoleService
from helpdesk.transport.console import ConsoleTransport
from helpdesk.tree.loader import TreeLoader

CHANNEL_ID = 1
GUILD_ID = 1
EXIT_COMMANDS = ("quit", "exit")


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    tree_path: Path
    timeout_seconds: float = 300.0
    user_id: int = 1
    debug: bool = False


class ChatRunner:
    """Interactive chat session runner.

    Plays a single helpdesk channel in the terminal: what the user types
    is posted as their message, and what the bot sends or deletes is
    printed by the ConsoleTransport.
    """

    def __init__(self, config: ChatConfig):
        """Initialize chat runner.

        Args:
            config: Chat configuration
        """
        self.config = config
        self.console = Console()
        self.transport = ConsoleTransport(self.console)
        self.listener: HelpdeskListener | None = None
        self.role_service: TemporaryRoleService | None = None
        self.settings = SettingsConfig()

    def setup(self) -> None:
        """Load the tree and build the sandbox channel, member and roles."""
        setup_logging(level="DEBUG" if self.config.debug else "WARNING")

        tree = TreeLoader.load(self.config.tree_path)
        self.settings = SettingsConfig(expire_minutes=self.config.timeout_seconds / 60)

        self.transport.add_channel(CHANNEL_ID, GUILD_ID, name="helpdesk")
        self.transport.add_member(GUILD_ID, self.config.user_id, display_name="you")
        for node in tree.values():
            if node.role_id is not None:
                self.transport.add_role(GUILD_ID, node.role_id, name=f"{node.id} role")

        self.role_service = TemporaryRoleService(
            self.transport, lifetime_seconds=self.settings.temporary_role_minutes * 60
        )
        self.listener = HelpdeskListener(
            self.transport,
            {CHANNEL_ID: tree},
            settings=self.settings,
            grant_registry=self.role_service,
        )

    async def start(self) -> None:
        """Run the session until it times out or the user quits."""
        if self.listener is None or self.role_service is None:
            self.setup()
        assert self.listener is not None and self.role_service is not None

        self.console.print(
            f"Type the number of your choice, or [bold]{'/'.join(EXIT_COMMANDS)}[/] to leave.\n"
        )
        self.role_service.start(self.settings.role_sweep_seconds)

        try:
            session = await self._post("help")
            while session is not None and not session.done:
                text = await asyncio.to_thread(Prompt.ask, "[bold green]You[/]", default="")
                if session.done:
                    self.console.print("[yellow]The helpdesk timed out.[/]")
                    break
                if text.strip().lower() in EXIT_COMMANDS:
                    break
                session = await self._post(text)
        finally:
            await self.listener.shutdown()
            await self.role_service.stop()

    async def _post(self, text: str) -> DialogueSession | None:
        assert self.listener is not None
        message = self.transport.post_inbound(CHANNEL_ID, self.config.user_id, text)
        session = self.listener.on_message(message)
        await self.listener.drain()
        return session


async def run_chat_session(config: ChatConfig) -> None:
    """Run an interactive chat session."""
    runner = ChatRunner(config)
    await runner.start()
