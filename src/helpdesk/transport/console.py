"""Transport that mirrors bot activity to a rich console."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from helpdesk.transport.memory import InMemoryTransport
from helpdesk.transport.models import Channel, Member, Role


class ConsoleTransport(InMemoryTransport):
    """In-memory transport that prints what the bot sends, deletes and grants."""

    def __init__(self, console: Console, **kwargs) -> None:
        super().__init__(**kwargs)
        self.console = console

    async def send_message(self, channel: Channel, content: str) -> int:
        message_id = await super().send_message(channel, content)
        self.console.print(f"[bold blue]Helpdesk > [/]{escape(content)}")
        return message_id

    async def purge_messages(
        self, channel: Channel, message_ids: Sequence[int]
    ) -> dict[int, Exception | None]:
        results = await super().purge_messages(channel, message_ids)
        deleted = sum(1 for error in results.values() if error is None)
        self.console.print(f"[dim]Cleaned up {deleted} message(s).[/]")
        return results

    async def assign_role(self, guild_id: int, member: Member, role: Role) -> None:
        await super().assign_role(guild_id, member, role)
        self.console.print(f"[green]Granted role {role.name or role.id}.[/]")
