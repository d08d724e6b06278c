"""CLI: chatwire chat, chatwire send"""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from chatwire.chat import ChatCore, ChatInput
from chatwire.errors import ConnectionFailure

console = Console()


def _get_client(url, username):
    from chatwire.cli.main import _get_client
    return _get_client(url, username)


def _run(coro):
    from chatwire.cli.main import _run
    return _run(coro)


class TimelinePrinter:
    """Prints roster changes and timeline entries as they become visible."""

    def __init__(self, core: ChatCore):
        self._core = core
        self._names: list[str] = []
        self._printed: set[int] = set()

    def refresh(self) -> None:
        names = [p.name for p in self._core.roster]
        if names != self._names:
            self._names = names
            console.print(f"[dim]Users: {escape(', '.join(names)) or '(none)'}[/dim]")
        for entry in self._core.render():
            if entry.index in self._printed:
                continue
            self._printed.add(entry.index)
            sender = escape(entry.message.sender)
            text = escape(entry.message.message)
            if entry.kind == "media":
                console.print(f"[green]{sender}:[/green] [magenta]\\[media][/magenta] {text}")
            else:
                console.print(f"[green]{sender}:[/green] {text}")


@click.command("chat")
@click.option("--url", default=None, help="Chat server WebSocket URL")
@click.option("-u", "--username", default=None, help="Display name")
def chat_cmd(url: Optional[str], username: Optional[str]):
    """Interactive chat room."""

    async def _chat():
        client = _get_client(url, username)
        try:
            await client.connect()
        except ConnectionFailure as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise SystemExit(1)

        printer = TimelinePrinter(client.core)
        client.core.add_listener(printer.refresh)
        console.print(f"[cyan]Connected as {escape(client.session.username)}. Type /quit to exit.[/cyan]\n")
        chat_input = ChatInput()
        try:
            while client.connected:
                chat_input.value = await asyncio.to_thread(
                    click.prompt, "You", prompt_suffix=": ", default="", show_default=False,
                )
                if chat_input.value.strip().lower() in ("/quit", "/exit"):
                    break
                if chat_input.value and not client.submit(chat_input):
                    console.print("[yellow]Message not sent.[/yellow]")
        except (KeyboardInterrupt, EOFError, click.Abort):
            pass
        finally:
            await client.close()

    _run(_chat())


@click.command("send")
@click.argument("message")
@click.option("--url", default=None, help="Chat server WebSocket URL")
@click.option("-u", "--username", default=None, help="Display name")
def send_cmd(message: str, url: Optional[str], username: Optional[str]):
    """Send a one-shot message."""

    async def _send():
        client = _get_client(url, username)
        try:
            await client.connect()
        except ConnectionFailure as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise SystemExit(1)
        try:
            sent = client.send_message(message)
        finally:
            await client.close()
        if not sent:
            console.print("[red]Message not sent.[/red]")
            raise SystemExit(1)

    _run(_send())
