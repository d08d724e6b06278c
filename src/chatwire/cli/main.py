"""
chatwire CLI — `chatwire` command.

Commands:
  chatwire chat            Interactive chat room
  chatwire send <message>  One-shot message
  chatwire config          Show or save connection defaults
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install chatwire[cli]")

from chatwire.client import AsyncChatClient
from chatwire.models.session import Session
from chatwire.transport.websocket import DEFAULT_URL

console = Console()
CONFIG_FILE = Path.home() / ".chatwire" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _resolve(url: Optional[str], username: Optional[str]) -> tuple[str, Optional[str]]:
    """Command-line option, then environment, then config file, then default."""
    cfg = _load_config()
    url = url or os.environ.get("CHATWIRE_URL") or cfg.get("url") or DEFAULT_URL
    username = username or os.environ.get("CHATWIRE_USERNAME") or cfg.get("username")
    return url, username


def _get_client(url: Optional[str], username: Optional[str]) -> AsyncChatClient:
    url, username = _resolve(url, username)
    if not username:
        username = click.prompt("Username")
    return AsyncChatClient(Session(username=username), url=url)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    """chatwire — terminal chat client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# Register subcommands from separate modules
from chatwire.cli.chat import chat_cmd, send_cmd
from chatwire.cli.config import config_cmd

main.add_command(chat_cmd)
main.add_command(send_cmd)
main.add_command(config_cmd)


if __name__ == "__main__":
    main()
