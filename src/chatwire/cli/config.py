"""CLI: chatwire config"""

from typing import Optional

import click
from rich.console import Console

console = Console()


@click.command("config")
@click.option("--url", default=None, help="Chat server WebSocket URL")
@click.option("-u", "--username", default=None, help="Display name")
def config_cmd(url: Optional[str], username: Optional[str]):
    """Show saved defaults, or save new ones."""
    from chatwire.cli.main import CONFIG_FILE, _load_config, _save_config

    cfg = _load_config()
    if url or username:
        if url:
            cfg["url"] = url
        if username:
            cfg["username"] = username
        _save_config(cfg)
        console.print(f"[dim]Saved to {CONFIG_FILE}[/dim]")

    console.print(f"url: {cfg.get('url', '(default)')}")
    console.print(f"username: {cfg.get('username', '(not set)')}")
