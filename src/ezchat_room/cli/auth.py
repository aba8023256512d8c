"""CLI: ezchat auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from ezchat_room.config import DEFAULT_BASE_URL

console = Console()


def _load_config() -> dict:
    from ezchat_room.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from ezchat_room.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="ezchat API base URL")
@click.option("--token", default=None, help="API token (prompted if omitted)")
def auth_login(base_url: Optional[str], token: Optional[str]):
    """Save an API token for later commands."""
    cfg = _load_config()
    url = base_url or cfg.get("base_url", DEFAULT_BASE_URL)
    token = token or click.prompt("API token", hide_input=True)
    _save_config({**cfg, "auth_token": token, "base_url": url})
    console.print(f"[green]Token saved for {url}[/green]")
    console.print("[dim]Stored in ~/.ezchat/config.json[/dim]")


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    if cfg.get("auth_token"):
        console.print(f"[green]Logged in[/green] to {cfg.get('base_url', DEFAULT_BASE_URL)}")
    else:
        console.print("[yellow]Not logged in. Run `ezchat auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    _save_config({})
    console.print("[green]Logged out.[/green]")
