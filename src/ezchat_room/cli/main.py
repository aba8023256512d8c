"""
ezchat CLI: `ezchat` command.

Commands:
  ezchat auth login            Save an API token
  ezchat watch <room-id>       Follow a room live
  ezchat send <room-id> <msg>  One-shot message
  ezchat history <room-id>     Print recent history
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install ezchat-room[cli]")

from ezchat_room import __version__
from ezchat_room.config import DEFAULT_BASE_URL, RoomConfig, build_config

console = Console()
CONFIG_FILE = Path.home() / ".ezchat" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _room_config(**overrides: Any) -> RoomConfig:
    cfg = _load_config()
    if not cfg.get("auth_token"):
        console.print("[red]Not logged in. Run `ezchat auth login` first.[/red]")
        raise SystemExit(1)
    return build_config(
        {"auth_token": cfg["auth_token"], "base_url": cfg.get("base_url", DEFAULT_BASE_URL)},
        **overrides,
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log transport activity")
def main(verbose: bool):
    """ezchat CLI: follow and post to chat rooms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands from separate modules
from ezchat_room.cli.auth import auth
from ezchat_room.cli.room import history_cmd, send_cmd, watch_cmd

main.add_command(auth)
main.add_command(watch_cmd)
main.add_command(send_cmd)
main.add_command(history_cmd)


if __name__ == "__main__":
    main()
