"""CLI: ezchat watch, ezchat send, ezchat history"""

import asyncio
import json
from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from ezchat_room import ChatMessage, ConnectionStatus, RoomSession, connect_to_room
from ezchat_room.store import Readable, snapshot

console = Console()

TERMINAL = {ConnectionStatus.CLOSED, ConnectionStatus.ERRORED}


def _room_config(**overrides: Any):
    from ezchat_room.cli.main import _room_config
    return _room_config(**overrides)


def _run(coro):
    from ezchat_room.cli.main import _run
    return _run(coro)


def _text(message: ChatMessage) -> str:
    extra = message.model_extra or {}
    for key in ("text", "content", "message"):
        if isinstance(extra.get(key), str):
            return extra[key]
    return json.dumps(extra, default=str)


def _author(message: ChatMessage) -> str:
    extra = message.model_extra or {}
    user = extra.get("user")
    if isinstance(user, dict):
        return str(user.get("displayName") or user.get("username") or user.get("id", "?"))
    return str(extra.get("username") or extra.get("userId") or "?")


async def _wait_for(cell: Readable[Any], predicate: Callable[[Any], bool]) -> Any:
    loop = asyncio.get_running_loop()
    done: asyncio.Future[Any] = loop.create_future()

    def check(value: Any) -> None:
        if predicate(value) and not done.done():
            done.set_result(value)

    unsubscribe = cell.subscribe(check)
    try:
        return await done
    finally:
        unsubscribe()


async def _close(session: RoomSession) -> None:
    close = getattr(session.transport, "close", None)
    if close is not None:
        await close()


@click.command("watch")
@click.argument("room_id", type=int)
def watch_cmd(room_id: int):
    """Follow a room: print history, then live messages."""

    config = _room_config(reverse_messages=True)

    async def _watch():
        session = connect_to_room(room_id, config)
        seen: set = set()

        def on_messages(messages: list[ChatMessage]) -> None:
            for m in messages:
                if m.id not in seen:
                    seen.add(m.id)
                    console.print(f"[bold]{_author(m)}[/bold]: {_text(m)}")

        def on_error(err: Any) -> None:
            if err is not None:
                console.print(f"[red]{err}[/red]")

        unsubscribers = [session.messages.subscribe(on_messages), session.error.subscribe(on_error)]
        try:
            with console.status("Connecting..."):
                await _wait_for(session.status, lambda s: s is not ConnectionStatus.LOADING)
            if session.status.get() is ConnectionStatus.OPEN:
                console.print("[cyan]Connected (Ctrl+C to exit)[/cyan]")
            status = await _wait_for(session.status, lambda s: s in TERMINAL)
            console.print(f"[dim][{status.value}][/dim]")
        finally:
            for unsubscribe in unsubscribers:
                unsubscribe()
            await _close(session)

    try:
        _run(_watch())
    except KeyboardInterrupt:
        pass


@click.command("send")
@click.argument("room_id", type=int)
@click.argument("message")
def send_cmd(room_id: int, message: str):
    """Send a one-shot message to a room."""

    config = _room_config()

    async def _send():
        session = connect_to_room(room_id, config)
        try:
            with console.status("Connecting..."):
                status = await _wait_for(session.status, lambda s: s is not ConnectionStatus.LOADING)
            if status is ConnectionStatus.OPEN and await session.send_message(message):
                console.print("[green]Sent.[/green]")
            else:
                console.print(f"[red]Not sent: {session.error.get()}[/red]")
                raise SystemExit(1)
        finally:
            await _close(session)

    _run(_send())


@click.command("history")
@click.argument("room_id", type=int)
@click.option("--pages", default=1, type=int, help="Older pages to fetch after the first")
@click.option("--per-page", default=None, type=int)
@click.option("--json-output", "--json", is_flag=True)
def history_cmd(room_id: int, pages: int, per_page, json_output: bool):
    """Print room history, oldest first."""

    overrides: dict[str, Any] = {"reverse_messages": True}
    if per_page:
        overrides["messages_per_page"] = per_page
    config = _room_config(**overrides)

    async def _history():
        session = connect_to_room(room_id, config)
        try:
            await session.bootstrap_task
            for _ in range(pages):
                if not session.has_more_messages.get():
                    break
                await session.fetch_more_messages()
            state = snapshot({
                "messages": session.messages,
                "error": session.error,
                "loading_more_error": session.loading_more_error,
                "has_more": session.has_more_messages,
            })
        finally:
            await _close(session)

        if json_output:
            click.echo(json.dumps([m.model_dump() for m in state["messages"]], default=str, indent=2))
            return
        for err in (state["error"], state["loading_more_error"]):
            if err is not None:
                console.print(f"[red]{err}[/red]")
        table = Table(title=f"Room {room_id} ({len(state['messages'])} messages)")
        table.add_column("ID", style="dim")
        table.add_column("From", style="bold")
        table.add_column("Message")
        for m in state["messages"]:
            table.add_row(str(m.id), _author(m), _text(m))
        console.print(table)
        if state["has_more"]:
            console.print("[dim]More history available (--pages)[/dim]")

    _run(_history())
