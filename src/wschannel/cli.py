"""Interactive Typer-based console chat client."""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Dict, Optional

import typer
from rich.console import Console

from wschannel.application.channel import ChatChannel
from wschannel.config import load_channel_config
from wschannel.domain.events import (
    MessageAppended,
    ReconnectScheduled,
    SendRejected,
    StatusChanged,
)
from wschannel.domain.types import ConnectionStatus
from wschannel.formatters import format_message_line, format_status_line_markup
from wschannel.logger import get_logger, setup_logger

logger = get_logger("cli")
app = typer.Typer(
    name="wschannel",
    help="Console chat client for a WebSocket message server",
    add_completion=False,
)
console = Console()

CommandHandler = Callable[[ChatChannel, str], Awaitable[None]]


async def _handle_connect(channel: ChatChannel, _: str) -> None:
    channel.connect()


async def _handle_disconnect(channel: ChatChannel, _: str) -> None:
    channel.disconnect()


async def _handle_status(channel: ChatChannel, _: str) -> None:
    console.print(format_status_line_markup(channel.status, channel.error_message))


async def _handle_history(channel: ChatChannel, _: str) -> None:
    if not channel.messages:
        console.print("[dim]No messages yet. Start a conversation![/]")
        return
    for message in channel.messages:
        console.print(format_message_line(message))


COMMANDS: Dict[str, CommandHandler] = {
    "/connect": _handle_connect,
    "/disconnect": _handle_disconnect,
    "/status": _handle_status,
    "/history": _handle_history,
}


def _sanitize_command(text: str) -> str:
    """Normalize input text by removing carriage returns and trimming whitespace."""
    return text.replace("\r", "").strip()


def _read_line() -> str:
    """Read a raw line from stdin; EOF raises EOFError."""
    line = sys.stdin.readline()
    if line == "":
        raise EOFError
    return line


async def _dispatch_input(channel: ChatChannel, text: str) -> bool:
    """Handle one line of input. Returns False when the client should exit."""
    text = _sanitize_command(text)

    if not text:
        return True

    if text == "/quit":
        return False

    if text.startswith("/"):
        parts = text.split(maxsplit=1)
        handler = COMMANDS.get(parts[0])
        if handler is None:
            console.print("❌ Unknown command. Try /connect, /disconnect, /status, /history or /quit.")
            return True
        await handler(channel, parts[1] if len(parts) > 1 else "")
        return True

    channel.send_message(text)
    return True


def _attach_printers(channel: ChatChannel) -> None:
    """Print every status change and appended message as it happens."""

    def on_status(event: StatusChanged) -> None:
        console.print(format_status_line_markup(event.status, event.error_message))

    def on_message(event: MessageAppended) -> None:
        console.print(format_message_line(event.message))

    def on_rejected(event: SendRejected) -> None:
        if event.reason == "not_connected":
            console.print("[yellow]⚠ Not connected - message not sent.[/]")

    def on_reconnect(event: ReconnectScheduled) -> None:
        console.print(
            format_status_line_markup(ConnectionStatus.DISCONNECTED, reconnect_delay=event.delay)
        )

    channel.events.subscribe(StatusChanged, on_status)
    channel.events.subscribe(MessageAppended, on_message)
    channel.events.subscribe(SendRejected, on_rejected)
    channel.events.subscribe(ReconnectScheduled, on_reconnect)


async def _interactive_loop(channel: ChatChannel) -> None:
    console.print("")
    console.print(f"💬 Chat client for [bold]{channel.url}[/]")
    console.print("Type a message and press Enter to send it.")
    console.print("Commands:")
    console.print("  /connect      Connect (or reconnect) to the server")
    console.print("  /disconnect   Close the connection")
    console.print("  /status       Show the connection status")
    console.print("  /history      Show every message of this session")
    console.print("  /quit         Exit the client")
    console.print("")

    while True:
        try:
            line = await asyncio.to_thread(_read_line)
        except (KeyboardInterrupt, EOFError):
            console.print("\n👋 Goodbye!")
            break

        should_continue = await _dispatch_input(channel, line)
        if not should_continue:
            break


def run_cli(url: Optional[str], reconnect_delay: Optional[float]) -> None:
    config = load_channel_config(url=url, reconnect_delay=reconnect_delay)

    async def runner() -> None:
        channel = ChatChannel(config)
        _attach_printers(channel)
        try:
            channel.connect()
            await _interactive_loop(channel)
        except Exception as exc:
            console.print(f"❌ Error: {exc}")
            logger.exception("Fatal error in CLI")
        finally:
            await channel.aclose()

    try:
        asyncio.run(runner())
    except KeyboardInterrupt:
        console.print("\n👋 Goodbye!")


@app.command()
def main(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="WebSocket endpoint (default: $WSCHANNEL_URL or ws://localhost:8080/ws)",
    ),
    reconnect_delay: Optional[float] = typer.Option(
        None,
        "--reconnect-delay",
        help="Seconds to wait before reconnecting after an abnormal closure",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    console_log: bool = typer.Option(False, "--console-log", help="Also log to stderr"),
) -> None:
    """Connect to a chat server and start the interactive client."""
    setup_logger(log_level="DEBUG" if debug else "INFO", console_output=console_log)
    run_cli(url, reconnect_delay)


if __name__ == "__main__":
    app()
