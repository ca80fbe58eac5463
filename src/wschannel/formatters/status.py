"""
Formatting helpers for connection status and chat message lines.
"""

from __future__ import annotations

from rich.markup import escape

from wschannel.domain.types import ConnectionStatus, Message, Sender
from wschannel.utils import format_time_hhmmss


def get_status_icon(status: ConnectionStatus) -> str:
    """Return the emoji used for the given connection status."""
    status_icons = {
        ConnectionStatus.CONNECTED: "🟢",
        ConnectionStatus.DISCONNECTED: "🔴",
        ConnectionStatus.CONNECTING: "🟡",
        ConnectionStatus.ERROR: "🔴",
    }
    return status_icons.get(status, "⚪")


def get_status_text(status: ConnectionStatus) -> str:
    """Return the Rich markup representing the connection status."""
    status_texts = {
        ConnectionStatus.CONNECTED: "[green]Connected[/]",
        ConnectionStatus.DISCONNECTED: "[red]Disconnected[/]",
        ConnectionStatus.CONNECTING: "[yellow]Connecting...[/]",
        ConnectionStatus.ERROR: "[red]Error[/]",
    }
    return status_texts.get(status, "[dim]Unknown[/]")


def format_status_line_markup(
    status: ConnectionStatus,
    error_message: str | None = None,
    reconnect_delay: float | None = None,
) -> str:
    """
    Build the markup for the status line, including retry timing or errors.
    """
    status_details: list[str] = []

    if status == ConnectionStatus.DISCONNECTED and reconnect_delay is not None:
        status_details.append(f"[dim]retry in {reconnect_delay:.0f}s[/]")

    if status == ConnectionStatus.ERROR and error_message:
        status_details.append(f"[red]{escape(error_message)}[/]")

    status_line = f"{get_status_icon(status)} {get_status_text(status)}"
    if status_details:
        status_line += f" [dim]| {' | '.join(status_details)}[/]"
    return status_line


def get_sender_label(sender: Sender) -> str:
    """Return the display label for a message sender."""
    return "You" if sender == Sender.SELF else "Remote"


def format_message_line(message: Message) -> str:
    """Return the Rich markup for one chat message: ``[HH:MM:SS] Label: text``."""
    colour = "cyan" if message.sender == Sender.SELF else "magenta"
    label = get_sender_label(message.sender)
    return (
        f"[dim]\\[{format_time_hhmmss(message.timestamp)}][/] "
        f"[bold {colour}]{label}:[/] {escape(message.content)}"
    )
