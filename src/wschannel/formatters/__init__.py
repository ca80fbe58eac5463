"""Formatting helpers for consoles displaying a channel."""

from .status import (
    format_message_line,
    format_status_line_markup,
    get_sender_label,
    get_status_icon,
    get_status_text,
)

__all__ = [
    "format_message_line",
    "format_status_line_markup",
    "get_sender_label",
    "get_status_icon",
    "get_status_text",
]
