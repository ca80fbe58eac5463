from datetime import datetime

from rich.text import Text

from wschannel.domain.types import ConnectionStatus, Message
from wschannel.formatters import (
    format_message_line,
    format_status_line_markup,
    get_sender_label,
    get_status_icon,
    get_status_text,
)


def test_get_status_icon_connected():
    assert get_status_icon(ConnectionStatus.CONNECTED) == "🟢"


def test_every_status_has_text():
    for status in ConnectionStatus:
        assert "Unknown" not in get_status_text(status)


def test_status_line_includes_error_message():
    markup = format_status_line_markup(ConnectionStatus.ERROR, "refused [x]")

    assert "Error" in Text.from_markup(markup).plain
    assert "refused [x]" in Text.from_markup(markup).plain


def test_status_line_includes_retry_delay():
    markup = format_status_line_markup(ConnectionStatus.DISCONNECTED, reconnect_delay=3.0)

    assert "retry in 3s" in Text.from_markup(markup).plain


def test_sender_labels():
    assert get_sender_label(Message.outgoing("x").sender) == "You"
    assert get_sender_label(Message.incoming("x").sender) == "Remote"


def test_format_message_line(monkeypatch):
    monkeypatch.setattr("wschannel.formatters.status.format_time_hhmmss", lambda value: "12:34:56")
    message = Message.incoming("hello [bold]world")

    plain = Text.from_markup(format_message_line(message)).plain

    assert plain == "[12:34:56] Remote: hello [bold]world"


def test_format_message_line_uses_message_time():
    message = Message(
        content="hi",
        sender=Message.outgoing("x").sender,
        timestamp=datetime(2024, 1, 1, 9, 5, 7),
    )

    assert "[09:05:07] You: hi" == Text.from_markup(format_message_line(message)).plain
