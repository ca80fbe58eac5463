"""Tests for the console client input handling."""

import io

import pytest
from typer.testing import CliRunner

from wschannel import cli
from wschannel.domain.types import ConnectionStatus


@pytest.mark.asyncio
async def test_plain_text_is_sent(channel, transport_factory):
    channel.connect()
    transport_factory.latest.simulate_open()

    assert await cli._dispatch_input(channel, "  hello there \r") is True

    assert transport_factory.latest.sent == ["hello there"]


@pytest.mark.asyncio
async def test_blank_input_is_ignored(channel, transport_factory):
    channel.connect()
    transport_factory.latest.simulate_open()

    assert await cli._dispatch_input(channel, "   ") is True

    assert transport_factory.latest.sent == []
    assert channel.messages == ()


@pytest.mark.asyncio
async def test_quit_stops_the_loop(channel):
    assert await cli._dispatch_input(channel, "/quit") is False


@pytest.mark.asyncio
async def test_connect_and_disconnect_commands(channel, transport_factory):
    await cli._dispatch_input(channel, "/connect")
    assert channel.status == ConnectionStatus.CONNECTING

    transport_factory.latest.simulate_open()
    await cli._dispatch_input(channel, "/disconnect")

    assert channel.status == ConnectionStatus.DISCONNECTED
    assert transport_factory.latest.close_calls


@pytest.mark.asyncio
async def test_unknown_command_is_not_sent(channel, transport_factory):
    channel.connect()
    transport_factory.latest.simulate_open()

    assert await cli._dispatch_input(channel, "/frobnicate") is True

    assert transport_factory.latest.sent == []


@pytest.mark.asyncio
async def test_printers_render_events(channel, transport_factory, monkeypatch):
    printed = []
    monkeypatch.setattr(cli.console, "print", lambda *args, **kwargs: printed.append(args[0]))
    cli._attach_printers(channel)

    channel.connect()
    transport_factory.latest.simulate_open()
    transport_factory.latest.simulate_message("hello")
    channel.disconnect()
    channel.send_message("late")

    text = "\n".join(printed)
    assert "Connecting" in text
    assert "Connected" in text
    assert "hello" in text
    assert "Not connected" in text


def test_help_lists_options():
    result = CliRunner().invoke(cli.app, ["--help"])

    assert result.exit_code == 0
    assert "--url" in result.output
    assert "--reconnect-delay" in result.output


@pytest.mark.asyncio
async def test_abnormal_close_prints_status_with_retry_delay(channel, transport_factory, monkeypatch):
    printed = []
    monkeypatch.setattr(cli.console, "print", lambda *args, **kwargs: printed.append(args[0]))
    cli._attach_printers(channel)

    channel.connect()
    transport_factory.latest.simulate_open()
    transport_factory.latest.simulate_close(1006)
    channel.disconnect()

    assert "Disconnected" in printed[-1]
    assert "retry in 0s" in printed[-1]


def test_read_line_returns_raw_input(monkeypatch):
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("  hi there \r\n"))

    assert cli._read_line() == "  hi there \r\n"


def test_read_line_raises_on_eof(monkeypatch):
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO(""))

    with pytest.raises(EOFError):
        cli._read_line()
