"""Tests for the Message domain type."""

import dataclasses

import pytest

from wschannel.domain.types import Message, Sender


def test_factories_set_sender():
    assert Message.outgoing("hi").sender == Sender.SELF
    assert Message.incoming("hi").sender == Sender.REMOTE


def test_ids_are_unique_under_rapid_creation():
    ids = {Message.incoming("x").id for _ in range(1000)}

    assert len(ids) == 1000


def test_timestamp_is_timezone_aware():
    message = Message.outgoing("hi")

    assert message.timestamp.tzinfo is not None


def test_messages_are_immutable():
    message = Message.incoming("hi")

    with pytest.raises(dataclasses.FrozenInstanceError):
        message.content = "changed"  # type: ignore[misc]
