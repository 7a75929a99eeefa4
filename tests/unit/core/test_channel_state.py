"""Tests for the channel connection state."""

from neuron.core.app_state import AppState
from neuron.core.channel_state import ChannelState
from neuron.schemas.messaging import ConnectionUpdate


def test_starts_not_ready():
    state = ChannelState()
    assert state.ready is False
    assert state.since is None


def test_ready_then_disconnected():
    state = ChannelState()
    state.mark_ready()
    assert state.ready is True
    since = state.since

    state.mark_ready()
    assert state.since == since

    state.mark_disconnected("401")
    assert state.ready is False
    assert state.last_disconnect_reason == "401"


def test_connection_updates_drive_the_state():
    runtime = AppState()
    runtime.apply_connection_update(ConnectionUpdate(state="open"))
    assert runtime.channel_state.ready is True

    runtime.apply_connection_update(ConnectionUpdate(state="connecting"))
    assert runtime.channel_state.ready is True

    runtime.apply_connection_update(ConnectionUpdate(state="close", reason="logout"))
    assert runtime.channel_state.ready is False
    assert runtime.channel_state.last_disconnect_reason == "logout"
