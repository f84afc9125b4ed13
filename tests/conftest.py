"""
Shared fixtures: a transport fake that records every addressed send and
resolves it to the connections that would receive it.
"""

import pytest

from chat_server import ChatService, ChatState, Transport


class RecordingTransport(Transport):
    """
    In-memory Transport.

    Attributes:
        connected: Connection ids that are currently open
        subscriptions: room_id -> subscribed connection ids
        calls: (kind, target, event, payload) per emit call, in order
        deliveries: (connection_id, event, payload) per delivered frame, in order
    """

    def __init__(self):
        self.connected = []
        self.subscriptions = {}
        self.calls = []
        self.deliveries = []

    def connect(self, connection_id):
        self.connected.append(connection_id)

    def close(self, connection_id):
        self.connected.remove(connection_id)

    def join(self, connection_id, room_id):
        self.subscriptions.setdefault(room_id, set()).add(connection_id)

    def leave(self, connection_id, room_id):
        self.subscriptions.get(room_id, set()).discard(connection_id)

    def emit_to(self, connection_id, event, payload):
        self.calls.append(("unicast", connection_id, event, payload))
        if connection_id in self.connected:
            self.deliveries.append((connection_id, event, payload))

    def emit_to_room(self, room_id, event, payload, exclude=None):
        self.calls.append(("room", room_id, event, payload))
        for connection_id in sorted(self.subscriptions.get(room_id, set())):
            if connection_id != exclude and connection_id in self.connected:
                self.deliveries.append((connection_id, event, payload))

    def emit_all(self, event, payload):
        self.calls.append(("all", None, event, payload))
        for connection_id in self.connected:
            self.deliveries.append((connection_id, event, payload))

    def received(self, connection_id, event=None):
        """Frames delivered to one connection, optionally of one event type."""
        return [
            (ev, payload)
            for cid, ev, payload in self.deliveries
            if cid == connection_id and (event is None or ev == event)
        ]

    def events_for(self, connection_id):
        return [ev for ev, _ in self.received(connection_id)]

    def reset(self):
        self.calls = []
        self.deliveries = []


@pytest.fixture
def transport():
    transport = RecordingTransport()
    for connection_id in ("c-alice", "c-bob", "c-carol"):
        transport.connect(connection_id)
    return transport


@pytest.fixture
def state():
    return ChatState()


@pytest.fixture
def service(transport, state):
    return ChatService(transport, state)


def _check_invariants(state):
    assert state.default_room in state.rooms
    for connection_id, session in state.sessions.all():
        assert session.current_room in state.rooms, session
        assert connection_id in state.rooms.get(session.current_room).occupants
        assert not state.is_terminated(connection_id), connection_id
    for room_id in state.rooms.list_room_ids():
        for connection_id in state.rooms.get(room_id).occupants:
            session = state.sessions.get(connection_id)
            assert session is not None, connection_id
            assert session.current_room == room_id, connection_id


@pytest.fixture
def check_invariants():
    """Assert that sessions and room occupant sets agree."""
    return _check_invariants
