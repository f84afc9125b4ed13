"""
Tests for the Session Lifecycle Manager

Covers join_chat, join_room and disconnect, asserting on the ordered
sequence of emitted events as well as the resulting state.
"""

import pytest

from chat_server import (
    AlreadyRegisteredError,
    ConnectionTerminatedError,
    ConnectionStatus,
    EmptyNameError,
    EmptyRoomNameError,
    NameTakenError,
    NotRegisteredError,
    SessionLifecycleManager,
)


@pytest.fixture
def lifecycle(state, transport):
    return SessionLifecycleManager(state, transport)


# ----------------------------------------------------------------------------
# join_chat
# ----------------------------------------------------------------------------

def test_join_chat_emits_in_order(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")

    assert [(kind, event) for kind, _, event, _ in transport.calls] == [
        ("all", "user_joined"),
        ("unicast", "online_users"),
        ("unicast", "available_rooms"),
        ("unicast", "receive_message"),
        ("room", "room_users_update"),
    ]


def test_join_chat_payloads(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")

    joined = transport.received("c-bob", "user_joined")
    assert joined == [
        (
            "user_joined",
            {"connectionId": "c-alice", "displayName": "alice", "roomId": "general"},
        )
    ]

    (_, online), = transport.received("c-alice", "online_users")
    assert online == [
        {"connectionId": "c-alice", "displayName": "alice", "currentRoom": "general"}
    ]

    (_, rooms), = transport.received("c-alice", "available_rooms")
    assert rooms == ["general"]

    (_, welcome), = transport.received("c-alice", "receive_message")
    assert welcome["sender"] == "System"
    assert welcome["room"] == "general"
    assert welcome["body"] == "Welcome, alice! You are in the 'general' room."

    (_, users), = transport.received("c-alice", "room_users_update")
    assert users == {"roomId": "general", "displayNames": ["alice"]}


def test_join_chat_sends_private_events_only_to_joiner(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")

    assert transport.events_for("c-bob") == ["user_joined"]


def test_join_chat_updates_state(lifecycle, state, check_invariants):
    session = lifecycle.join_chat("c-alice", "alice")

    assert lifecycle.status("c-alice") is ConnectionStatus.ACTIVE
    assert session.current_room == "general"
    assert state.rooms.get("general").occupants == {"c-alice"}
    check_invariants(state)


def test_join_chat_trims_name(lifecycle):
    session = lifecycle.join_chat("c-alice", "  alice  ")
    assert session.display_name == "alice"


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_join_chat_rejects_blank_name(lifecycle, state, transport, name):
    with pytest.raises(EmptyNameError):
        lifecycle.join_chat("c-alice", name)

    assert lifecycle.status("c-alice") is ConnectionStatus.UNREGISTERED
    assert transport.calls == []
    assert state.rooms.get("general").occupants == set()


def test_join_chat_rejects_taken_name(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    transport.reset()

    with pytest.raises(NameTakenError):
        lifecycle.join_chat("c-bob", "alice")

    assert transport.calls == []
    assert state.sessions.get("c-bob") is None
    assert state.rooms.get("general").occupants == {"c-alice"}


def test_duplicate_name_rejected_regardless_of_order(lifecycle):
    lifecycle.join_chat("c-bob", "bob")
    lifecycle.join_chat("c-alice", "alice")

    with pytest.raises(NameTakenError):
        lifecycle.join_chat("c-carol", "bob")
    with pytest.raises(NameTakenError):
        lifecycle.join_chat("c-carol", "alice")


def test_distinct_names_all_succeed(lifecycle, state, check_invariants):
    for cid, name in [("c-alice", "alice"), ("c-bob", "bob"), ("c-carol", "carol")]:
        lifecycle.join_chat(cid, name)

    names = [session.display_name for _, session in state.sessions.all()]
    assert sorted(names) == ["alice", "bob", "carol"]
    check_invariants(state)


def test_join_chat_twice_from_same_connection(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    transport.reset()

    with pytest.raises(AlreadyRegisteredError):
        lifecycle.join_chat("c-alice", "alice2")

    assert transport.calls == []
    assert state.sessions.get("c-alice").display_name == "alice"


def test_second_joiner_sees_both_in_online_users(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")

    (_, online), = transport.received("c-bob", "online_users")
    assert sorted(user["displayName"] for user in online) == ["alice", "bob"]

    updates = transport.received("c-alice", "room_users_update")
    assert updates[-1][1] == {"roomId": "general", "displayNames": ["alice", "bob"]}


# ----------------------------------------------------------------------------
# join_room
# ----------------------------------------------------------------------------

def test_join_room_requires_session(lifecycle, transport):
    with pytest.raises(NotRegisteredError):
        lifecycle.join_room("c-alice", "dev")

    assert transport.calls == []


def test_join_room_rejects_blank_room(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    transport.reset()

    with pytest.raises(EmptyRoomNameError):
        lifecycle.join_room("c-alice", "  ")

    assert transport.calls == []
    assert state.sessions.get("c-alice").current_room == "general"


def test_join_new_room_emits_in_order(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")
    transport.reset()

    lifecycle.join_room("c-alice", "dev")

    assert [(kind, target, event) for kind, target, event, _ in transport.calls] == [
        ("room", "general", "room_users_update"),
        ("room", "general", "receive_message"),
        ("all", None, "available_rooms"),
        ("room", "dev", "room_users_update"),
        ("room", "dev", "receive_message"),
        ("unicast", "c-alice", "room_changed"),
    ]

    assert transport.calls[0][3] == {"roomId": "general", "displayNames": []}
    assert transport.calls[1][3]["body"] == "alice has left the room."
    assert transport.calls[2][3] == ["general", "dev"]
    assert transport.calls[3][3] == {"roomId": "dev", "displayNames": ["alice"]}
    assert transport.calls[4][3]["body"] == "alice has joined the room."
    assert transport.calls[5][3] == "dev"


def test_join_existing_room_does_not_announce_rooms(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")
    lifecycle.join_room("c-bob", "dev")
    transport.reset()

    lifecycle.join_room("c-alice", "dev")

    events = [event for _, _, event, _ in transport.calls]
    assert "available_rooms" not in events
    assert transport.received("c-bob", "room_users_update")[-1][1] == {
        "roomId": "dev",
        "displayNames": ["alice", "bob"],
    }


def test_join_room_moves_membership(lifecycle, state, transport, check_invariants):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")
    transport.reset()

    lifecycle.join_room("c-bob", "dev")

    assert state.rooms.get("general").occupants == {"c-alice"}
    assert state.rooms.get("dev").occupants == {"c-bob"}
    assert state.sessions.get("c-bob").current_room == "dev"
    assert transport.received("c-bob", "room_changed") == [("room_changed", "dev")]
    assert transport.received("c-alice", "room_changed") == []
    check_invariants(state)


def test_old_room_is_told_about_leave(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")
    transport.reset()

    lifecycle.join_room("c-bob", "dev")

    alice_events = transport.received("c-alice")
    assert ("room_users_update", {"roomId": "general", "displayNames": ["alice"]}) in alice_events
    left = [p for ev, p in alice_events if ev == "receive_message"]
    assert [m["body"] for m in left] == ["bob has left the room."]
    # bob left general before the broadcast
    bob_messages = [p["body"] for ev, p in transport.received("c-bob") if ev == "receive_message"]
    assert bob_messages == ["bob has joined the room."]


def test_rejoin_same_room_repeats_broadcasts(lifecycle, state, transport, check_invariants):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")

    for _ in range(2):
        transport.reset()
        lifecycle.join_room("c-bob", "general")

        assert [(target, event) for _, target, event, _ in transport.calls] == [
            ("general", "room_users_update"),
            ("general", "receive_message"),
            ("general", "room_users_update"),
            ("general", "receive_message"),
            ("c-bob", "room_changed"),
        ]
        assert state.rooms.get("general").occupants == {"c-alice", "c-bob"}

    check_invariants(state)


def test_join_room_twice_keeps_single_membership(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_room("c-alice", "dev")
    lifecycle.join_room("c-alice", "dev")

    assert state.rooms.get("dev").occupants == {"c-alice"}
    assert state.rooms.get("general").occupants == set()
    assert len(transport.received("c-alice", "room_changed")) == 2


# ----------------------------------------------------------------------------
# disconnect
# ----------------------------------------------------------------------------

def test_disconnect_unregistered_is_silent(lifecycle, transport):
    assert lifecycle.disconnect("c-alice") is None
    assert transport.calls == []


def test_disconnect_emits_in_order(lifecycle, state, transport, check_invariants):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")
    transport.reset()
    transport.close("c-bob")

    session = lifecycle.disconnect("c-bob")

    assert session.display_name == "bob"
    assert [(kind, target, event) for kind, target, event, _ in transport.calls] == [
        ("room", "general", "room_users_update"),
        ("room", "general", "receive_message"),
        ("all", None, "user_disconnected"),
    ]
    assert transport.calls[0][3] == {"roomId": "general", "displayNames": ["alice"]}
    assert transport.calls[1][3]["body"] == "bob has left the room."
    assert transport.calls[2][3] == "c-bob"

    assert state.sessions.get("c-bob") is None
    assert state.rooms.get("general").occupants == {"c-alice"}
    assert lifecycle.status("c-bob") is ConnectionStatus.TERMINATED
    check_invariants(state)


def test_disconnect_from_custom_room(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.join_chat("c-bob", "bob")
    lifecycle.join_room("c-alice", "dev")
    lifecycle.join_room("c-bob", "dev")
    transport.reset()

    lifecycle.disconnect("c-alice")

    assert state.rooms.get("dev").occupants == {"c-bob"}
    assert "dev" in state.rooms
    assert ("room_users_update", {"roomId": "dev", "displayNames": ["bob"]}) in (
        transport.received("c-bob")
    )


def test_disconnect_frees_the_name(lifecycle):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.disconnect("c-alice")

    session = lifecycle.join_chat("c-bob", "alice")
    assert session.connection_id == "c-bob"


def test_disconnect_twice_is_safe(lifecycle, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.disconnect("c-alice")
    transport.reset()

    assert lifecycle.disconnect("c-alice") is None
    assert transport.calls == []


def test_disconnected_connection_cannot_rejoin(lifecycle, state, transport):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.disconnect("c-alice")
    transport.reset()

    with pytest.raises(ConnectionTerminatedError):
        lifecycle.join_chat("c-alice", "alice2")
    with pytest.raises(NotRegisteredError):
        lifecycle.join_room("c-alice", "dev")

    assert lifecycle.status("c-alice") is ConnectionStatus.TERMINATED
    assert transport.calls == []
    assert len(state.sessions) == 0
    assert "dev" not in state.rooms


def test_unregistered_disconnect_terminates(lifecycle, transport):
    lifecycle.disconnect("c-carol")

    assert lifecycle.status("c-carol") is ConnectionStatus.TERMINATED
    with pytest.raises(ConnectionTerminatedError):
        lifecycle.join_chat("c-carol", "carol")
    assert transport.calls == []


def test_forget_connection_clears_terminated(lifecycle, state):
    lifecycle.join_chat("c-alice", "alice")
    lifecycle.disconnect("c-alice")

    state.forget_connection("c-alice")

    assert not state.is_terminated("c-alice")
