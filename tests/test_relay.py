import pytest

from umdp.errors import ChecksumError, TurnOrderError
from umdp.models.session import Party, SessionState
from umdp.relay import RelaySimulator


def test_start_generates_session():
    sim = RelaySimulator()
    assert sim.session.sequence == 0
    assert sim.status.type == "info"
    assert sim.status.text.startswith("Session started:")
    assert sim.waiting() is None


def test_join_uses_supplied_id():
    sim = RelaySimulator("room-42")
    assert sim.session.session_id == "room-42"
    assert sim.status.text == "Session joined: room-42. Alice to start."


def test_send_then_relay():
    sim = RelaySimulator("room-42")
    datagram = sim.send("A", "hi bob")
    assert sim.pending == datagram
    assert sim.status.text == "Datagram from Alice ready for relay."
    assert sim.session.sequence == 0

    delivery = sim.relay()
    assert delivery.message == "hi bob"
    assert delivery.receiver is Party.B
    assert sim.pending is None
    assert sim.status.type == "ok"
    assert sim.status.text == "Datagram from Alice verified and delivered."
    assert sim.waiting() is Party.A

    assert [e.text for e in sim.panel("A")] == ["hi bob"]
    assert [(e.text, e.direction) for e in sim.panel(Party.B)] == [("hi bob", "received")]


def test_full_exchange():
    sim = RelaySimulator("room-42")
    sim.relay(sim.send(Party.A, "ping"))
    sim.relay(sim.send(Party.B, "pong"))
    assert sim.session.sequence == 2
    assert [e.id for e in sim.entries] == [1, 2, 3, 4]
    assert [e.text for e in sim.panel(Party.A)] == ["ping", "pong"]


def test_empty_message_rejected():
    sim = RelaySimulator()
    with pytest.raises(ValueError, match="Message cannot be empty."):
        sim.send(Party.A, "   ")
    assert sim.entries == []


def test_empty_relay_rejected():
    with pytest.raises(ValueError, match="Relay input cannot be empty."):
        RelaySimulator().relay()


def test_out_of_turn_send_sets_error_status():
    sim = RelaySimulator()
    sim.relay(sim.send(Party.A, "one"))
    with pytest.raises(TurnOrderError):
        sim.send(Party.A, "two")
    assert sim.status.type == "error"
    assert sim.status.text == "Wait for a response before sending from A."


def test_corrupted_relay_keeps_ledger():
    sim = RelaySimulator()
    datagram = sim.send(Party.A, "hello")
    with pytest.raises(ChecksumError):
        sim.relay(datagram[:-3] + ("x" if datagram[-3] != "x" else "y") + datagram[-2:])
    assert sim.status.type == "error"
    assert sim.session.sequence == 0
    assert sim.pending == datagram
    assert len(sim.entries) == 1


def test_new_session_clears_transcript():
    sim = RelaySimulator()
    sim.relay(sim.send(Party.A, "one"))
    old_id = sim.session.session_id
    sim.start()
    assert sim.session.session_id != old_id
    assert sim.entries == []
    assert sim.session.sequence == 0


def test_resume_from_state():
    state = SessionState(session_id="room-42", sequence=3, last_sender=Party.A)
    sim = RelaySimulator(state=state)
    assert sim.session.state == state
    assert sim.status.text == "Session resumed: room-42."
    delivery = sim.relay(sim.send(Party.B, "back again"))
    assert delivery.state.sequence == 4
