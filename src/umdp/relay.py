"""
Relay simulator: two parties and a human relay sharing one session ledger.

Mirrors the three-panel flow: a party sends (the datagram lands in the relay
slot), the relay pastes a datagram (it is validated and delivered to the other
party), and every step leaves a status line for display.
"""

import logging
from itertools import count
from typing import Literal, Optional, Union

from pydantic import BaseModel

from umdp.errors import UMDPError
from umdp.models.datagram import Delivery
from umdp.models.session import Party, SessionState
from umdp.session import Session

logger = logging.getLogger(__name__)

PARTY_NAMES = {Party.A: "Alice", Party.B: "Bob"}


class ConversationEntry(BaseModel):
    """One line in a party's panel."""
    id: int
    party: Party
    text: str
    direction: Literal["sent", "received"]


class RelayStatus(BaseModel):
    text: str
    type: Literal["ok", "error", "info"] = "info"


class RelaySimulator:
    def __init__(self, session_id: Optional[str] = None, state: Optional[SessionState] = None):
        self._ids = count(1)
        self.entries: list[ConversationEntry] = []
        self.pending: Optional[str] = None
        self.status = RelayStatus(text="Awaiting datagram...")
        if state is not None:
            self.session = Session.restore(state)
            self.status = RelayStatus(text=f"Session resumed: {self.session.session_id}.")
        else:
            self.start(session_id)

    def start(self, session_id: Optional[str] = None) -> Session:
        """Start a fresh session, or join ``session_id``. Clears the transcript."""
        self.session = Session(session_id)
        self.entries = []
        self.pending = None
        verb = "joined" if session_id else "started"
        self.status = RelayStatus(text=f"Session {verb}: {self.session.session_id}. Alice to start.")
        logger.info("session %s %s", self.session.session_id, verb)
        return self.session

    def send(self, sender: Union[Party, str], text: str) -> str:
        sender = Party.coerce(sender)
        if not text.strip():
            raise ValueError("Message cannot be empty.")
        try:
            datagram = self.session.pack(text, sender)
        except UMDPError as e:
            self.status = RelayStatus(text=e.message, type="error")
            raise
        self.pending = datagram
        self.entries.append(ConversationEntry(id=next(self._ids), party=sender, text=text, direction="sent"))
        self.status = RelayStatus(text=f"Datagram from {PARTY_NAMES[sender]} ready for relay.")
        return datagram

    def relay(self, datagram: Optional[str] = None) -> Delivery:
        """Deliver ``datagram`` (or the pending one) to the receiving party."""
        raw = datagram if datagram is not None else self.pending
        if not raw or not raw.strip():
            raise ValueError("Relay input cannot be empty.")
        try:
            delivery = self.session.unpack(raw)
        except UMDPError as e:
            self.status = RelayStatus(text=e.message, type="error")
            raise
        self.entries.append(ConversationEntry(
            id=next(self._ids), party=delivery.receiver, text=delivery.message, direction="received",
        ))
        self.pending = None
        self.status = RelayStatus(
            text=f"Datagram from {PARTY_NAMES[delivery.sender]} verified and delivered.", type="ok",
        )
        return delivery

    def panel(self, party: Union[Party, str]) -> list[ConversationEntry]:
        party = Party.coerce(party)
        return [e for e in self.entries if e.party == party]

    def waiting(self) -> Optional[Party]:
        """The party that must wait for a response, if any."""
        return self.session.last_sender
