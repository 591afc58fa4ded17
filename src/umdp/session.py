"""
Session state machine. Composes and validates datagrams against one ledger.

pack_datagram / unpack_datagram are pure: they read a SessionState snapshot and
never mutate it. unpack_datagram hands back the next snapshot inside a Delivery.

Session wraps a single authoritative snapshot for callers that want a mutable
handle. Its unpack runs validate-and-commit under one lock, so a failed or
racing delivery never leaves a half-updated ledger.
"""

import logging
import re
import threading
from typing import Optional, Union

from umdp import codec
from umdp.checksum import checksum
from umdp.errors import ChecksumError, FormatError, SequenceError, SessionMismatchError, TurnOrderError, UMDPError
from umdp.models.datagram import Delivery
from umdp.models.session import Party, SessionState
from umdp.obfuscation import Obfuscator, default_obfuscator

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def _parse_sequence(text: str) -> Optional[int]:
    if not _DIGITS.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # past the interpreter's int-string digit limit
        return None


def pack_datagram(
    state: SessionState,
    message: str,
    sender: Union[Party, str],
    obfuscator: Optional[Obfuscator] = None,
) -> str:
    """Build the datagram ``sender`` would emit next. The ledger is not touched."""
    sender = Party.coerce(sender)
    if not state.can_send(sender):
        raise TurnOrderError(f"Wait for a response before sending from {sender.value}.", sender.value)
    payload = (obfuscator or default_obfuscator()).encode(message)
    return codec.serialize(state.session_id, sender, state.next_sequence, checksum(payload), payload)


def unpack_datagram(
    state: SessionState,
    raw: str,
    obfuscator: Optional[Obfuscator] = None,
) -> Delivery:
    """Validate ``raw`` against ``state`` and return the message plus the committed snapshot.

    Checks run in a fixed order: format, session, sender literal, turn,
    checksum, sequence, payload decoding. The first failing rule raises; ``state`` is never changed.
    """
    fields = codec.parse(raw)

    if fields.session_id != state.session_id:
        raise SessionMismatchError(state.session_id, fields.session_id)

    if fields.sender not in (Party.A.value, Party.B.value):
        raise FormatError(f"Invalid datagram: Unknown sender {fields.sender!r}.", {"sender": fields.sender})
    sender = Party(fields.sender)

    if not state.can_send(sender):
        raise TurnOrderError(
            "Invalid datagram: Unexpected sender. Waiting for a message from the other party.",
            sender.value,
        )

    expected_checksum = checksum(fields.payload)
    if fields.checksum != expected_checksum:
        raise ChecksumError(expected_checksum, fields.checksum)

    sequence = _parse_sequence(fields.sequence)
    if sequence != state.next_sequence:
        raise SequenceError(state.next_sequence, fields.sequence)

    message = (obfuscator or default_obfuscator()).decode(fields.payload)

    return Delivery(
        message=message,
        sender=sender,
        state=state.advance(sequence, sender),
    )


class Session:
    """Mutable handle over one SessionState ledger."""

    def __init__(self, session_id: Optional[str] = None, obfuscator: Optional[Obfuscator] = None):
        self._state = SessionState.new(session_id)
        self._obfuscator = obfuscator or default_obfuscator()
        self._lock = threading.Lock()

    @classmethod
    def restore(cls, state: SessionState, obfuscator: Optional[Obfuscator] = None) -> "Session":
        session = cls(state.session_id, obfuscator)
        session._state = state
        return session

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def sequence(self) -> int:
        return self._state.sequence

    @property
    def last_sender(self) -> Optional[Party]:
        return self._state.last_sender

    def pack(self, message: str, sender: Union[Party, str]) -> str:
        state = self._state
        try:
            datagram = pack_datagram(state, message, sender, self._obfuscator)
        except UMDPError as e:
            logger.warning("pack rejected for session %s: %s", state.session_id, e)
            raise
        logger.debug(
            "packed datagram seq=%d sender=%s session=%s",
            state.next_sequence, Party.coerce(sender).value, state.session_id,
        )
        return datagram

    def unpack(self, raw: str) -> Delivery:
        with self._lock:
            try:
                delivery = unpack_datagram(self._state, raw, self._obfuscator)
            except UMDPError as e:
                logger.warning("datagram rejected for session %s: %s", self._state.session_id, e)
                raise
            self._state = delivery.state
        logger.info(
            "committed seq=%d sender=%s session=%s",
            delivery.state.sequence, delivery.sender.value, delivery.state.session_id,
        )
        return delivery

    def __repr__(self) -> str:
        return f"Session(session_id={self.session_id!r}, sequence={self.sequence}, last_sender={self.last_sender and self.last_sender.value})"
