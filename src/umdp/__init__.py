"""
umdp — User-Mediated Datagram Protocol.

Two parties exchange text only through self-describing datagrams that a
human relay copies from one side and pastes to the other. The protocol makes
corrupted, replayed, foreign and out-of-turn datagrams detectable.
"""

from umdp.checksum import checksum
from umdp.codec import TAG
from umdp.errors import (
    UMDPError,
    FormatError,
    SessionMismatchError,
    TurnOrderError,
    ChecksumError,
    SequenceError,
    DecodeError,
    EncodeError,
)
from umdp.models.datagram import DatagramFields, Delivery
from umdp.models.session import Party, SessionState
from umdp.obfuscation import Obfuscator, encode, decode
from umdp.relay import RelaySimulator
from umdp.session import Session, pack_datagram, unpack_datagram

__version__ = "0.1.0"
__all__ = [
    "Session",
    "SessionState",
    "Party",
    "DatagramFields",
    "Delivery",
    "pack_datagram",
    "unpack_datagram",
    "RelaySimulator",
    "Obfuscator",
    "encode",
    "decode",
    "checksum",
    "TAG",
    "UMDPError",
    "FormatError",
    "SessionMismatchError",
    "TurnOrderError",
    "ChecksumError",
    "SequenceError",
    "DecodeError",
    "EncodeError",
]
