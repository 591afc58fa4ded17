"""
Colon-delimited datagram codec.

    UMDP:<session_id>:<sender>:<sequence>:<checksum>:<payload>

The codec checks field count and tag only. Sender, session, turn, checksum
and sequence rules are enforced by the session state machine.
"""

from typing import Union

from umdp.errors import FormatError
from umdp.models.datagram import DatagramFields
from umdp.models.session import DELIMITER, Party

TAG = "UMDP"
FIELD_COUNT = 6


def serialize(
    session_id: str,
    sender: Party,
    sequence: Union[int, str],
    checksum: str,
    payload: str,
) -> str:
    """Join the datagram fields behind the tag. No field may contain the delimiter."""
    fields = [TAG, session_id, Party(sender).value, str(sequence), checksum, payload]
    for name, value in zip(DatagramFields.model_fields, fields):
        if DELIMITER in value:
            raise FormatError(f"Cannot serialize datagram: field {name!r} contains {DELIMITER!r}.", {"field": name})
    return DELIMITER.join(fields)


def parse(raw: str) -> DatagramFields:
    parts = raw.strip().split(DELIMITER)
    if len(parts) != FIELD_COUNT or parts[0] != TAG:
        raise FormatError("Invalid datagram: Incorrect format.", {"field_count": len(parts)})
    tag, session_id, sender, sequence, checksum, payload = parts
    return DatagramFields(
        tag=tag,
        session_id=session_id,
        sender=sender,
        sequence=sequence,
        checksum=checksum,
        payload=payload,
    )
