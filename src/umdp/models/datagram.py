"""
Datagram models: the six wire fields and the result of a delivery.
"""

from pydantic import BaseModel, ConfigDict

from umdp.models.session import Party, SessionState


class DatagramFields(BaseModel):
    """Parsed datagram, kept textual. Sender and sequence are validated against a session later."""

    model_config = ConfigDict(frozen=True)

    tag: str
    session_id: str
    sender: str
    sequence: str
    checksum: str
    payload: str


class Delivery(BaseModel):
    """Outcome of a successful unpack: the recovered message and the committed snapshot."""

    model_config = ConfigDict(frozen=True)

    message: str
    sender: Party
    state: SessionState

    @property
    def receiver(self) -> Party:
        return self.sender.other
