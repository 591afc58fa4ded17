"""
Session models — parties and the immutable ledger snapshot.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DELIMITER = ":"


class Party(str, Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Party":
        return Party.B if self is Party.A else Party.A

    @classmethod
    def coerce(cls, value: "Party | str") -> "Party":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"sender must be 'A' or 'B', got {value!r}") from None


class SessionState(BaseModel):
    """Snapshot of one conversation ledger: (session_id, sequence, last_sender).

    Snapshots are frozen. A committed transition produces a new snapshot via
    ``advance``; holders swap their reference instead of mutating in place.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str
    sequence: int = Field(default=0, ge=0)
    last_sender: Optional[Party] = None

    @field_validator("session_id")
    @classmethod
    def _check_session_id(cls, v: str) -> str:
        if not v:
            raise ValueError("session_id must not be empty")
        if DELIMITER in v:
            raise ValueError(f"session_id must not contain {DELIMITER!r}")
        return v

    @classmethod
    def new(cls, session_id: Optional[str] = None) -> "SessionState":
        return cls(session_id=session_id or str(uuid.uuid4()))

    @property
    def next_sequence(self) -> int:
        return self.sequence + 1

    def can_send(self, sender: Party) -> bool:
        return sender != self.last_sender

    def advance(self, sequence: int, sender: Party) -> "SessionState":
        return self.model_copy(update={"sequence": sequence, "last_sender": sender})
