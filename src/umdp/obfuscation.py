"""
Payload obfuscation — reversible XOR masking plus a base64 text-safe layer.

encode:
  1. XOR every code point with the key stream (salt + key), cycling by position.
  2. Pack each masked 16-bit code unit as two big-endian bytes.
  3. Base64 the bytes so the payload survives copy/paste and never contains ':'.

decode runs the steps backwards. The XOR step is its own inverse.

Only Basic Multilingual Plane text (code points <= U+FFFF) is supported;
anything wider is rejected instead of being truncated on the wire.
"""

import base64
import binascii
from typing import Optional

from umdp.errors import DecodeError, EncodeError

DEFAULT_KEY = "devgpt-key"
DEFAULT_SALT = "devgpt-salt"

MAX_CODE_POINT = 0xFFFF
CODE_UNIT_BYTES = 2


class Obfuscator:
    def __init__(self, key: str = DEFAULT_KEY, salt: str = DEFAULT_SALT):
        if not salt + key:
            raise ValueError("key stream must not be empty")
        self._key_stream = [ord(c) for c in salt + key]
        if any(k > MAX_CODE_POINT for k in self._key_stream):
            raise ValueError("key stream must be BMP text")

    def transform(self, text: str) -> str:
        """XOR text against the key stream. Applying it twice is a no-op."""
        ks = self._key_stream
        return "".join(chr(ord(c) ^ ks[i % len(ks)]) for i, c in enumerate(text))

    def encode(self, text: str) -> str:
        for i, c in enumerate(text):
            if ord(c) > MAX_CODE_POINT:
                raise EncodeError(
                    f"Character U+{ord(c):X} at position {i} is outside the Basic Multilingual Plane.",
                    {"position": i, "code_point": ord(c)},
                )
        masked = self.transform(text)
        raw = b"".join(ord(c).to_bytes(CODE_UNIT_BYTES, "big") for c in masked)
        return base64.b64encode(raw).decode("ascii")

    def decode(self, payload: str) -> str:
        try:
            raw = base64.b64decode(payload.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise DecodeError(f"Invalid Base64 sequence: {e}") from e
        if len(raw) % CODE_UNIT_BYTES:
            raise DecodeError(f"Invalid payload length: {len(raw)} bytes is not a whole number of code units.")
        masked = "".join(
            chr(int.from_bytes(raw[i:i + CODE_UNIT_BYTES], "big"))
            for i in range(0, len(raw), CODE_UNIT_BYTES)
        )
        return self.transform(masked)


_default: Optional[Obfuscator] = None


def default_obfuscator() -> Obfuscator:
    global _default
    if _default is None:
        _default = Obfuscator()
    return _default


def encode(text: str) -> str:
    return default_obfuscator().encode(text)


def decode(payload: str) -> str:
    return default_obfuscator().decode(payload)
