"""
Payload integrity tag.

A 16-bit additive sum over code points, rendered as four lowercase hex digits.
Summation is commutative: it catches changed values and changed lengths, but
not transposed characters, and mod-65536 collisions are possible. It is an
integrity hint for the relay, not a MAC.
"""

CHECKSUM_MODULUS = 65536


def checksum(payload: str) -> str:
    total = 0
    for ch in payload:
        total = (total + ord(ch)) % CHECKSUM_MODULUS
    return f"{total:04x}"
