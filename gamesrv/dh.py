"""Diffie-Hellman key exchange over a small fixed group."""

from __future__ import annotations

import secrets

G = 2
P = 987123654
_MAX_PRIVATE = 2**63 - 1


def exchange() -> tuple[int, int]:
    """Return a fresh ``(private_key, public_key)`` pair."""
    private_key = secrets.randbelow(_MAX_PRIVATE)
    public_key = pow(G, private_key, P)
    return private_key, public_key


def get_key(private_key: int, public_key: int) -> int:
    """Shared secret from our private key and the peer's public key."""
    return pow(public_key, private_key, P)