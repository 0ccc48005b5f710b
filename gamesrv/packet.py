"""Client packet framing: a big-endian message id, a sequence number and a payload."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Collection

from gamesrv import aes

_U32 = struct.Struct(">I")
HEAD_LEN = 4


@dataclass(frozen=True)
class Packet:
    """A received packet: message id and payload."""

    msg_id: int
    data: bytes


def read_packet(data: bytes, decrypter: Any = None) -> Packet:
    """Decode an incoming packet, decrypting it first when a decrypter is given."""
    if len(data) < HEAD_LEN:
        raise ValueError("packet head too short")
    if decrypter is not None:
        data = bytes(aes.decrypt(bytes(data), decrypter))
        if len(data) < HEAD_LEN:
            raise ValueError("decrypted packet head too short")
    (msg_id,) = _U32.unpack_from(data)
    return Packet(msg_id, bytes(data[HEAD_LEN:]))


def write_packet(
    msg_id: int,
    data: bytes | None,
    seq: int,
    encrypter: Any = None,
    plain_msg_ids: Collection[int] = (),
) -> bytes:
    """Encode an outgoing packet.

    The packet is encrypted when an encrypter is given, unless ``msg_id`` is
    one of ``plain_msg_ids``.
    """
    out = _U32.pack(msg_id) + _U32.pack(seq) + (data or b"")
    if encrypter is not None and msg_id not in plain_msg_ids:
        out = bytes(aes.encrypt(out, encrypter))
    return out