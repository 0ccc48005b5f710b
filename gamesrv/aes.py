"""AES-CBC with PKCS#7 padding, as chained streams or one-shot calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

log = logging.getLogger(__name__)

BLOCK_SIZE = 16
_KEY_SIZES = (16, 24, 32)
_DEFAULT_IV = b"093po54iuy876tre"


class BlockMode:
    """A CBC encrypter or decrypter whose chaining state persists across calls."""

    block_size = BLOCK_SIZE

    def __init__(self, key: bytes, iv: bytes, *, encrypting: bool) -> None:
        if len(key) not in _KEY_SIZES:
            raise ValueError(f"invalid AES key size {len(key)}")
        if len(iv) != BLOCK_SIZE:
            raise ValueError("IV length must equal block size")
        cipher = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))
        self.encrypting = encrypting
        self._ctx = cipher.encryptor() if encrypting else cipher.decryptor()

    def crypt_blocks(self, data: bytes) -> bytes:
        """Encrypt or decrypt whole blocks, continuing the chain."""
        if len(data) % BLOCK_SIZE:
            raise ValueError("input not full blocks")
        return self._ctx.update(bytes(data))


def new_encrypter(key: bytes, iv: bytes) -> BlockMode:
    """A CBC encrypting block mode."""
    return BlockMode(key, iv, encrypting=True)


def new_decrypter(key: bytes, iv: bytes) -> BlockMode:
    """A CBC decrypting block mode."""
    return BlockMode(key, iv, encrypting=False)


def pkcs7_pad(data: bytes, block_size: int) -> bytes:
    """Append PKCS#7 padding."""
    padding = block_size - len(data) % block_size
    return bytes(data) + bytes([padding]) * padding


def pkcs7_unpad(data: bytes) -> bytes:
    """Strip PKCS#7 padding as given by the last byte."""
    if not data:
        return b""
    left = len(data) - data[-1]
    if left < 0:
        return b""
    return bytes(data[:left])


def encrypt(src: bytes, mode: BlockMode) -> bytes:
    """Pad ``src`` and run it through ``mode``."""
    return mode.crypt_blocks(pkcs7_pad(src, mode.block_size))


def decrypt(src: bytes, mode: BlockMode) -> bytes:
    """Run ``src`` through ``mode`` and strip the padding."""
    return pkcs7_unpad(mode.crypt_blocks(src))


@dataclass
class _OnceSettings:
    # All-zero placeholder key; set a real one with configure().
    key: bytes = bytes(BLOCK_SIZE)
    iv: bytes = _DEFAULT_IV


_settings = _OnceSettings()


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


def configure(key: str | bytes, iv: str | bytes) -> None:
    """Set the key and IV used by the one-shot functions.

    Empty values keep the defaults; otherwise both must be 16 bytes.
    """
    if not key or not iv:
        log.info("using default aes key")
        return
    key_bytes = _as_bytes(key)
    iv_bytes = _as_bytes(iv)
    if len(key_bytes) != BLOCK_SIZE or len(iv_bytes) != BLOCK_SIZE:
        raise ValueError("aes key or iv length must be 16 bytes")
    _settings.key = key_bytes
    _settings.iv = iv_bytes


def encrypt_once(src: bytes) -> bytes:
    """Encrypt with the configured key and a fresh chain."""
    return encrypt(src, new_encrypter(_settings.key, _settings.iv))


def decrypt_once(src: bytes) -> bytes:
    """Decrypt with the configured key and a fresh chain."""
    if len(src) < BLOCK_SIZE or len(src) % BLOCK_SIZE:
        raise ValueError("invalid ciphertext length")
    return decrypt(src, new_decrypter(_settings.key, _settings.iv))