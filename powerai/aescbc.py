"""AES-CBC encryption with a base64 key, the key prefix as IV and zero padding."""

from __future__ import annotations

import base64
import binascii

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_BLOCK_SIZE = 16
_KEY_SIZES = (16, 24, 32)


def _b64decode(text: str, what: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid base64 {what}: {exc}") from exc


def _cipher(secret_key: str) -> Cipher:
    key = _b64decode(secret_key, "key")
    if len(key) not in _KEY_SIZES:
        raise ValueError(f"invalid AES key size {len(key)}")
    return Cipher(algorithms.AES(key), modes.CBC(key[:_BLOCK_SIZE]))


def encrypt_cbc_bytes(data: bytes, secret_key: str) -> str:
    """Encrypt ``data`` and return the ciphertext as standard base64.

    The data is always padded with 1 to 16 zero bytes.
    """
    cipher = _cipher(secret_key)
    padding = _BLOCK_SIZE - len(data) % _BLOCK_SIZE
    padded = bytes(data) + b"\x00" * padding
    encryptor = cipher.encryptor()
    encrypted = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(encrypted).decode("ascii")


def encrypt_cbc(content: str, secret_key: str) -> str:
    """Encrypt a UTF-8 string and return the ciphertext as standard base64."""
    return encrypt_cbc_bytes(content.encode("utf-8"), secret_key)


def decrypt_cbc(content: str, secret_key: str) -> bytes:
    """Decrypt base64 ciphertext and strip all trailing zero bytes."""
    cipher = _cipher(secret_key)
    encrypted = _b64decode(content, "content")
    if len(encrypted) % _BLOCK_SIZE:
        raise ValueError("crypto/cipher: input not full blocks")
    decryptor = cipher.decryptor()
    decrypted = decryptor.update(encrypted) + decryptor.finalize()
    return decrypted.rstrip(b"\x00")