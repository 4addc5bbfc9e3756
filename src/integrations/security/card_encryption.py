"""
Card number encryption for the gateway charge request.

AES-256-CBC with PKCS7 padding. The 32-byte key is pre-shared with the
gateway and read from configuration as 64 hex characters; a fresh random IV
is generated for every call. Ciphertext and IV travel hex-encoded.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from src.integrations.contracts.interfaces import EncryptedField

KEY_BYTES = 32
IV_BYTES = 16


class EncryptionKeyError(ValueError):
    """Raised when the configured key is absent or not 32 bytes of hex."""


def load_key(key_hex: str) -> bytes:
    if not key_hex:
        raise EncryptionKeyError("ENCRYPTION_KEY is not configured.")
    try:
        key = bytes.fromhex(key_hex.strip())
    except ValueError as exc:
        raise EncryptionKeyError("ENCRYPTION_KEY must be hex-encoded.") from exc
    if len(key) != KEY_BYTES:
        raise EncryptionKeyError(f"ENCRYPTION_KEY must decode to {KEY_BYTES} bytes; got {len(key)}.")
    return key


def encrypt_card_number(plaintext: str, key_hex: str) -> EncryptedField:
    key = load_key(key_hex)
    iv = os.urandom(IV_BYTES)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return EncryptedField(ciphertext=ciphertext.hex(), iv=iv.hex())


def decrypt_card_number(encrypted: EncryptedField, key_hex: str) -> str:
    key = load_key(key_hex)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(bytes.fromhex(encrypted.iv))).decryptor()
    padded = decryptor.update(bytes.fromhex(encrypted.ciphertext)) + decryptor.finalize()

    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
