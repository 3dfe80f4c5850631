"""Key exchange over P-256 and AES-CBC encryption of log data.

ECDH keys are raw bytes: a 32-byte private scalar and a 65-byte
uncompressed public point. AES ciphertext carries its random 16-byte IV in
front of the PKCS#7-padded CBC data.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import padding, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

AES_BLOCK_SIZE = 16
AES_DEFAULT_KEY_LENGTH = 16
_CURVE = ec.SECP256R1()
_PRIVATE_KEY_LENGTH = 32


def binary_key_to_hex(binary_data: bytes) -> str:
    """Encode bytes as an upper-case hexadecimal string."""
    return bytes(memoryview(binary_data)).hex().upper()


def hex_key_to_binary(hex_data: str) -> bytes:
    """Decode a hexadecimal string (either case) into bytes."""
    if isinstance(hex_data, (bytes, bytearray)):
        hex_data = hex_data.decode("ascii")
    try:
        return bytes.fromhex(hex_data)
    except ValueError as exc:
        raise ValueError(f"invalid hexadecimal data: {exc}") from None


def generate_ecdh_key() -> tuple[bytes, bytes]:
    """Return a fresh ``(private, public)`` key pair on the P-256 curve."""
    private_key = ec.generate_private_key(_CURVE)
    private_bytes = private_key.private_numbers().private_value.to_bytes(
        _PRIVATE_KEY_LENGTH, "big"
    )
    public_bytes = private_key.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
    )
    return private_bytes, public_bytes


def generate_ecdh_shared_key(client_pri: bytes, server_pub: bytes) -> bytes:
    """Agree on a shared secret from our private key and the peer's public key.

    Raises RuntimeError if either key is not valid on the curve.
    """
    try:
        private_value = int.from_bytes(bytes(memoryview(client_pri)), "big")
        private_key = ec.derive_private_key(private_value, _CURVE)
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(
            _CURVE, bytes(memoryview(server_pub))
        )
        return private_key.exchange(ec.ECDH(), public_key)
    except (ValueError, TypeError, InvalidKey) as exc:
        raise RuntimeError("Failed to reach shared secret") from exc


def _random_hex(length: int) -> str:
    return binary_key_to_hex(os.urandom(length))


class Crypt(ABC):
    """Interface of every symmetric cipher used for log data."""

    @abstractmethod
    def encrypt(self, data: bytes) -> bytes:
        """Return the encrypted form of ``data``."""

    @abstractmethod
    def decrypt(self, data: bytes) -> bytes:
        """Return the plain text of ``data``."""


class AESCrypt(Crypt):
    """AES in CBC mode with PKCS#7 padding and a fresh IV per message."""

    def __init__(self, key: str) -> None:
        binary_key = hex_key_to_binary(key)
        if len(binary_key) not in (16, 24, 32):
            raise ValueError(
                f"AES key must be 16, 24 or 32 bytes, not {len(binary_key)}"
            )
        self._key = binary_key
        self._iv = hex_key_to_binary(self.generate_iv())

    @staticmethod
    def generate_key() -> str:
        """Return a random 128-bit key as hexadecimal text."""
        return _random_hex(AES_DEFAULT_KEY_LENGTH)

    @staticmethod
    def generate_iv() -> str:
        """Return a random 16-byte IV as hexadecimal text."""
        return _random_hex(AES_BLOCK_SIZE)

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt ``data``; the result is ``IV + ciphertext``."""
        plain = bytes(memoryview(data))
        iv = hex_key_to_binary(self.generate_iv())
        padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
        padded = padder.update(plain) + padder.finalize()
        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        return iv + encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, data: bytes) -> bytes:
        """Take the IV from the front of ``data`` and decrypt the rest."""
        raw = bytes(memoryview(data))
        if len(raw) < AES_BLOCK_SIZE:
            raise ValueError("Invalid ciphertext: too short to contain IV")
        iv, cipher_data = raw[:AES_BLOCK_SIZE], raw[AES_BLOCK_SIZE:]
        if len(cipher_data) % AES_BLOCK_SIZE:
            raise ValueError("Invalid ciphertext: not a whole number of blocks")
        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(cipher_data) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError:
            raise ValueError("Invalid ciphertext: bad padding") from None