"""
Ed25519 node identity key.

The node's identity is a single Ed25519 private key. Its textual form is
the 32-byte seed as `0x`-prefixed lowercase hex. Decoding is lenient about
the prefixes: an optional `ed25519-priv-` marker and an optional `0x` are
stripped before the hex is read.

The on-chain account address of a single-key account is
SHA3-256(public_key || 0x00), where 0x00 is the Ed25519 scheme byte.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from maptos_config.types import EntropySourceError

from .rand import SYSTEM_RANDOM, RandomSource

__all__ = [
    "ED25519_PRIVATE_KEY_LENGTH",
    "ED25519_PUBLIC_KEY_LENGTH",
    "ENCODED_KEY_PREFIX",
    "ENCODED_KEY_GRAMMAR",
    "Ed25519PrivateKey",
    "verify_signature",
]

ED25519_PRIVATE_KEY_LENGTH: Final = 32
"""Length of the private key seed in bytes."""

ED25519_PUBLIC_KEY_LENGTH: Final = 32
"""Length of the encoded public key in bytes."""

ENCODED_KEY_PREFIX: Final = "ed25519-priv-"
"""Optional scheme marker in front of an encoded private key."""

ENCODED_KEY_GRAMMAR: Final = (
    f"Ed25519 private key as {2 * ED25519_PRIVATE_KEY_LENGTH} hex digits, "
    f"optionally prefixed by '0x', '{ENCODED_KEY_PREFIX}' or '{ENCODED_KEY_PREFIX}0x'"
)
"""Description of the accepted textual form, used in error messages."""

_ED25519_SCHEME: Final = b"\x00"


@dataclass(frozen=True, slots=True)
class Ed25519PrivateKey:
    """
    Ed25519 private key used as the node identity.

    Attributes:
        private_key: The underlying `cryptography` key object.
    """

    private_key: ed25519.Ed25519PrivateKey

    @classmethod
    def generate(cls, rng: RandomSource = SYSTEM_RANDOM) -> Ed25519PrivateKey:
        """
        Generate a new key from a secure random source.

        Args:
            rng: Source of the 32-byte seed.

        Returns:
            A fresh private key.

        Raises:
            EntropySourceError: If the source fails or returns the wrong number of bytes.
        """
        try:
            seed = rng.random_bytes(ED25519_PRIVATE_KEY_LENGTH)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError(ED25519_PRIVATE_KEY_LENGTH) from e

        if len(seed) != ED25519_PRIVATE_KEY_LENGTH:
            raise EntropySourceError(ED25519_PRIVATE_KEY_LENGTH, received=len(seed))

        return cls.from_bytes(seed)

    @classmethod
    def from_bytes(cls, data: bytes) -> Ed25519PrivateKey:
        """
        Load a key from its raw 32-byte seed.

        Raises:
            ValueError: If data is not exactly 32 bytes.
        """
        if len(data) != ED25519_PRIVATE_KEY_LENGTH:
            raise ValueError(f"Expected {ED25519_PRIVATE_KEY_LENGTH} bytes, got {len(data)}")
        return cls(private_key=ed25519.Ed25519PrivateKey.from_private_bytes(data))

    @classmethod
    def from_encoded_string(cls, encoded: str) -> Ed25519PrivateKey:
        """
        Decode a key from its textual form.

        Raises:
            ValueError: If the text is not valid hex or not 32 bytes long.
        """
        text = encoded.removeprefix(ENCODED_KEY_PREFIX)
        text = text.removeprefix("0x")

        # bytes.fromhex skips whitespace between bytes; the encoding has none.
        if not text.isascii() or any(c.isspace() for c in text):
            raise ValueError("encoded key contains non-hex characters")

        try:
            data = bytes.fromhex(text)
        except ValueError as e:
            raise ValueError("encoded key is not valid hex") from e

        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        """Return the raw 32-byte seed."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def to_encoded_string(self) -> str:
        """Return the canonical textual form: `0x` followed by lowercase hex."""
        return "0x" + self.to_bytes().hex()

    def public_key_bytes(self) -> bytes:
        """Return the 32-byte encoded public key."""
        return self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def account_address(self) -> str:
        """Derive the single-key account address as `0x`-prefixed hex."""
        digest = hashlib.sha3_256(self.public_key_bytes() + _ED25519_SCHEME).digest()
        return "0x" + digest.hex()

    def sign(self, message: bytes) -> bytes:
        """Sign a message, returning the 64-byte signature."""
        return self.private_key.sign(message)

    def __repr__(self) -> str:
        # Never render the seed.
        return f"{type(self).__name__}(public_key=0x{self.public_key_bytes().hex()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ed25519PrivateKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.public_key_bytes())


def verify_signature(public_key_bytes: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if signature is valid, False otherwise.
    """
    public_key = ed25519.Ed25519PublicKey.from_public_bytes(public_key_bytes)
    try:
        public_key.verify(signature, message)
        return True
    except InvalidSignature:
        return False
