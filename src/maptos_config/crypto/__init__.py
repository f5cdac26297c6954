"""
Node identity cryptography.

Provides the Ed25519 identity key and the secure random sources used to
generate it.
"""

from .ed25519 import ENCODED_KEY_GRAMMAR, Ed25519PrivateKey, verify_signature
from .rand import SYSTEM_RANDOM, RandomSource, SystemRandomSource

__all__ = [
    "ENCODED_KEY_GRAMMAR",
    "Ed25519PrivateKey",
    "verify_signature",
    "RandomSource",
    "SystemRandomSource",
    "SYSTEM_RANDOM",
]
