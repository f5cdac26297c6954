"""Secure random sources for key generation."""

from __future__ import annotations

import os
from typing import Protocol


class RandomSource(Protocol):
    """Anything that can hand out cryptographically secure random bytes."""

    def random_bytes(self, length: int) -> bytes:
        """Return exactly `length` random bytes, or raise."""
        ...


class SystemRandomSource:
    """
    Random source backed by the operating system's entropy pool.

    There is no fallback: if the OS cannot supply entropy, `os.urandom`
    raises and the error reaches the caller.
    """

    def random_bytes(self, length: int) -> bytes:
        return os.urandom(length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


SYSTEM_RANDOM: RandomSource = SystemRandomSource()
"""Process-wide default source."""
