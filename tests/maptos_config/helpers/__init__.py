"""Test helpers for maptos_config unit tests."""

from __future__ import annotations


class FixedRandomSource:
    """Deterministic random source that records how many bytes were drawn."""

    def __init__(self, fill: int = 0x42) -> None:
        self.fill = fill
        self.calls: list[int] = []

    def random_bytes(self, length: int) -> bytes:
        self.calls.append(length)
        return bytes([self.fill]) * length


__all__ = ["FixedRandomSource"]
