"""
Chain identifier.

A chain id is a non-zero uint8 that distinguishes one logical network from
another. A few ids are registered under well-known names, and the textual
form of a registered id is its name rather than its number.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar, SupportsInt

from typing_extensions import Self

from .uint import Uint8


class NamedChain(IntEnum):
    """Networks with a registered name."""

    MAINNET = 1
    TESTNET = 2
    DEVNET = 3
    TESTING = 4
    PREMAINNET = 5

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> NamedChain | None:
        """Look up a chain by name, ignoring case. Returns None for unknown names."""
        return cls.__members__.get(name.upper())


class ChainId(Uint8):
    """A non-zero 8-bit chain identifier."""

    GRAMMAR: ClassVar[str] = (
        "chain name (mainnet, testnet, devnet, testing, premainnet) "
        "or decimal integer in [1, 255]"
    )

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Create a chain id.

        Raises:
            ValueError: If `value` is zero.
        """
        if isinstance(value, NamedChain):
            value = int(value)
        instance = super().__new__(cls, value)
        if int(instance) == 0:
            raise ValueError("cannot have chain ID with 0")
        return instance

    @classmethod
    def from_text(cls, text: str) -> Self:
        """
        Parse a chain id from a registered name or its decimal value.

        Raises:
            ValueError: If `text` is empty, unknown, zero, or not a decimal number.
            OverflowError: If the number does not fit in a uint8.
        """
        if not text:
            raise ValueError("Cannot create chain ID from empty string")

        named = NamedChain.from_name(text)
        if named is not None:
            return cls(named)

        return super().from_text(text)

    @property
    def named_chain(self) -> NamedChain | None:
        """The registered network for this id, if there is one."""
        try:
            return NamedChain(int(self))
        except ValueError:
            return None

    def is_mainnet(self) -> bool:
        return self.named_chain is NamedChain.MAINNET

    def __str__(self) -> str:
        named = self.named_chain
        return str(named) if named is not None else str(int(self))
