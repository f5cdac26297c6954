"""Value types for resolved node configuration."""

from .base import StrictBaseModel
from .chain_id import ChainId, NamedChain
from .exceptions import ConfigError, EntropySourceError, MalformedInputError
from .uint import BaseUint, Uint8, Uint16, Uint64

__all__ = [
    # Core types
    "BaseUint",
    "Uint8",
    "Uint16",
    "Uint64",
    "ChainId",
    "NamedChain",
    "StrictBaseModel",
    # Exceptions
    "ConfigError",
    "MalformedInputError",
    "EntropySourceError",
]
