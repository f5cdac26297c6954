"""
Boot-time configuration for the Maptos execution node.

Each setting is read from a named environment variable and falls back to a
fixed default when the variable is unset. The node's Ed25519 identity key is
generated when unset.
"""

from .env import EnvironmentSnapshot
from .node import MaptosConfig
from .parameters import PARAMETERS, PRIVATE_KEY_ENV, ConfigParameter
from .resolver import resolve, resolve_all, resolve_identity_key

__all__ = [
    "ConfigParameter",
    "EnvironmentSnapshot",
    "MaptosConfig",
    "PARAMETERS",
    "PRIVATE_KEY_ENV",
    "resolve",
    "resolve_all",
    "resolve_identity_key",
]
