"""
External input snapshots.

Resolvers never read `os.environ` themselves. They receive an
`EnvironmentSnapshot`, an immutable copy of a key/value mapping taken at a
single point in time, so tests and callers can supply inputs explicitly.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class EnvironmentSnapshot(Mapping[str, str]):
    """Read-only view of external inputs, keyed by variable name."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    @classmethod
    def from_os(cls) -> EnvironmentSnapshot:
        """Snapshot the current process environment."""
        return cls(os.environ)

    @classmethod
    def from_env_file(cls, path: Path, base: Mapping[str, str] | None = None) -> EnvironmentSnapshot:
        """
        Layer the entries of a `.env` file over `base`.

        The file is read with python-dotenv, so `export` prefixes, spaces
        around `=`, quoting and trailing `# comments` follow the usual `.env`
        rules. Values are taken literally; `${VAR}` references are not expanded.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If an entry has a key but no `=`.
        """
        with path.open(encoding="utf-8") as stream:
            parsed = dotenv_values(stream=stream, interpolate=False)

        values = dict(base or {})
        for key, value in parsed.items():
            if value is None:
                raise ValueError(f"{path}: {key} has no value")
            values[key] = value

        logger.debug("Loaded %d entries from %s", len(parsed), path)
        return cls(values)

    def lookup(self, key: str) -> str | None:
        """Return the raw text for `key`, or None when the key is absent."""
        return self._values.get(key)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # Values may hold secrets.
        return f"{type(self).__name__}(keys={sorted(self._values)})"
