"""Exception hierarchy for boot-time configuration resolution."""

from __future__ import annotations


class ConfigError(Exception):
    """
    Base exception for all configuration errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class MalformedInputError(ConfigError, ValueError):
    """
    Raised when an external input is present but does not parse as its type.

    A malformed override is never replaced by the default or by a generated
    value.

    Attributes:
        key: The external-input key that held the bad value.
        grammar: Description of the textual form the key expects.
        value: The offending text, or None when it must not be echoed (key material).
        detail: The underlying parser error, if any.
    """

    def __init__(
        self,
        key: str,
        grammar: str,
        *,
        value: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.key = key
        self.grammar = grammar
        self.value = value
        self.detail = detail

        msg = f"{key}: expected {grammar}"
        if value is not None:
            value_repr = repr(value)
            if len(value_repr) > 50:
                value_repr = value_repr[:47] + "..."
            msg = f"{msg}, got {value_repr}"
        if detail:
            msg = f"{msg} ({detail})"

        super().__init__(msg)


class EntropySourceError(ConfigError):
    """
    Raised when the secure random source cannot produce key material.

    Attributes:
        requested: Number of bytes requested.
        received: Number of bytes actually returned, if the source returned at all.
    """

    def __init__(self, requested: int, *, received: int | None = None) -> None:
        self.requested = requested
        self.received = received

        if received is None:
            msg = f"Secure random source failed to produce {requested} bytes"
        else:
            msg = f"Secure random source returned {received} bytes, expected {requested}"

        super().__init__(msg)
