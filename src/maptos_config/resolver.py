"""
Environment-or-default resolution.

Two resolvers turn external inputs into typed configuration values:

- `resolve` applies one `ConfigParameter`: an absent key yields the
  parameter's default, a present key is parsed with the parameter's grammar.
- `resolve_identity_key` produces the node's Ed25519 key: an absent key
  yields a freshly generated key, a present key is decoded.

In both cases a present but malformed value raises `MalformedInputError`.
It is never masked by the default or by a generated key. Converting that
error into process termination is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from maptos_config.crypto import ENCODED_KEY_GRAMMAR, SYSTEM_RANDOM, Ed25519PrivateKey, RandomSource
from maptos_config.env import EnvironmentSnapshot
from maptos_config.parameters import (
    CHAIN_ID,
    EPOCH_SNAPSHOT_PRUNE_WINDOW,
    FAUCET_CONNECTION_HOSTNAME,
    FAUCET_CONNECTION_PORT,
    FAUCET_LISTEN_HOSTNAME,
    FAUCET_LISTEN_PORT,
    FIN_VIEW_CONNECTION_HOSTNAME,
    FIN_VIEW_LISTEN_HOSTNAME,
    FIN_VIEW_LISTEN_PORT,
    INDEXER_GRPC_CONNECTION_HOSTNAME,
    INDEXER_GRPC_CONNECTION_PORT,
    INDEXER_GRPC_INACTIVITY_TIMEOUT,
    INDEXER_GRPC_LISTEN_HOSTNAME,
    INDEXER_GRPC_LISTEN_PORT,
    INDEXER_GRPC_PING_INTERVAL,
    INDEXER_PROCESSOR_AUTH_TOKEN,
    LEDGER_PRUNE_WINDOW,
    MAX_TRANSACTIONS_IN_FLIGHT,
    PARAMETERS,
    POSTGRES_CONNECTION_STRING,
    PRIVATE_KEY_ENV,
    REST_CONNECTION_HOSTNAME,
    REST_CONNECTION_PORT,
    REST_LISTEN_HOSTNAME,
    REST_LISTEN_PORT,
    STATE_MERKLE_PRUNE_WINDOW,
    ConfigParameter,
    T,
)
from maptos_config.types import MalformedInputError

logger = logging.getLogger(__name__)


def resolve(parameter: ConfigParameter[T], env: Mapping[str, str] | None = None) -> T:
    """
    Resolve one parameter against an input snapshot.

    Args:
        parameter: The parameter to resolve.
        env: External inputs. Defaults to a snapshot of the process environment.

    Returns:
        The parsed override if the key is present, otherwise the default.

    Raises:
        MalformedInputError: If the key is present but does not parse.
    """
    if env is None:
        env = EnvironmentSnapshot.from_os()

    text = env.get(parameter.key)
    if text is None:
        logger.debug("%s not set, using default %s", parameter.key, parameter.default)
        return parameter.default

    try:
        value = parameter.parse(text)
    except (ValueError, OverflowError) as e:
        raise MalformedInputError(
            parameter.key, parameter.grammar, value=text, detail=str(e)
        ) from e

    logger.debug("%s overridden from external input", parameter.key)
    return value


def resolve_identity_key(
    env: Mapping[str, str] | None = None,
    rng: RandomSource = SYSTEM_RANDOM,
) -> Ed25519PrivateKey:
    """
    Resolve the node's Ed25519 identity key.

    A private key has no safe shared default, so absence means "generate a
    new one". Presence means "decode exactly this one": a value that fails
    to decode is an error, never a reason to generate.

    Args:
        env: External inputs. Defaults to a snapshot of the process environment.
        rng: Secure random source, consumed only when the key is absent.

    Returns:
        The decoded or freshly generated key.

    Raises:
        MalformedInputError: If the key is present but does not decode.
        EntropySourceError: If generation is needed and the random source fails.
    """
    if env is None:
        env = EnvironmentSnapshot.from_os()

    encoded = env.get(PRIVATE_KEY_ENV)
    if encoded is None:
        key = Ed25519PrivateKey.generate(rng)
        logger.info(
            "%s not set, generated new identity with public key 0x%s",
            PRIVATE_KEY_ENV,
            key.public_key_bytes().hex(),
        )
        return key

    try:
        return Ed25519PrivateKey.from_encoded_string(encoded)
    except ValueError as e:
        # The offending text is key material and is kept out of the message.
        raise MalformedInputError(PRIVATE_KEY_ENV, ENCODED_KEY_GRAMMAR, detail=str(e)) from e


def resolve_all(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """
    Resolve every defaulted parameter against one snapshot.

    Returns:
        Mapping from external-input key to resolved value, in table order.

    Raises:
        MalformedInputError: For the first parameter, in table order, that does not parse.
    """
    if env is None:
        env = EnvironmentSnapshot.from_os()
    return {parameter.key: resolve(parameter, env) for parameter in PARAMETERS}


def _accessor(parameter: ConfigParameter[T]) -> Callable[[], T]:
    """Build a zero-argument resolver of `parameter` against the live environment."""

    def accessor() -> T:
        return resolve(parameter)

    accessor.__name__ = accessor.__qualname__ = parameter.name
    accessor.__doc__ = f"Resolve {parameter.key}, defaulting to {parameter.default}."
    return accessor


# Named accessors used by node bootstrap code.
default_maptos_rest_listen_hostname = _accessor(REST_LISTEN_HOSTNAME)
default_maptos_rest_listen_port = _accessor(REST_LISTEN_PORT)
default_maptos_rest_connection_hostname = _accessor(REST_CONNECTION_HOSTNAME)
default_maptos_rest_connection_port = _accessor(REST_CONNECTION_PORT)
default_maptos_faucet_rest_listen_hostname = _accessor(FAUCET_LISTEN_HOSTNAME)
default_maptos_faucet_rest_listen_port = _accessor(FAUCET_LISTEN_PORT)
default_maptos_faucet_rest_connection_hostname = _accessor(FAUCET_CONNECTION_HOSTNAME)
default_maptos_faucet_rest_connection_port = _accessor(FAUCET_CONNECTION_PORT)
default_fin_rest_listen_hostname = _accessor(FIN_VIEW_LISTEN_HOSTNAME)
default_fin_rest_listen_port = _accessor(FIN_VIEW_LISTEN_PORT)
default_fin_rest_connection_hostname = _accessor(FIN_VIEW_CONNECTION_HOSTNAME)
default_maptos_chain_id = _accessor(CHAIN_ID)
default_maptos_indexer_grpc_listen_hostname = _accessor(INDEXER_GRPC_LISTEN_HOSTNAME)
default_maptos_indexer_grpc_listen_port = _accessor(INDEXER_GRPC_LISTEN_PORT)
default_maptos_indexer_grpc_connection_hostname = _accessor(INDEXER_GRPC_CONNECTION_HOSTNAME)
default_maptos_indexer_grpc_connection_port = _accessor(INDEXER_GRPC_CONNECTION_PORT)
default_maptos_indexer_grpc_inactivity_timeout = _accessor(INDEXER_GRPC_INACTIVITY_TIMEOUT)
default_maptos_indexer_grpc_ping_interval = _accessor(INDEXER_GRPC_PING_INTERVAL)
default_maptos_ledger_prune_window = _accessor(LEDGER_PRUNE_WINDOW)
default_maptos_state_merkle_prune_window = _accessor(STATE_MERKLE_PRUNE_WINDOW)
default_maptos_epoch_snapshot_prune_window = _accessor(EPOCH_SNAPSHOT_PRUNE_WINDOW)
default_postgres_connection_string = _accessor(POSTGRES_CONNECTION_STRING)
default_indexer_processor_auth_token = _accessor(INDEXER_PROCESSOR_AUTH_TOKEN)
default_max_transactions_in_flight = _accessor(MAX_TRANSACTIONS_IN_FLIGHT)


def default_maptos_private_key() -> Ed25519PrivateKey:
    """Resolve MAPTOS_PRIVATE_KEY, generating a new key if it is unset."""
    return resolve_identity_key()
