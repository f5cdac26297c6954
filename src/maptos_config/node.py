"""
Grouped node configuration.

`MaptosConfig` resolves every parameter once against a single snapshot and
arranges the results by the service that consumes them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, InstanceOf

from maptos_config.crypto import SYSTEM_RANDOM, Ed25519PrivateKey, RandomSource
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
    POSTGRES_CONNECTION_STRING,
    REST_CONNECTION_HOSTNAME,
    REST_CONNECTION_PORT,
    REST_LISTEN_HOSTNAME,
    REST_LISTEN_PORT,
    STATE_MERKLE_PRUNE_WINDOW,
)
from maptos_config.resolver import resolve, resolve_identity_key
from maptos_config.types import ChainId, StrictBaseModel, Uint16, Uint64


class HttpServiceConfig(StrictBaseModel):
    """Where an HTTP service listens and where clients reach it."""

    listen_hostname: str
    listen_port: Uint16
    connection_hostname: str
    connection_port: Uint16

    @property
    def listen_address(self) -> str:
        return f"{self.listen_hostname}:{self.listen_port}"

    @property
    def connection_url(self) -> str:
        return f"http://{self.connection_hostname}:{self.connection_port}"


class FinViewConfig(StrictBaseModel):
    """
    Finality view API.

    Clients reach it on the listen port; there is no separate connection port.
    """

    listen_hostname: str
    listen_port: Uint16
    connection_hostname: str


class IndexerGrpcConfig(StrictBaseModel):
    """Indexer gRPC stream endpoint and keep-alive settings."""

    listen_hostname: str
    listen_port: Uint16
    connection_hostname: str
    connection_port: Uint16
    inactivity_timeout_sec: Uint64
    ping_interval_sec: Uint64


class PruningConfig(StrictBaseModel):
    """Storage retention windows, in ledger versions."""

    ledger_prune_window: Uint64
    state_merkle_prune_window: Uint64
    epoch_snapshot_prune_window: Uint64


class IndexerProcessorConfig(StrictBaseModel):
    """Indexer processor database and authentication."""

    postgres_connection_string: str
    auth_token: str = Field(repr=False)


class ChainConfig(StrictBaseModel):
    """Chain identity and node signing key."""

    chain_id: ChainId
    private_key: InstanceOf[Ed25519PrivateKey] = Field(exclude=True)

    @property
    def public_key_hex(self) -> str:
        return "0x" + self.private_key.public_key_bytes().hex()

    @property
    def account_address(self) -> str:
        return self.private_key.account_address()


class MaptosConfig(StrictBaseModel):
    """All boot-time settings of one execution node."""

    rest: HttpServiceConfig
    faucet: HttpServiceConfig
    fin_view: FinViewConfig
    indexer_grpc: IndexerGrpcConfig
    pruning: PruningConfig
    indexer_processor: IndexerProcessorConfig
    chain: ChainConfig
    max_transactions_in_flight: Uint64

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        rng: RandomSource = SYSTEM_RANDOM,
    ) -> MaptosConfig:
        """
        Resolve every parameter against one snapshot.

        Args:
            env: External inputs. Defaults to a snapshot of the process environment.
            rng: Random source for the identity key, used only if it is absent.

        Raises:
            MalformedInputError: If any present input fails to parse.
            EntropySourceError: If key generation is needed and fails.
        """
        if env is None:
            env = EnvironmentSnapshot.from_os()

        return cls(
            rest=HttpServiceConfig(
                listen_hostname=resolve(REST_LISTEN_HOSTNAME, env),
                listen_port=resolve(REST_LISTEN_PORT, env),
                connection_hostname=resolve(REST_CONNECTION_HOSTNAME, env),
                connection_port=resolve(REST_CONNECTION_PORT, env),
            ),
            faucet=HttpServiceConfig(
                listen_hostname=resolve(FAUCET_LISTEN_HOSTNAME, env),
                listen_port=resolve(FAUCET_LISTEN_PORT, env),
                connection_hostname=resolve(FAUCET_CONNECTION_HOSTNAME, env),
                connection_port=resolve(FAUCET_CONNECTION_PORT, env),
            ),
            fin_view=FinViewConfig(
                listen_hostname=resolve(FIN_VIEW_LISTEN_HOSTNAME, env),
                listen_port=resolve(FIN_VIEW_LISTEN_PORT, env),
                connection_hostname=resolve(FIN_VIEW_CONNECTION_HOSTNAME, env),
            ),
            indexer_grpc=IndexerGrpcConfig(
                listen_hostname=resolve(INDEXER_GRPC_LISTEN_HOSTNAME, env),
                listen_port=resolve(INDEXER_GRPC_LISTEN_PORT, env),
                connection_hostname=resolve(INDEXER_GRPC_CONNECTION_HOSTNAME, env),
                connection_port=resolve(INDEXER_GRPC_CONNECTION_PORT, env),
                inactivity_timeout_sec=resolve(INDEXER_GRPC_INACTIVITY_TIMEOUT, env),
                ping_interval_sec=resolve(INDEXER_GRPC_PING_INTERVAL, env),
            ),
            pruning=PruningConfig(
                ledger_prune_window=resolve(LEDGER_PRUNE_WINDOW, env),
                state_merkle_prune_window=resolve(STATE_MERKLE_PRUNE_WINDOW, env),
                epoch_snapshot_prune_window=resolve(EPOCH_SNAPSHOT_PRUNE_WINDOW, env),
            ),
            indexer_processor=IndexerProcessorConfig(
                postgres_connection_string=resolve(POSTGRES_CONNECTION_STRING, env),
                auth_token=resolve(INDEXER_PROCESSOR_AUTH_TOKEN, env),
            ),
            chain=ChainConfig(
                chain_id=resolve(CHAIN_ID, env),
                private_key=resolve_identity_key(env, rng),
            ),
            max_transactions_in_flight=resolve(MAX_TRANSACTIONS_IN_FLIGHT, env),
        )

    def to_json_dict(self, *, include_private_key: bool = False) -> dict[str, Any]:
        """
        Render as plain JSON-compatible data.

        The chain id is rendered in its textual form. The private key is
        omitted unless `include_private_key` is set; the public key and
        account address are always included.
        """
        data = self.model_dump(mode="json")
        data["chain"]["chain_id"] = str(self.chain.chain_id)
        data["chain"]["public_key"] = self.chain.public_key_hex
        data["chain"]["account_address"] = self.chain.account_address
        if include_private_key:
            data["chain"]["private_key"] = self.chain.private_key.to_encoded_string()
        return data
