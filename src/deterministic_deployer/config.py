"""Startup configuration for deterministic-deployer."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

from .constants import (
    CONTRACTS_TO_DEPLOY,
    CREATE2_FACTORIES_ENV,
    CREATE2_FACTORY_ADDRESS,
    CREATE2_FACTORY_OVERRIDES,
    DEFAULT_PUBLISHER,
    DEFAULT_RPC_URL_TEMPLATE,
    LOG_LEVEL_ENV,
    PUBLISHER_ENV,
    REQUIRED_ENV,
    RPC_URL_TEMPLATE_ENV,
    SUPPORTED_MAINNETS,
    SUPPORTED_TESTNETS,
)
from .exceptions import ConfigurationError
from .types import Chain, ContractSpec


@dataclass(frozen=True)
class DeployerConfig:
    """Validated process-wide configuration, built once before the batch runs."""

    secret_key: str
    engine_url: str
    engine_access_token: str
    backend_wallet: str  # Deployer and fee payer
    contract_metadata_url: str
    rpc_url_template: str = DEFAULT_RPC_URL_TEMPLATE
    publisher: str = DEFAULT_PUBLISHER
    log_level: str = "INFO"
    # chain_id -> CREATE2 factory, for chains not using CREATE2_FACTORY_ADDRESS
    create2_factories: Dict[int, str] = field(default_factory=dict)

    def rpc_url(self, chain_id: int) -> str:
        """RPC endpoint for a chain."""
        return self.rpc_url_template.format(chain_id=chain_id)

    def create2_factory(self, chain_id: int) -> str:
        """CREATE2 factory used for deterministic deploys on a chain."""
        return self.create2_factories.get(chain_id, CREATE2_FACTORY_ADDRESS)


def parse_create2_factories(raw: Optional[str]) -> Dict[int, str]:
    """
    Parse factory overrides of the form ``"137=0xabc...,80002=0xdef..."``.

    Args:
        raw: Comma separated ``chain_id=address`` pairs (may be empty)

    Returns:
        Mapping of chain id to checksummed factory address

    Raises:
        ConfigurationError: If an entry is malformed
    """
    factories: Dict[int, str] = {}
    if not raw:
        return factories

    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        chain_id, sep, address = entry.partition("=")
        if not sep or not chain_id.strip().isdigit() or not is_address(address.strip()):
            raise ConfigurationError(f"Invalid CREATE2 factory override: '{entry}'")
        factories[int(chain_id)] = to_checksum_address(address.strip())

    return factories


def load_config(env: Optional[Mapping[str, str]] = None) -> DeployerConfig:
    """
    Build and validate configuration from the environment.

    Required variables are checked in a fixed order and the first missing one
    aborts with its own message.

    Args:
        env: Mapping to read from. When omitted, ``os.environ`` is used after
             loading a ``.env`` file from the working directory if present.

    Returns:
        DeployerConfig

    Raises:
        ConfigurationError: If any required variable is missing or empty, or
                            a factory override is malformed
    """
    if env is None:
        load_dotenv()
        env = os.environ

    for name, message in REQUIRED_ENV.items():
        if not env.get(name):
            raise ConfigurationError(message)

    factories = {
        chain_id: to_checksum_address(address)
        for chain_id, address in CREATE2_FACTORY_OVERRIDES.items()
    }
    factories.update(parse_create2_factories(env.get(CREATE2_FACTORIES_ENV)))

    return DeployerConfig(
        secret_key=env["THIRDWEB_SECRET_KEY"],
        engine_url=env["THIRDWEB_ENGINE_URL"].rstrip("/"),
        engine_access_token=env["THIRDWEB_ENGINE_ACCESS_TOKEN"],
        backend_wallet=env["THIRDWEB_ENGINE_BACKEND_WALLET"],
        contract_metadata_url=env["THIRDWEB_CONTRACT_METADATA_URL"].rstrip("/"),
        rpc_url_template=env.get(RPC_URL_TEMPLATE_ENV) or DEFAULT_RPC_URL_TEMPLATE,
        publisher=env.get(PUBLISHER_ENV) or DEFAULT_PUBLISHER,
        log_level=env.get(LOG_LEVEL_ENV) or "INFO",
        create2_factories=factories,
    )


def chains_to_deploy_to() -> List[Chain]:
    """Mainnets first, then testnets, each in declaration order."""
    return [
        Chain(id=chain_id, name=name, symbol=symbol)
        for table in (SUPPORTED_MAINNETS, SUPPORTED_TESTNETS)
        for chain_id, (name, symbol) in table.items()
    ]


def contracts_to_deploy() -> List[ContractSpec]:
    """Contract specs in declaration order."""
    return [
        ContractSpec(contract_id=contract_id, constructor_params=tuple(params))
        for contract_id, params in CONTRACTS_TO_DEPLOY.items()
    ]
