"""
deterministic-deployer: batch deployment of published contracts to deterministic addresses
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeployerConfig, chains_to_deploy_to, contracts_to_deploy, load_config
from .deployer import deploy_if_needed, main, run_deployment
from .engine import EngineClient
from .exceptions import (
    ConfigurationError,
    ConstructorArgumentsError,
    DeployerError,
    EngineError,
    MetadataError,
    PublishedContractNotFoundError,
    RpcError,
)
from .publishing import PublishedContractResolver
from .rpc import ChainRpc
from .types import Chain, ContractSpec, DeploymentAttempt, DeploymentStatus, WalletBalance

try:
    __version__ = version("deterministic-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "run_deployment",
    "deploy_if_needed",
    "main",
    "load_config",
    "chains_to_deploy_to",
    "contracts_to_deploy",
    "DeployerConfig",
    "ChainRpc",
    "EngineClient",
    "PublishedContractResolver",
    "Chain",
    "ContractSpec",
    "DeploymentAttempt",
    "DeploymentStatus",
    "WalletBalance",
    "DeployerError",
    "ConfigurationError",
    "RpcError",
    "EngineError",
    "PublishedContractNotFoundError",
    "ConstructorArgumentsError",
    "MetadataError",
]
