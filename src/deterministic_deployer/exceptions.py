"""Custom exception classes for deterministic-deployer."""

from typing import Optional


class DeployerError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeployerError, ValueError):
    """Raised when required startup configuration is missing."""

    pass


class RpcError(DeployerError, RuntimeError):
    """Raised when a JSON-RPC call fails at the HTTP or protocol level."""

    pass


class EngineError(DeployerError, RuntimeError):
    """Raised when the remote signer/broadcaster rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PublishedContractNotFoundError(DeployerError, LookupError):
    """Raised when a published contract cannot be resolved."""

    pass


class ConstructorArgumentsError(DeployerError, ValueError):
    """Raised when constructor params do not match the contract's constructor."""

    pass


class MetadataError(DeployerError, RuntimeError):
    """Raised when published contract metadata cannot be fetched or read."""

    pass
