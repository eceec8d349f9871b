"""Data types and dataclasses for deterministic-deployer."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Chain:
    """An EVM chain the batch deploys to."""

    id: int
    name: str = ""
    symbol: str = "ETH"  # Native currency symbol

    @property
    def label(self) -> str:
        """Display name, falling back to the numeric id."""
        return self.name or str(self.id)


@dataclass(frozen=True)
class ContractSpec:
    """A published contract and the constructor params to deploy it with."""

    contract_id: str  # e.g. "AccountFactory"
    constructor_params: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class WalletBalance:
    """Native balance of a wallet on one chain."""

    value: int  # wei
    symbol: str
    decimals: int = 18

    @property
    def display_value(self) -> str:
        """Balance in whole units, e.g. "0.25"."""
        amount = Decimal(self.value).scaleb(-self.decimals)
        return format(amount.normalize(), "f") if self.value else "0"


@dataclass(frozen=True)
class PublishedContract:
    """Compiled artifacts of a published contract."""

    contract_id: str
    bytecode: str  # 0x-prefixed creation bytecode
    abi: List[Dict[str, Any]]

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return list(item.get("inputs", []))
        return []


@dataclass(frozen=True)
class UnsignedTransaction:
    """Deployment transaction before gas has been resolved."""

    chain_id: int
    to: str
    data: str
    value: int = 0


@dataclass(frozen=True)
class SerializableTransaction:
    """Wire-ready transaction fields."""

    chain_id: int
    to: str
    data: str
    gas: int
    value: int = 0


class DeploymentStatus(Enum):
    """
    Outcome of one (chain, contract) attempt.

    Every value except PENDING is terminal.
    """

    PENDING = "pending"
    ALREADY_DEPLOYED = "already-deployed"
    INSUFFICIENT_BALANCE = "insufficient-balance"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass
class DeploymentAttempt:
    """Ephemeral record of a single (chain, contract) iteration."""

    chain: Chain
    contract: ContractSpec
    status: DeploymentStatus = DeploymentStatus.PENDING

    # Filled in as the attempt progresses
    predicted_address: Optional[str] = None
    balance: Optional[WalletBalance] = None
    signed_transaction: Optional[str] = None
    transaction_hash: Optional[str] = None
    error: Optional[BaseException] = field(default=None, repr=False)
