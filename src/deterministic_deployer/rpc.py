"""Chain JSON-RPC access for deterministic-deployer."""

import logging
from typing import Any, Dict, List, Optional

import requests
from eth_utils import to_checksum_address, to_hex

from .config import DeployerConfig
from .constants import REQUEST_TIMEOUT
from .exceptions import RpcError
from .types import Chain, SerializableTransaction, UnsignedTransaction, WalletBalance

logger = logging.getLogger(__name__)

# Values eth_getCode returns for an address without code
EMPTY_CODE = ("", "0x", "0x0")


def rpc_call(
    rpc_url: str,
    method: str,
    params: List[Any],
    headers: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> Any:
    """
    Perform a single JSON-RPC 2.0 call.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method name, e.g. "eth_getBalance"
        params: Positional params
        headers: Extra HTTP headers (e.g. API key)
        session: Session to reuse; a one-off request is made when None

    Returns:
        The ``result`` member of the response

    Raises:
        RpcError: On network errors, non-200 responses and RPC error payloads
    """
    http = session or requests
    logger.debug("RPC %s %s %s", rpc_url, method, params)
    try:
        response = http.post(
            rpc_url,
            json={"jsonrpc": "2.0", "method": method, "params": params, "id": 1},
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise RpcError(f"Network error during RPC call {method}: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise RpcError(f"RPC request {method} failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise RpcError(f"RPC request {method} returned invalid JSON") from e

    # Check for RPC errors
    if "error" in result:
        raise RpcError(f"RPC error from {method}: {result['error']}")

    if "result" not in result:
        raise RpcError(f"RPC response to {method} has no result")

    return result["result"]


def _quantity(value: Any) -> int:
    """Decode a JSON-RPC hex quantity."""
    if isinstance(value, int):
        return value
    return int(value, 16)


class ChainRpc:
    """Balance, code, nonce and gas queries against each chain's RPC endpoint."""

    def __init__(self, config: DeployerConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()
        self._headers = {"x-secret-key": config.secret_key}

    def call(self, chain: Chain, method: str, params: List[Any]) -> Any:
        return rpc_call(
            self._config.rpc_url(chain.id),
            method,
            params,
            headers=self._headers,
            session=self._session,
        )

    def get_balance(self, chain: Chain, address: str) -> WalletBalance:
        """Native balance of ``address`` at the latest block."""
        value = self.call(chain, "eth_getBalance", [to_checksum_address(address), "latest"])
        return WalletBalance(value=_quantity(value), symbol=chain.symbol)

    def get_code(self, chain: Chain, address: str) -> str:
        return self.call(chain, "eth_getCode", [to_checksum_address(address), "latest"])

    def is_deployed(self, chain: Chain, address: str) -> bool:
        """True if ``address`` holds contract code on ``chain``."""
        return self.get_code(chain, address) not in EMPTY_CODE

    def get_transaction_count(
        self, chain: Chain, address: str, block_tag: str = "pending"
    ) -> int:
        """Nonce of ``address``; "pending" includes queued transactions."""
        count = self.call(
            chain, "eth_getTransactionCount", [to_checksum_address(address), block_tag]
        )
        return _quantity(count)

    def get_gas_price(self, chain: Chain) -> int:
        return _quantity(self.call(chain, "eth_gasPrice", []))

    def estimate_gas(
        self, chain: Chain, tx: UnsignedTransaction, sender: Optional[str] = None
    ) -> int:
        call_object: Dict[str, Any] = {
            "to": to_checksum_address(tx.to),
            "data": tx.data,
            "value": to_hex(tx.value),
        }
        if sender:
            call_object["from"] = to_checksum_address(sender)
        return _quantity(self.call(chain, "eth_estimateGas", [call_object]))

    def serialize_transaction(
        self, chain: Chain, tx: UnsignedTransaction, sender: Optional[str] = None
    ) -> SerializableTransaction:
        """
        Resolve the wire-ready fields of an unsigned transaction.

        Args:
            chain: Chain the transaction targets
            tx: Unsigned transaction from the resolver
            sender: Address used as ``from`` for gas estimation

        Returns:
            SerializableTransaction with ``to``, ``data`` and estimated ``gas``
        """
        gas = self.estimate_gas(chain, tx, sender)
        return SerializableTransaction(
            chain_id=tx.chain_id,
            to=to_checksum_address(tx.to),
            data=tx.data,
            gas=gas,
            value=tx.value,
        )
