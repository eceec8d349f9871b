"""Remote signer/broadcaster client (thirdweb Engine REST API)."""

import logging
from typing import Any, Dict, Optional

import requests

from .config import DeployerConfig
from .constants import REQUEST_TIMEOUT
from .exceptions import EngineError

logger = logging.getLogger(__name__)


class EngineClient:
    """Signs with a custodied backend wallet and relays signed transactions."""

    def __init__(self, config: DeployerConfig, session: Optional[requests.Session] = None):
        self._base_url = config.engine_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {"Authorization": f"Bearer {config.engine_access_token}"}
        )

    def _post(
        self, path: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("Engine POST %s", url)
        try:
            response = self._session.post(
                url, json=body, headers=headers, timeout=REQUEST_TIMEOUT
            )
        except requests.RequestException as e:
            raise EngineError(f"Network error calling engine {path}: {e}") from e

        if not response.ok:
            raise EngineError(
                f"Engine request {path} failed with status {response.status_code}: "
                f"{response.text}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise EngineError(
                f"Engine request {path} returned invalid JSON",
                status_code=response.status_code,
            ) from e

        if payload.get("result") is None:
            raise EngineError(
                f"Engine response to {path} has no result: {payload}",
                status_code=response.status_code,
            )
        return payload["result"]

    def sign_transaction(self, wallet_address: str, transaction: Dict[str, Any]) -> str:
        """
        Sign a transaction with a backend wallet.

        Args:
            wallet_address: Backend wallet holding the key
            transaction: Fields to sign (to, nonce, gasLimit, data, value,
                         chainId, gasPrice)

        Returns:
            Signed raw transaction (0x hex)

        Raises:
            EngineError: If the engine rejects the request
        """
        return self._post(
            "/backend-wallet/sign-transaction",
            {"transaction": transaction},
            headers={"x-backend-wallet-address": wallet_address},
        )

    def send_raw_transaction(self, chain_id: str, signed_transaction: str) -> str:
        """
        Broadcast a signed transaction.

        The engine answers ``{"result": {"transactionHash": "0x..."}}``.

        Returns:
            Transaction hash

        Raises:
            EngineError: If the engine rejects the request or returns no hash
        """
        path = f"/transaction/{chain_id}/send-signed-transaction"
        result = self._post(path, {"signedTransaction": signed_transaction})

        tx_hash = result.get("transactionHash") if isinstance(result, dict) else None
        if not tx_hash:
            raise EngineError(f"Engine response to {path} has no transaction hash: {result}")
        return tx_hash
