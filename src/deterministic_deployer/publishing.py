"""Published contract resolution and deterministic deployment for deterministic-deployer."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests
from eth_abi import encode
from eth_utils import decode_hex, encode_hex, keccak, remove_0x_prefix, to_checksum_address

from .config import DeployerConfig
from .constants import REQUEST_TIMEOUT
from .exceptions import ConstructorArgumentsError, MetadataError, PublishedContractNotFoundError
from .types import Chain, ContractSpec, PublishedContract, UnsignedTransaction

logger = logging.getLogger(__name__)


def fetch_published_contract(
    contract_id: str,
    publisher: str,
    metadata_url: str,
    headers: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> PublishedContract:
    """
    Fetch the latest published version of a contract.

    Args:
        contract_id: Published contract name, e.g. "AccountFactory"
        publisher: Publisher address or ENS name
        metadata_url: Base URL of the contract metadata service
        headers: Extra HTTP headers (e.g. API key)
        session: Session to reuse; a one-off request is made when None

    Returns:
        PublishedContract with creation bytecode and ABI

    Raises:
        PublishedContractNotFoundError: If the contract is unknown or has no bytecode
        MetadataError: On network errors, unexpected statuses and unreadable payloads
    """
    http = session or requests
    url = f"{metadata_url}/{publisher}/{contract_id}"
    try:
        response = http.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise MetadataError(f"Network error fetching {contract_id} metadata: {e}") from e

    if response.status_code == 404:
        raise PublishedContractNotFoundError(
            f"Contract '{contract_id}' not published by '{publisher}'"
        )
    if response.status_code != 200:
        raise MetadataError(
            f"Metadata request for {contract_id} failed with status {response.status_code}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise MetadataError(f"Metadata for {contract_id} is not valid JSON") from e
    if not isinstance(data, dict):
        raise MetadataError(f"Metadata for {contract_id} is not a JSON object")

    bytecode = data.get("bytecode")
    if not bytecode or remove_0x_prefix(bytecode) == "":
        raise PublishedContractNotFoundError(
            f"Published contract '{contract_id}' has no bytecode"
        )

    return PublishedContract(
        contract_id=contract_id,
        bytecode=bytecode if bytecode.startswith("0x") else f"0x{bytecode}",
        abi=data.get("abi", []),
    )


def _abi_type(param: Dict[str, Any]) -> str:
    """Canonical ABI type string, expanding tuple components."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_abi_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def encode_constructor_args(inputs: List[Dict[str, Any]], params: Sequence[Any]) -> bytes:
    """
    ABI-encode constructor params.

    Args:
        inputs: Constructor ``inputs`` from the contract ABI
        params: Values in constructor order

    Returns:
        Encoded arguments (empty for a constructor without inputs)

    Raises:
        ConstructorArgumentsError: On arity mismatch or unencodable values
    """
    if len(inputs) != len(params):
        raise ConstructorArgumentsError(
            f"Constructor expects {len(inputs)} params, got {len(params)}"
        )
    if not inputs:
        return b""

    types = [_abi_type(i) for i in inputs]
    # eth-abi rejects mixed-case addresses with a bad checksum
    values = [
        to_checksum_address(value) if abi_type == "address" and isinstance(value, str) else value
        for abi_type, value in zip(types, params)
    ]
    try:
        return encode(types, values)
    except Exception as e:
        raise ConstructorArgumentsError(f"Cannot encode constructor params as {types}: {e}") from e


def compute_salt_hash(bytecode: str, salt: Optional[str] = None) -> bytes:
    """
    Salt used for the CREATE2 deployment.

    Without an explicit salt this is keccak("tw." + keccak(bytecode)), so the
    same bytecode always lands at the same address on every chain.
    """
    if salt is not None:
        return keccak(text=salt)
    bytecode_hash = encode_hex(keccak(text=bytecode))
    return keccak(text=f"tw.{bytecode_hash}")


def compute_create2_address(factory: str, salt: bytes, init_code: bytes) -> str:
    """
    EIP-1014 address: keccak(0xff ++ factory ++ salt ++ keccak(init_code))[12:].

    Returns:
        Checksummed address
    """
    if len(salt) != 32:
        raise ValueError("CREATE2 salt must be 32 bytes")
    digest = keccak(b"\xff" + decode_hex(factory) + salt + keccak(init_code))
    return to_checksum_address(digest[12:])


class PublishedContractResolver:
    """Predicts deterministic addresses and builds deployment transactions."""

    def __init__(
        self,
        config: DeployerConfig,
        session: Optional[requests.Session] = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._headers = {"x-secret-key": config.secret_key}
        # Metadata is chain independent
        self._cache: Dict[str, PublishedContract] = {}

    def published_contract(self, contract_id: str) -> PublishedContract:
        if contract_id not in self._cache:
            self._cache[contract_id] = fetch_published_contract(
                contract_id,
                self._config.publisher,
                self._config.contract_metadata_url,
                headers=self._headers,
                session=self._session,
            )
        return self._cache[contract_id]

    def _init_code(self, contract: ContractSpec) -> Tuple[bytes, bytes]:
        """Return (salt, init_code) for a contract spec."""
        published = self.published_contract(contract.contract_id)
        encoded_args = encode_constructor_args(
            published.constructor_inputs, contract.constructor_params
        )
        init_code = decode_hex(published.bytecode) + encoded_args
        return compute_salt_hash(published.bytecode), init_code

    def factory(self, chain: Chain) -> str:
        """CREATE2 factory deploying on ``chain``."""
        return to_checksum_address(self._config.create2_factory(chain.id))

    def predict_address(self, contract: ContractSpec, chain: Chain) -> str:
        """
        Deterministic deployment address of ``contract`` on ``chain``.

        Chains sharing a factory address get the same prediction.
        """
        salt, init_code = self._init_code(contract)
        return compute_create2_address(self.factory(chain), salt, init_code)

    def prepare_deploy_transaction(
        self, contract: ContractSpec, chain: Chain
    ) -> UnsignedTransaction:
        """Transaction calling the chain's CREATE2 factory with salt ++ init code."""
        salt, init_code = self._init_code(contract)
        return UnsignedTransaction(
            chain_id=chain.id,
            to=self.factory(chain),
            data=encode_hex(salt + init_code),
        )
