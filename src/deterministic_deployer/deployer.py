"""Batch deployment of published contracts across chains."""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from eth_utils import to_hex

from .config import DeployerConfig, chains_to_deploy_to, contracts_to_deploy, load_config
from .engine import EngineClient
from .exceptions import ConfigurationError
from .publishing import PublishedContractResolver
from .rpc import ChainRpc
from .types import Chain, ContractSpec, DeploymentAttempt, DeploymentStatus

logger = logging.getLogger(__name__)


def iter_work_items(
    chains: Sequence[Chain], contracts: Sequence[ContractSpec]
) -> Iterator[Tuple[Chain, ContractSpec]]:
    """Ordered cross product: every contract for the first chain, then the next chain."""
    for chain in chains:
        for contract in contracts:
            yield chain, contract


def _submit(
    attempt: DeploymentAttempt,
    wallet: str,
    rpc: ChainRpc,
    resolver: PublishedContractResolver,
    engine: EngineClient,
) -> None:
    """Build, sign and broadcast the deployment transaction for one attempt."""
    chain = attempt.chain

    unsigned_tx = resolver.prepare_deploy_transaction(attempt.contract, chain)
    tx = rpc.serialize_transaction(chain, unsigned_tx, sender=wallet)
    nonce = rpc.get_transaction_count(chain, wallet, "pending")
    gas_price = rpc.get_gas_price(chain)

    attempt.signed_transaction = engine.sign_transaction(
        wallet,
        {
            "to": tx.to,
            "nonce": to_hex(nonce),
            "gasLimit": to_hex(tx.gas),
            "data": tx.data,
            "value": "0x0",
            "chainId": chain.id,
            "gasPrice": to_hex(gas_price),
        },
    )
    attempt.transaction_hash = engine.send_raw_transaction(
        str(chain.id), attempt.signed_transaction
    )


def deploy_if_needed(
    chain: Chain,
    contract: ContractSpec,
    wallet: str,
    rpc: ChainRpc,
    resolver: PublishedContractResolver,
    engine: EngineClient,
) -> DeploymentAttempt:
    """
    Run the deploy-if-needed sequence for one (chain, contract) pair.

    Never raises: failures are logged and recorded on the returned attempt
    with status FAILED.
    """
    attempt = DeploymentAttempt(chain=chain, contract=contract)

    logger.info("----------")
    logger.info("Checking %s deployment on chain: %s", contract.contract_id, chain.label)

    try:
        attempt.balance = rpc.get_balance(chain, wallet)
        logger.info("Balance: %s %s", attempt.balance.display_value, attempt.balance.symbol)

        attempt.predicted_address = resolver.predict_address(contract, chain)

        if rpc.is_deployed(chain, attempt.predicted_address):
            logger.info("Already deployed at address: %s", attempt.predicted_address)
            attempt.status = DeploymentStatus.ALREADY_DEPLOYED
            return attempt

        if attempt.balance.value == 0:
            logger.info("Insufficient balance to deploy on chain %s", chain.label)
            attempt.status = DeploymentStatus.INSUFFICIENT_BALANCE
            return attempt

        logger.info("Deploying on %s at address: %s", chain.label, attempt.predicted_address)

        _submit(attempt, wallet, rpc, resolver, engine)
    except Exception as e:
        logger.exception("Something went wrong, skipping chain %s", chain.label)
        attempt.status = DeploymentStatus.FAILED
        attempt.error = e
        return attempt

    logger.info(">>> Successfully deployed at address: %s", attempt.predicted_address)
    logger.info(">>> Transaction hash: %s", attempt.transaction_hash)
    attempt.status = DeploymentStatus.SUBMITTED
    return attempt


def run_deployment(
    chains: Sequence[Chain],
    contracts: Sequence[ContractSpec],
    config: DeployerConfig,
    rpc: Optional[ChainRpc] = None,
    resolver: Optional[PublishedContractResolver] = None,
    engine: Optional[EngineClient] = None,
) -> List[DeploymentAttempt]:
    """
    Deploy every contract to every chain where it is missing.

    Pairs are processed strictly one after another; a failure on one pair
    never stops the batch.

    Args:
        chains: Chains in processing order
        contracts: Contract specs in processing order
        config: Validated configuration
        rpc: Chain RPC provider (defaults to ChainRpc(config))
        resolver: Contract metadata resolver (defaults to PublishedContractResolver(config))
        engine: Remote signer/broadcaster (defaults to EngineClient(config))

    Returns:
        One DeploymentAttempt per pair, in processing order
    """
    rpc = rpc or ChainRpc(config)
    resolver = resolver or PublishedContractResolver(config)
    engine = engine or EngineClient(config)
    wallet = config.backend_wallet

    logger.info("Deploying contracts with account: %s", wallet)

    attempts = [
        deploy_if_needed(chain, contract, wallet, rpc, resolver, engine)
        for chain, contract in iter_work_items(chains, contracts)
    ]

    summary = {status: 0 for status in DeploymentStatus if status is not DeploymentStatus.PENDING}
    for attempt in attempts:
        summary[attempt.status] += 1
    logger.info(
        "Done: %s",
        ", ".join(f"{status.value}={count}" for status, count in summary.items()),
    )
    return attempts


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def main() -> int:
    """Process entry point. Returns the exit code."""
    try:
        config = load_config()
    except ConfigurationError as e:
        configure_logging("INFO")
        logger.error("%s", e)
        return 1

    configure_logging(config.log_level)
    run_deployment(chains_to_deploy_to(), contracts_to_deploy(), config)
    return 0
