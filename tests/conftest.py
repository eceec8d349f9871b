"""Shared pytest fixtures for deterministic-deployer tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from deterministic_deployer.config import DeployerConfig, load_config

BACKEND_WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def account_extension_metadata(fixtures_dir: Path) -> Dict[str, Any]:
    """Published metadata for a contract without constructor params."""
    with open(fixtures_dir / "AccountExtension.json") as f:
        return json.load(f)


@pytest.fixture
def account_factory_metadata(fixtures_dir: Path) -> Dict[str, Any]:
    """Published metadata for a contract taking (admin, entrypoint)."""
    with open(fixtures_dir / "AccountFactory.json") as f:
        return json.load(f)


@pytest.fixture
def env() -> Dict[str, str]:
    """A complete environment for load_config."""
    return {
        "THIRDWEB_SECRET_KEY": "test-secret",
        "THIRDWEB_ENGINE_URL": "https://engine.example.com/",
        "THIRDWEB_ENGINE_ACCESS_TOKEN": "test-token",
        "THIRDWEB_ENGINE_BACKEND_WALLET": BACKEND_WALLET,
        "THIRDWEB_RPC_URL_TEMPLATE": "https://rpc.example.com/{chain_id}",
        "THIRDWEB_CONTRACT_METADATA_URL": "https://metadata.example.com",
    }


@pytest.fixture
def config(env: Dict[str, str]) -> DeployerConfig:
    """Validated configuration pointing at example.com endpoints."""
    return load_config(env)
