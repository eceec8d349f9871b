"""Unit tests for published contract resolution and CREATE2 helpers."""

from dataclasses import replace

import pytest
import requests
import responses
from eth_abi import decode
from eth_utils import decode_hex, encode_hex, keccak

from deterministic_deployer.constants import (
    CREATE2_FACTORY_ADDRESS,
    ENTRYPOINT_V06_ADDRESS,
    TW_DEPLOYER_WALLET,
)
from deterministic_deployer.exceptions import (
    ConstructorArgumentsError,
    MetadataError,
    PublishedContractNotFoundError,
)
from deterministic_deployer.publishing import (
    PublishedContractResolver,
    compute_create2_address,
    compute_salt_hash,
    encode_constructor_args,
    fetch_published_contract,
)
from deterministic_deployer.types import Chain, ContractSpec

METADATA_URL = "https://metadata.example.com"
PUBLISHER = "deployer.thirdweb.eth"
ZERO_SALT = b"\x00" * 32
OTHER_FACTORY = "0x00000000000000000000000000000000deadbeef"

ADDRESS_INPUTS = [
    {"name": "_defaultAdmin", "type": "address"},
    {"name": "_entrypoint", "type": "address"},
]


class TestComputeCreate2Address:
    """EIP-1014 reference examples."""

    def test_example_0(self):
        address = compute_create2_address(
            "0x0000000000000000000000000000000000000000", ZERO_SALT, b"\x00"
        )
        assert address.lower() == "0x4d1a2e2bb4f88f0250f26ffff098b0b30b26bf38"

    def test_example_1(self):
        address = compute_create2_address(
            "0xdeadbeef00000000000000000000000000000000", ZERO_SALT, b"\x00"
        )
        assert address.lower() == "0xb928f69bb1d91cd65274e3c79d8986362984fda3"

    def test_rejects_short_salt(self):
        with pytest.raises(ValueError):
            compute_create2_address(CREATE2_FACTORY_ADDRESS, b"\x01", b"\x00")


class TestComputeSaltHash:
    def test_default_salt_derived_from_bytecode(self):
        bytecode = "0x6080"
        expected = keccak(text="tw." + encode_hex(keccak(text=bytecode)))

        assert compute_salt_hash(bytecode) == expected
        assert len(compute_salt_hash(bytecode)) == 32

    def test_different_bytecode_different_salt(self):
        assert compute_salt_hash("0x6080") != compute_salt_hash("0x6081")

    def test_explicit_salt(self):
        assert compute_salt_hash("0x6080", salt="my-salt") == keccak(text="my-salt")


class TestEncodeConstructorArgs:
    def test_no_inputs(self):
        assert encode_constructor_args([], ()) == b""

    def test_encodes_addresses(self):
        encoded = encode_constructor_args(
            ADDRESS_INPUTS, (TW_DEPLOYER_WALLET, ENTRYPOINT_V06_ADDRESS)
        )

        admin, entrypoint = decode(["address", "address"], encoded)
        assert admin.lower() == TW_DEPLOYER_WALLET.lower()
        assert entrypoint.lower() == ENTRYPOINT_V06_ADDRESS.lower()

    def test_accepts_any_address_case(self):
        """Test that non-checksummed addresses are normalized before encoding."""
        lower = encode_constructor_args(ADDRESS_INPUTS, (TW_DEPLOYER_WALLET.lower(),) * 2)
        upper = encode_constructor_args(
            ADDRESS_INPUTS, ("0x" + TW_DEPLOYER_WALLET[2:].upper(),) * 2
        )
        assert lower == upper

    def test_tuple_components(self):
        inputs = [
            {
                "name": "config",
                "type": "tuple",
                "components": [
                    {"name": "owner", "type": "address"},
                    {"name": "limit", "type": "uint256"},
                ],
            }
        ]
        encoded = encode_constructor_args(inputs, [(ENTRYPOINT_V06_ADDRESS, 7)])

        ((owner, limit),) = decode(["(address,uint256)"], encoded)
        assert limit == 7

    def test_arity_mismatch(self):
        with pytest.raises(ConstructorArgumentsError, match="expects 2 params, got 1"):
            encode_constructor_args(ADDRESS_INPUTS, (TW_DEPLOYER_WALLET,))

    def test_unencodable_value(self):
        with pytest.raises(ConstructorArgumentsError):
            encode_constructor_args([{"name": "n", "type": "uint256"}], ("not a number",))


class TestFetchPublishedContract:
    """Test the fetch_published_contract function."""

    @responses.activate
    def test_fetches_metadata(self, account_factory_metadata):
        responses.add(
            responses.GET,
            f"{METADATA_URL}/{PUBLISHER}/AccountFactory",
            json=account_factory_metadata,
            status=200,
        )

        published = fetch_published_contract("AccountFactory", PUBLISHER, METADATA_URL)

        assert published.contract_id == "AccountFactory"
        assert published.bytecode == account_factory_metadata["bytecode"]
        assert len(published.constructor_inputs) == 2

    @responses.activate
    def test_not_published(self):
        responses.add(
            responses.GET, f"{METADATA_URL}/{PUBLISHER}/Missing", json={}, status=404
        )

        with pytest.raises(PublishedContractNotFoundError):
            fetch_published_contract("Missing", PUBLISHER, METADATA_URL)

    @responses.activate
    def test_missing_bytecode(self):
        responses.add(
            responses.GET,
            f"{METADATA_URL}/{PUBLISHER}/Empty",
            json={"bytecode": "0x", "abi": []},
            status=200,
        )

        with pytest.raises(PublishedContractNotFoundError, match="no bytecode"):
            fetch_published_contract("Empty", PUBLISHER, METADATA_URL)

    @responses.activate
    def test_server_error(self):
        responses.add(responses.GET, f"{METADATA_URL}/{PUBLISHER}/X", body="oops", status=500)

        with pytest.raises(MetadataError, match="500"):
            fetch_published_contract("X", PUBLISHER, METADATA_URL)

    @responses.activate
    def test_invalid_json(self):
        responses.add(responses.GET, f"{METADATA_URL}/{PUBLISHER}/X", body="<html>", status=200)

        with pytest.raises(MetadataError, match="not valid JSON"):
            fetch_published_contract("X", PUBLISHER, METADATA_URL)

    @responses.activate
    def test_non_object_payload(self):
        responses.add(responses.GET, f"{METADATA_URL}/{PUBLISHER}/X", json=["0x6080"], status=200)

        with pytest.raises(MetadataError, match="not a JSON object"):
            fetch_published_contract("X", PUBLISHER, METADATA_URL)

    @responses.activate
    def test_network_error(self):
        responses.add(
            responses.GET,
            f"{METADATA_URL}/{PUBLISHER}/X",
            body=requests.ConnectionError("connection refused"),
        )

        with pytest.raises(MetadataError, match="Network error"):
            fetch_published_contract("X", PUBLISHER, METADATA_URL)


class TestPublishedContractResolver:
    """Test address prediction and deployment transaction building."""

    @pytest.fixture
    def mocked_metadata(self, account_extension_metadata, account_factory_metadata):
        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            rsps.add(
                responses.GET,
                f"{METADATA_URL}/{PUBLISHER}/AccountExtension",
                json=account_extension_metadata,
                status=200,
            )
            rsps.add(
                responses.GET,
                f"{METADATA_URL}/{PUBLISHER}/AccountFactory",
                json=account_factory_metadata,
                status=200,
            )
            yield rsps

    def test_predicted_address_matches_create2(self, config, mocked_metadata, account_factory_metadata):
        resolver = PublishedContractResolver(config)
        spec = ContractSpec("AccountFactory", (TW_DEPLOYER_WALLET, ENTRYPOINT_V06_ADDRESS))

        address = resolver.predict_address(spec, Chain(id=1))

        bytecode = account_factory_metadata["bytecode"]
        init_code = decode_hex(bytecode) + encode_constructor_args(
            ADDRESS_INPUTS, spec.constructor_params
        )
        expected = compute_create2_address(
            CREATE2_FACTORY_ADDRESS, compute_salt_hash(bytecode), init_code
        )
        assert address == expected

    def test_same_address_on_every_chain(self, config, mocked_metadata):
        resolver = PublishedContractResolver(config)
        spec = ContractSpec("AccountExtension")

        assert resolver.predict_address(spec, Chain(id=1)) == resolver.predict_address(
            spec, Chain(id=80002)
        )

    def test_metadata_fetched_once_per_contract(self, config, mocked_metadata):
        resolver = PublishedContractResolver(config)
        spec = ContractSpec("AccountExtension")

        resolver.predict_address(spec, Chain(id=1))
        resolver.prepare_deploy_transaction(spec, Chain(id=10))

        assert len(mocked_metadata.calls) == 1
        assert mocked_metadata.calls[0].request.headers["x-secret-key"] == "test-secret"

    def test_deploy_transaction_targets_factory(self, config, mocked_metadata, account_extension_metadata):
        resolver = PublishedContractResolver(config)

        tx = resolver.prepare_deploy_transaction(ContractSpec("AccountExtension"), Chain(id=80002))

        bytecode = account_extension_metadata["bytecode"]
        assert tx.chain_id == 80002
        assert tx.to.lower() == CREATE2_FACTORY_ADDRESS.lower()
        assert tx.value == 0
        # salt ++ init code
        assert tx.data == encode_hex(compute_salt_hash(bytecode) + decode_hex(bytecode))

    def test_wrong_constructor_params(self, config, mocked_metadata):
        resolver = PublishedContractResolver(config)

        with pytest.raises(ConstructorArgumentsError):
            resolver.predict_address(ContractSpec("AccountFactory", ()), Chain(id=1))

    def test_chain_with_factory_override(self, config, mocked_metadata, account_extension_metadata):
        """Test that a chain with its own factory predicts and deploys against it."""
        config = replace(config, create2_factories={80002: OTHER_FACTORY})
        resolver = PublishedContractResolver(config)
        spec = ContractSpec("AccountExtension")

        default_address = resolver.predict_address(spec, Chain(id=1))
        override_address = resolver.predict_address(spec, Chain(id=80002))

        bytecode = account_extension_metadata["bytecode"]
        expected = compute_create2_address(
            OTHER_FACTORY, compute_salt_hash(bytecode), decode_hex(bytecode)
        )
        assert override_address != default_address
        assert override_address == expected

        tx = resolver.prepare_deploy_transaction(spec, Chain(id=80002))
        assert tx.to.lower() == OTHER_FACTORY
        assert resolver.prepare_deploy_transaction(spec, Chain(id=1)).to.lower() == (
            CREATE2_FACTORY_ADDRESS.lower()
        )
