"""Static configuration for the deterministic-deployer batch job."""

# Deployer admin wallet, passed as the AccountFactory admin
TW_DEPLOYER_WALLET = "0xdd99b75f095d0c4d5112aCe938e4e6ed962fb024"

# ERC-4337 EntryPoint v0.6
ENTRYPOINT_V06_ADDRESS = "0x5FF137D4b0FDCD49DcA30c7CF57E578a026d2789"

# Keyless deterministic deployment proxy, used on chains without an override.
# Calldata is salt (32 bytes) followed by the init code.
CREATE2_FACTORY_ADDRESS = "0x4e59b44847b379578588920cA78FbF26c0B4956C"

# chain_id -> CREATE2 factory, for chains where the keyless deploy had to be
# signed with a chain id (EIP-155) or custom gas and so landed elsewhere.
# Extended at runtime through THIRDWEB_CREATE2_FACTORIES.
CREATE2_FACTORY_OVERRIDES = {}

DEFAULT_PUBLISHER = "deployer.thirdweb.eth"
DEFAULT_RPC_URL_TEMPLATE = "https://{chain_id}.rpc.thirdweb.com"

# Seconds, applied to every outbound HTTP request
REQUEST_TIMEOUT = 30

# Required environment variables, in validation order, with the
# message raised when each one is missing
REQUIRED_ENV = {
    "THIRDWEB_SECRET_KEY": "No thirdweb secret key found",
    "THIRDWEB_ENGINE_URL": "No thirdweb engine url found",
    "THIRDWEB_ENGINE_ACCESS_TOKEN": "No thirdweb engine access token found",
    "THIRDWEB_ENGINE_BACKEND_WALLET": "No thirdweb engine backend wallet found",
    "THIRDWEB_CONTRACT_METADATA_URL": "No contract metadata url found",
}

RPC_URL_TEMPLATE_ENV = "THIRDWEB_RPC_URL_TEMPLATE"
CREATE2_FACTORIES_ENV = "THIRDWEB_CREATE2_FACTORIES"
PUBLISHER_ENV = "THIRDWEB_CONTRACT_PUBLISHER"
LOG_LEVEL_ENV = "LOG_LEVEL"

# chain_id -> (display name, native currency symbol)
SUPPORTED_MAINNETS = {
    1: ("Ethereum", "ETH"),
    137: ("Polygon", "POL"),
    42161: ("Arbitrum One", "ETH"),
    10: ("OP Mainnet", "ETH"),
    42220: ("Celo", "CELO"),
    8453: ("Base", "ETH"),
    59144: ("Linea", "ETH"),
    43114: ("Avalanche", "AVAX"),
    534352: ("Scroll", "ETH"),
    100: ("Gnosis", "XDAI"),
    56: ("BNB Smart Chain", "BNB"),
    660279: ("Xai", "XAI"),
    7777777: ("Zora", "ETH"),
    34443: ("Mode", "ETH"),
    252: ("Fraxtal", "frxETH"),
    42170: ("Arbitrum Nova", "ETH"),
    888888888: ("Ancient8", "ETH"),
    53935: ("DFK Chain", "JEWEL"),
    8217: ("Klaytn Cypress", "KLAY"),
    204: ("opBNB", "BNB"),
    22222: ("Nautilus", "ZBC"),
    122: ("Fuse", "FUSE"),
    7887: ("Kinto", "ETH"),
    957: ("Lyra", "ETH"),
    5000: ("Mantle", "MNT"),
    666666666: ("Degen", "DEGEN"),
    7560: ("Cyber", "ETH"),
    690: ("Redstone", "ETH"),
    2040: ("Vanar", "VANRY"),
}

SUPPORTED_TESTNETS = {
    97: ("BNB Smart Chain Testnet", "tBNB"),
    11155111: ("Sepolia", "ETH"),
    80002: ("Polygon Amoy", "POL"),
    84532: ("Base Sepolia", "ETH"),
    11155420: ("OP Sepolia", "ETH"),
    421614: ("Arbitrum Sepolia", "ETH"),
    59141: ("Linea Sepolia", "ETH"),
    44787: ("Celo Alfajores", "CELO"),
    37714555429: ("Xai Sepolia", "sXAI"),
    43113: ("Avalanche Fuji", "AVAX"),
    10200: ("Gnosis Chiado", "XDAI"),
    534351: ("Scroll Sepolia", "ETH"),
    167009: ("Taiko Hekla", "ETH"),
    999999999: ("Zora Sepolia", "ETH"),
    919: ("Mode Testnet", "ETH"),
    2522: ("Frax Testnet", "frxETH"),
    4202: ("Lisk Sepolia", "ETH"),
    28122024: ("Ancient8 Testnet", "ETH"),
    335: ("DFK Testnet", "JEWEL"),
    1001: ("Klaytn Baobab", "KLAY"),
    168587773: ("Blast Sepolia", "ETH"),
    132902: ("Form Testnet", "ETH"),
    111557560: ("Cyber Testnet", "ETH"),
    325000: ("Camp Network Testnet V2", "ETH"),
    978657: ("Treasure Ruby", "MAGIC"),
    17069: ("Garnet Holesky", "ETH"),
    1993: ("B3 Sepolia", "ETH"),
    161221135: ("Plume Testnet", "ETH"),
    5003: ("Mantle Sepolia", "MNT"),
    78600: ("Vanguard", "VG"),
    37084624: ("SKALE Nebula Hub Testnet", "sFUEL"),
    1952959480: ("Lumia Testnet", "LUMIA"),
    31: ("Rootstock Testnet", "tRBTC"),
}

# contract_id -> constructor params
CONTRACTS_TO_DEPLOY = {
    "AccountExtension": [],
    "AccountFactory": [
        TW_DEPLOYER_WALLET,  # admin
        ENTRYPOINT_V06_ADDRESS,  # entrypoint
    ],
}
