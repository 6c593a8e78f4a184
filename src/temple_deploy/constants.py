"""Configuration constants for temple-deploy."""

# Solidity compiler the artifacts are built with
SOLIDITY_VERSION = "0.8.0"

# Hardhat build output, relative to the project root
ARTIFACTS_PATH = "./src/artifacts"

# Secrets file holding the deployer mnemonic or private key
SECRETS_FILE = "secrets.json"

# Network selected when neither --network nor $TEMPLE_NETWORK is given
DEFAULT_NETWORK = "hardhat"

# Mnemonic Hardhat's development node funds, and how many accounts a mnemonic yields
DEV_MNEMONIC = "test test test test test test test test test test test junk"
HD_ACCOUNT_COUNT = 20

# Confirmation policy for creation transactions (seconds)
CONFIRMATION_TIMEOUT = 120
POLL_INTERVAL = 1.0

# Explorer key used when $ETHERSCAN_API_KEY is unset
ETHERSCAN_API_KEY = ""

# Named network profiles
# "dev" profiles fall back to DEV_MNEMONIC when no secrets are configured
NETWORK_CONFIG = {
    "hardhat": {
        "url": "http://127.0.0.1:8545",
        "chain_id": 31337,
        "dev": True,
        "rpc_env": "HARDHAT_RPC_URL",
    },
    "localhost": {
        "url": "http://127.0.0.1:8545",
        "dev": True,
        "rpc_env": "LOCALHOST_RPC_URL",
    },
    "mumbai": {
        "url": "https://rpc-mumbai.maticvigil.com",
        "explorer_api_url": "https://api-testnet.polygonscan.com/api",
        "rpc_env": "MUMBAI_RPC_URL",
    },
    "ropsten": {
        "url": "https://ropsten.infura.io/v3/e61ce3c1ff0f439c8cc620c964b8ecef",
        "explorer_api_url": "https://api-ropsten.etherscan.io/api",
        "rpc_env": "ROPSTEN_RPC_URL",
    },
    "rinkeby": {
        "url": "https://rinkeby.infura.io/v3/2685ba1bcbf54312bb8683ddcc02f79d",
        "explorer_api_url": "https://api-rinkeby.etherscan.io/api",
        "rpc_env": "RINKEBY_RPC_URL",
    },
    "bsc_testnet": {
        "url": "https://data-seed-prebsc-1-s1.binance.org:8545",
        "chain_id": 97,
        "gas_price": 20000000000,
        "explorer_api_url": "https://api-testnet.bscscan.com/api",
        "rpc_env": "BSC_TESTNET_RPC_URL",
    },
    "bsc_mainnet": {
        "url": "https://bsc-dataseed.binance.org/",
        "chain_id": 56,
        "gas_price": 20000000000,
        "explorer_api_url": "https://api.bscscan.com/api",
        "rpc_env": "BSC_MAINNET_RPC_URL",
    },
}

# Contracts deployed by the default plan, with constructor arguments
DEPLOY_PLAN = [
    ("GOLD", ()),
]
