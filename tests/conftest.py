"""Shared pytest fixtures for temple-deploy tests."""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import responses
import rlp
from eth_account import Account
from eth_utils import decode_hex, encode_hex, keccak, to_canonical_address

from temple_deploy.artifacts import ArtifactStore
from temple_deploy.constants import DEV_MNEMONIC
from temple_deploy.types import NetworkProfile

CREATION_BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe6080604052600080fdfe"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def erc20_abi(fixtures_dir: Path) -> List[Dict[str, Any]]:
    """ABI of a minimal ERC20 token (balanceOf, owner, Transfer event)."""
    with open(fixtures_dir / "erc20_abi.json") as f:
        return json.load(f)


@pytest.fixture
def pool_abi(fixtures_dir: Path) -> List[Dict[str, Any]]:
    """ABI whose constructor takes (address, uint256)."""
    with open(fixtures_dir / "pool_abi.json") as f:
        return json.load(f)


@pytest.fixture
def hardhat_accounts(fixtures_dir: Path) -> List[Dict[str, str]]:
    """First two accounts of the Hardhat development mnemonic."""
    with open(fixtures_dir / "hardhat_accounts.json") as f:
        return json.load(f)


@pytest.fixture
def creation_bytecode() -> str:
    """Creation code written into every deployable test artifact."""
    return CREATION_BYTECODE


@pytest.fixture
def rpc_url() -> str:
    """Endpoint the fake node is served at."""
    return "http://test-rpc.example.com"


@pytest.fixture
def write_artifact() -> Callable[..., Path]:
    """Return a helper that writes a Hardhat artifact and its debug file."""

    def _write(root: Path, source_name: str, contract_name: str, abi, bytecode=CREATION_BYTECODE) -> Path:
        artifact_dir = root / source_name
        artifact_dir.mkdir(parents=True, exist_ok=True)
        path = artifact_dir / f"{contract_name}.json"
        path.write_text(
            json.dumps(
                {
                    "_format": "hh-sol-artifact-1",
                    "contractName": contract_name,
                    "sourceName": source_name,
                    "abi": abi,
                    "bytecode": bytecode,
                    "deployedBytecode": "0x6080604052600080fdfe",
                    "linkReferences": {},
                    "deployedLinkReferences": {},
                }
            )
        )
        depth = "/".join([".."] * (len(Path(source_name).parts)))
        (artifact_dir / f"{contract_name}.dbg.json").write_text(
            json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": f"{depth}/build-info/abc123.json"})
        )
        return path

    return _write


@pytest.fixture
def artifacts_dir(tmp_path: Path, write_artifact, erc20_abi, pool_abi) -> Path:
    """Create a Hardhat artifacts tree with GOLD, CFC, Pool and an interface."""
    root = tmp_path / "artifacts"
    write_artifact(root, "contracts/GOLD.sol", "GOLD", erc20_abi)
    write_artifact(root, "contracts/CFC.sol", "CFC", erc20_abi)
    write_artifact(root, "contracts/Pool.sol", "Pool", pool_abi)
    write_artifact(root, "contracts/IPool.sol", "IPool", [], bytecode="0x")

    build_info = root / "build-info"
    build_info.mkdir(parents=True)
    (build_info / "abc123.json").write_text(
        json.dumps(
            {
                "_format": "hh-sol-build-info-1",
                "solcVersion": "0.8.0",
                "solcLongVersion": "0.8.0+commit.c7dfd78e",
                "input": {"language": "Solidity", "sources": {}, "settings": {}},
            }
        )
    )
    return root


@pytest.fixture
def dev_profile(rpc_url: str) -> NetworkProfile:
    """Development network profile pointing at the mocked RPC endpoint."""
    return NetworkProfile(
        name="hardhat",
        url=rpc_url,
        accounts=(DEV_MNEMONIC,),
        chain_id=31337,
    )


class FakeNode:
    """Just enough of an Ethereum node to deploy and query contracts."""

    def __init__(self, chain_id: int = 31337, pending_polls: int = 0):
        self.chain_id = chain_id
        self.pending_polls = pending_polls
        self.revert = False
        self.null_status = False
        self.balance = 0
        self.nonces: Dict[str, int] = {}
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.polls: Dict[str, int] = {}
        self.methods: List[str] = []
        self.raw_transactions: List[str] = []

    def _receipt(self, tx_hash: str, sender: str, nonce: int) -> Dict[str, Any]:
        created = keccak(rlp.encode([to_canonical_address(sender), nonce]))[12:]
        if self.null_status:
            status = None
        else:
            status = "0x0" if self.revert else "0x1"
        return {
            "transactionHash": tx_hash,
            "transactionIndex": "0x0",
            "blockHash": encode_hex(keccak(text=tx_hash)),
            "blockNumber": hex(len(self.receipts) + 1),
            "from": sender.lower(),
            "to": None,
            "cumulativeGasUsed": hex(1_200_000),
            "gasUsed": hex(1_200_000),
            "effectiveGasPrice": hex(1_000_000_000),
            "contractAddress": encode_hex(created),
            "logs": [],
            "logsBloom": "0x" + "00" * 256,
            "status": status,
            "type": "0x0",
        }

    def handle(self, method: str, params: List[Any]) -> Any:
        if method == "eth_chainId":
            return hex(self.chain_id)
        if method == "eth_gasPrice":
            return hex(1_000_000_000)
        if method == "eth_getTransactionCount":
            return hex(self.nonces.get(params[0], 0))
        if method == "eth_estimateGas":
            return hex(1_500_000)
        if method == "eth_sendRawTransaction":
            raw = params[0]
            sender = Account.recover_transaction(raw)
            nonce = self.nonces.get(sender, 0)
            self.nonces[sender] = nonce + 1
            tx_hash = encode_hex(keccak(decode_hex(raw)))
            self.raw_transactions.append(raw)
            self.receipts[tx_hash] = self._receipt(tx_hash, sender, nonce)
            return tx_hash
        if method == "eth_getTransactionReceipt":
            tx_hash = params[0]
            polls = self.polls.get(tx_hash, 0)
            self.polls[tx_hash] = polls + 1
            if polls < self.pending_polls:
                return None
            return self.receipts.get(tx_hash)
        if method == "eth_call":
            return "0x" + self.balance.to_bytes(32, "big").hex()
        if method == "eth_accounts":
            return []
        raise ValueError(method)

    def callback(self, request):
        body = json.loads(request.body)
        self.methods.append(body["method"])
        try:
            payload = {"jsonrpc": "2.0", "id": body["id"], "result": self.handle(body["method"], body["params"])}
        except ValueError as e:
            payload = {"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32601, "message": str(e)}}
        return (200, {}, json.dumps(payload))


@pytest.fixture
def mock_http():
    """Activate a RequestsMock that tolerates unused routes."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def fake_node(mock_http, rpc_url: str) -> FakeNode:
    """Serve a FakeNode at rpc_url for the duration of a test."""
    node = FakeNode()
    mock_http.add_callback(
        responses.POST,
        rpc_url,
        callback=node.callback,
        content_type="application/json",
    )
    return node


@pytest.fixture
def live_profile() -> NetworkProfile:
    """Profile for the node at $TEMPLE_RPC_URL (e.g. `npx hardhat node`)."""
    rpc_url = os.environ.get("TEMPLE_RPC_URL")
    if not rpc_url:
        pytest.skip("TEMPLE_RPC_URL not configured in environment")

    return NetworkProfile(
        name="localhost",
        url=rpc_url,
        accounts=(os.environ.get("TEMPLE_MNEMONIC") or DEV_MNEMONIC,),
    )


@pytest.fixture
def live_artifacts() -> ArtifactStore:
    """Compiled artifacts from $TEMPLE_ARTIFACTS or ./src/artifacts."""
    store = ArtifactStore()
    if not store.contract_names():
        pytest.skip(f"No compiled artifacts under {store.root}")
    return store
