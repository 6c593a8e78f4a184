"""Data types and dataclasses for temple-deploy."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NetworkProfile:
    """Connection and signing settings for one named network."""

    name: str  # e.g., "bsc_testnet"
    url: str  # JSON-RPC endpoint
    accounts: Tuple[str, ...] = field(default=(), repr=False)  # Private keys or mnemonics

    # Optional fields
    chain_id: Optional[int] = None
    gas_price: Optional[int] = None  # Wei; None means ask the node
    explorer_api_url: Optional[str] = None
    explorer_api_key: Optional[str] = field(default=None, repr=False)


@dataclass
class ContractArtifact:
    """Compiled contract as emitted by Hardhat."""

    contract_name: str  # e.g., "GOLD"
    source_name: str  # e.g., "contracts/GOLD.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation code
    deployed_bytecode: str
    path: Path

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


@dataclass
class DeploymentRecord:
    """Outcome of one creation transaction."""

    contract_name: str
    address: str  # Checksummed address
    transaction_hash: str
    network: str
    block_number: Optional[int] = None
    status: Optional[int] = None  # 1 success, 0 reverted
