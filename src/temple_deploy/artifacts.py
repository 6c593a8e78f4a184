"""Hardhat build artifact lookup for temple-deploy."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import AmbiguousArtifactError, ArtifactNotFoundError
from .paths import get_artifact_paths
from .types import ContractArtifact

logger = logging.getLogger(__name__)

# Value of "_format" in contract artifacts written by Hardhat
ARTIFACT_FORMAT = "hh-sol-artifact-1"


def parse_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a Hardhat contract artifact.

    Args:
        file_path: Path to <Name>.sol/<Name>.json

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If the file is not a contract artifact
    """
    with open(file_path) as f:
        data = json.load(f)

    if data.get("_format") != ARTIFACT_FORMAT:
        raise ArtifactNotFoundError(f"Not a Hardhat contract artifact: {file_path}")

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data["sourceName"],
        abi=data["abi"],
        bytecode=data.get("bytecode", "0x"),
        deployed_bytecode=data.get("deployedBytecode", "0x"),
        path=file_path,
    )


class ArtifactStore:
    """Resolves compiled contracts by name from a Hardhat artifacts directory."""

    def __init__(self, artifacts_root: Optional[Union[Path, str]] = None):
        """
        Initialize the store.

        Args:
            artifacts_root: Artifacts directory (defaults to ./src/artifacts)
        """
        self.root, self.build_info_dir = get_artifact_paths(artifacts_root)

    def _candidates(self, contract_name: str) -> List[Path]:
        if not self.root.exists():
            return []
        return sorted(
            path
            for path in self.root.rglob(f"{contract_name}.json")
            if self.build_info_dir not in path.parents
        )

    def get_artifact(self, name: str) -> ContractArtifact:
        """
        Get the artifact for a contract.

        Accepts a bare name ("GOLD") or a fully qualified one
        ("contracts/GOLD.sol:GOLD").

        Raises:
            ArtifactNotFoundError: If the contract was not compiled
            AmbiguousArtifactError: If a bare name exists in several sources
        """
        if ":" in name:
            source_name, contract_name = name.rsplit(":", 1)
            path = self.root / source_name / f"{contract_name}.json"
            if not path.exists():
                raise ArtifactNotFoundError(f"Artifact for {name} not found under {self.root}")
            return parse_artifact(path)

        candidates = self._candidates(name)
        if not candidates:
            raise ArtifactNotFoundError(
                f"Artifact for contract '{name}' not found under {self.root}. "
                "Compile the contracts first."
            )
        if len(candidates) > 1:
            names = ", ".join(
                f"{p.parent.relative_to(self.root).as_posix()}:{name}" for p in candidates
            )
            raise AmbiguousArtifactError(
                f"Contract name '{name}' is ambiguous, use one of: {names}"
            )

        logger.debug("artifact %s -> %s", name, candidates[0])
        return parse_artifact(candidates[0])

    def contract_names(self) -> List[str]:
        """Names of every contract with an artifact, sorted."""
        if not self.root.exists():
            return []
        names = set()
        for path in self.root.rglob("*.json"):
            if self.build_info_dir in path.parents or path.name.endswith(".dbg.json"):
                continue
            names.add(path.stem)
        return sorted(names)

    def build_info(self, artifact: ContractArtifact) -> Dict[str, Any]:
        """
        Load the compiler build info an artifact was produced by.

        Returns:
            Build info dictionary with "solcLongVersion" and standard-JSON "input"

        Raises:
            ArtifactNotFoundError: If the debug file or build info is missing
        """
        dbg_path = artifact.path.with_name(f"{artifact.contract_name}.dbg.json")
        try:
            with open(dbg_path) as f:
                dbg = json.load(f)
        except FileNotFoundError as e:
            raise ArtifactNotFoundError(f"Debug file not found: {dbg_path}") from e

        build_info_path = (dbg_path.parent / dbg["buildInfo"]).resolve()
        try:
            with open(build_info_path) as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise ArtifactNotFoundError(f"Build info not found: {build_info_path}") from e
