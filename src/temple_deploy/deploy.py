"""Deployment driver for temple-deploy."""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex
from web3 import Web3

from .accounts import load_signers
from .artifacts import ArtifactStore
from .constants import DEPLOY_PLAN
from .contracts import coerce_args, get_contract_factory
from .rpc import connect
from .types import DeploymentRecord, NetworkProfile
from .verification import verify_contract

logger = logging.getLogger(__name__)

DeployPlan = Sequence[Tuple[str, Sequence[Any]]]


def parse_contract_spec(spec: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Parse a --contract value of the form NAME or NAME:ARG,ARG.

    A fully qualified name keeps its source path: "contracts/Pool.sol:Pool:0xA,0xB".
    """
    parts = spec.split(":")
    if len(parts) >= 2 and parts[0].endswith(".sol"):
        name = f"{parts[0]}:{parts[1]}"
        rest = parts[2:]
    else:
        name = parts[0]
        rest = parts[1:]

    raw_args = ":".join(rest)
    args = tuple(a.strip() for a in raw_args.split(",")) if raw_args else ()
    return name, args


def run(
    profile: NetworkProfile,
    plan: Optional[DeployPlan] = None,
    artifacts: Optional[ArtifactStore] = None,
    w3: Optional[Web3] = None,
    signer: Optional[LocalAccount] = None,
    verify: bool = False,
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
) -> List[DeploymentRecord]:
    """
    Deploy every contract in the plan, in order.

    Each contract is resolved, submitted, and confirmed before the next one
    starts; its address is printed once confirmed. Any failure propagates
    and stops the run.

    Args:
        profile: Target network profile
        plan: (contract name, constructor args) pairs (defaults to DEPLOY_PLAN)
        artifacts: Artifact store (defaults to ./src/artifacts)
        w3: Web3 connection (defaults to one for profile.url)
        signer: Deploying account (defaults to the profile's first account)
        verify: Also verify each contract on the block explorer
        timeout: Confirmation timeout per contract
        poll_interval: Seconds between receipt polls

    Returns:
        One DeploymentRecord per deployed contract
    """
    if plan is None:
        plan = DEPLOY_PLAN
    if artifacts is None:
        artifacts = ArtifactStore()
    if w3 is None:
        w3 = connect(profile.url)
    if signer is None:
        signer = load_signers(profile, count=1)[0]

    logger.info("deploying %d contract(s) to %s from %s", len(plan), profile.name, signer.address)

    records: List[DeploymentRecord] = []
    for contract_name, raw_args in plan:
        factory = get_contract_factory(contract_name, profile, artifacts, w3, signer)
        args = coerce_args(factory.constructor_inputs, raw_args)

        pending = factory.deploy(*args)
        contract = pending.wait(timeout=timeout, poll_interval=poll_interval)
        print(f"Temple ------- {factory.artifact.contract_name} deployed ------- {contract.address}")
        records.append(contract.deployment)

        if verify:
            status = verify_contract(
                profile,
                factory.artifact,
                artifacts.build_info(factory.artifact),
                contract.address,
                encode_hex(factory.encode_constructor_args(*args)),
            )
            print(f"Temple ------- {factory.artifact.contract_name} verified ------- {status}")

    return records
