"""Block explorer source verification for temple-deploy."""

import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from .constants import SOLIDITY_VERSION
from .exceptions import ConfigurationError, NetworkUnreachableError, VerificationError
from .types import ContractArtifact, NetworkProfile

logger = logging.getLogger(__name__)

PENDING_RESULTS = ("Pending in queue", "In progress")
ALREADY_VERIFIED = "already verified"


def _explorer_request(
    method: str, api_url: str, params: Dict[str, Any], timeout: float = 30
) -> Dict[str, Any]:
    try:
        if method == "POST":
            response = requests.post(api_url, data=params, timeout=timeout)
        else:
            response = requests.get(api_url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise NetworkUnreachableError(f"Cannot reach explorer API {api_url}: {e}") from e

    if response.status_code != 200:
        raise VerificationError(f"Explorer API returned status {response.status_code}")

    try:
        return response.json()
    except ValueError as e:
        raise VerificationError(f"Malformed explorer response: {e}") from e


def submit_verification(
    profile: NetworkProfile,
    artifact: ContractArtifact,
    build_info: Dict[str, Any],
    address: str,
    constructor_args: str = "",
) -> Optional[str]:
    """
    Submit a contract's source for verification.

    Args:
        profile: Network profile with explorer URL and key
        artifact: Deployed contract's artifact
        build_info: Hardhat build info the artifact came from
        address: Deployed address
        constructor_args: ABI-encoded constructor arguments (hex, with or without 0x)

    Returns:
        Verification GUID to poll, or None if the contract is already verified

    Raises:
        ConfigurationError: If the profile has no explorer URL or key,
                            or the build used another compiler version
        VerificationError: If the explorer rejects the submission
    """
    if not profile.explorer_api_url:
        raise ConfigurationError(f"Network '{profile.name}' has no block explorer API")
    if not profile.explorer_api_key:
        raise ConfigurationError("Explorer API key missing: set $ETHERSCAN_API_KEY")
    if build_info.get("solcVersion") != SOLIDITY_VERSION:
        raise ConfigurationError(
            f"{artifact.contract_name} was compiled with solc {build_info.get('solcVersion')}, "
            f"expected {SOLIDITY_VERSION}"
        )

    params = {
        "apikey": profile.explorer_api_key,
        "module": "contract",
        "action": "verifysourcecode",
        "contractaddress": address,
        "sourceCode": json.dumps(build_info["input"]),
        "codeformat": "solidity-standard-json-input",
        "contractname": artifact.fully_qualified_name,
        "compilerversion": f"v{build_info['solcLongVersion']}",
        # Misspelling is part of the Etherscan API
        "constructorArguements": constructor_args.removeprefix("0x"),
    }
    result = _explorer_request("POST", profile.explorer_api_url, params)

    if result.get("status") != "1":
        message = str(result.get("result", ""))
        if ALREADY_VERIFIED in message.lower():
            return None
        raise VerificationError(f"Verification submission rejected: {message}")

    return result["result"]


def wait_for_verification(
    profile: NetworkProfile, guid: str, timeout: float = 120, poll_interval: float = 5
) -> str:
    """
    Poll verification status until the explorer settles.

    Returns:
        Final status message (e.g. "Pass - Verified")

    Raises:
        VerificationError: If verification fails or does not settle in time
    """
    deadline = time.monotonic() + timeout
    params = {
        "apikey": profile.explorer_api_key,
        "module": "contract",
        "action": "checkverifystatus",
        "guid": guid,
    }

    while True:
        result = _explorer_request("GET", profile.explorer_api_url, params)
        message = str(result.get("result", ""))

        if message not in PENDING_RESULTS:
            if result.get("status") == "1" or ALREADY_VERIFIED in message.lower():
                return message
            raise VerificationError(f"Verification failed: {message}")

        if time.monotonic() >= deadline:
            raise VerificationError(f"Verification {guid} still pending after {timeout}s")
        logger.debug("verification %s: %s", guid, message)
        time.sleep(poll_interval)


def verify_contract(
    profile: NetworkProfile,
    artifact: ContractArtifact,
    build_info: Dict[str, Any],
    address: str,
    constructor_args: str = "",
    poll_interval: float = 5,
) -> str:
    """
    Verify a deployed contract's source on the network's block explorer.

    Returns:
        Final status message
    """
    guid = submit_verification(profile, artifact, build_info, address, constructor_args)
    if guid is None:
        return "Already Verified"
    return wait_for_verification(profile, guid, poll_interval=poll_interval)
