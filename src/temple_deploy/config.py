"""Network profile loading for temple-deploy."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import DEFAULT_NETWORK, DEV_MNEMONIC, ETHERSCAN_API_KEY, NETWORK_CONFIG
from .exceptions import ConfigurationError, NetworkNotFoundError, SecretsNotFoundError
from .paths import get_secrets_path
from .types import NetworkProfile


def load_secrets(secrets_path: Optional[Union[Path, str]] = None) -> Dict[str, Any]:
    """
    Load the secrets file.

    Args:
        secrets_path: Path to secrets.json (defaults to ./secrets.json)

    Returns:
        Parsed secrets dictionary

    Raises:
        SecretsNotFoundError: If the file does not exist
        ConfigurationError: If the file is not a JSON object
    """
    path = Path(secrets_path) if secrets_path is not None else get_secrets_path()
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SecretsNotFoundError(
            f"Secrets file not found at {path}. "
            'Create it with {"mnemonic": "..."} or set $TEMPLE_MNEMONIC.'
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Secrets file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Secrets file {path} must hold a JSON object")
    return data


def list_networks() -> List[str]:
    """Names of all configured networks."""
    return list(NETWORK_CONFIG.keys())


def selected_network(network: Optional[str] = None) -> str:
    """
    Resolve which network to use for this run.

    Args:
        network: Explicit choice (e.g. from --network)

    Returns:
        network, else $TEMPLE_NETWORK, else the default network
    """
    if network:
        return network
    return os.environ.get("TEMPLE_NETWORK") or DEFAULT_NETWORK


def _resolve_credential(
    network: str, network_config: Dict[str, Any], secrets_path: Optional[Union[Path, str]]
) -> str:
    # Environment wins over the secrets file
    credential = os.environ.get("TEMPLE_MNEMONIC")
    if credential:
        return credential

    try:
        secrets = load_secrets(secrets_path)
    except SecretsNotFoundError:
        if network_config.get("dev"):
            return DEV_MNEMONIC
        raise

    credential = secrets.get("mnemonic")
    if not credential:
        raise ConfigurationError(f"Secrets file has no 'mnemonic' entry (network '{network}')")
    return credential


def get_network_profile(
    network: Optional[str] = None,
    secrets_path: Optional[Union[Path, str]] = None,
) -> NetworkProfile:
    """
    Build the profile for a named network.

    Args:
        network: Network name (defaults to selected_network())
        secrets_path: Path to secrets.json (defaults to ./secrets.json)

    Returns:
        NetworkProfile with credentials and explorer settings resolved

    Raises:
        NetworkNotFoundError: If network is not configured
        SecretsNotFoundError: If a non-development network has no credentials
    """
    name = selected_network(network)
    if name not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Network '{name}' not configured (available: {', '.join(list_networks())})"
        )

    network_config = NETWORK_CONFIG[name]

    url = network_config["url"]
    rpc_env = network_config.get("rpc_env")
    if rpc_env and os.environ.get(rpc_env):
        url = os.environ[rpc_env]

    credential = _resolve_credential(name, network_config, secrets_path)

    return NetworkProfile(
        name=name,
        url=url,
        accounts=(credential,),
        chain_id=network_config.get("chain_id"),
        gas_price=network_config.get("gas_price"),
        explorer_api_url=network_config.get("explorer_api_url"),
        explorer_api_key=os.environ.get("ETHERSCAN_API_KEY") or ETHERSCAN_API_KEY or None,
    )
