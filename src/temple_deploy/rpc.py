"""Node connection and RPC error mapping for temple-deploy."""

import logging
import json
from contextlib import contextmanager
from typing import Iterator

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import NetworkUnreachableError, RpcError

logger = logging.getLogger(__name__)


def connect(url: str, timeout: float = 30) -> Web3:
    """
    Build a Web3 instance for an HTTP JSON-RPC endpoint.

    Args:
        url: RPC endpoint URL
        timeout: Per-request timeout in seconds

    Returns:
        Web3 bound to url, with provider-level retries disabled
    """
    logger.debug("connecting to %s", url)
    provider = Web3.HTTPProvider(
        url,
        request_kwargs={"timeout": timeout},
        exception_retry_configuration=None,
    )
    return Web3(provider)


def _rpc_error_details(exc: Exception):
    response = getattr(exc, "rpc_response", None)
    if isinstance(response, dict) and isinstance(response.get("error"), dict):
        error = response["error"]
        return error.get("message", str(exc)), error.get("code")
    return str(exc), None


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """
    Map transport and node failures to DeploymentError subclasses.

    Args:
        action: What was being attempted, for the error message

    Raises:
        NetworkUnreachableError: If the endpoint cannot be reached
        RpcError: If the endpoint answers with an HTTP error, a malformed
                  body, or a JSON-RPC error object
    """
    try:
        yield
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        raise RpcError(f"{action} failed with HTTP status {status}") from e
    except requests.RequestException as e:
        raise NetworkUnreachableError(f"{action}: cannot reach node: {e}") from e
    except json.JSONDecodeError as e:
        raise RpcError(f"{action}: malformed response from node: {e}") from e
    except Web3Exception as e:
        message, code = _rpc_error_details(e)
        raise RpcError(f"{action}: {message}", code=code) from e
