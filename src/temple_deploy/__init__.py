"""
temple-deploy: deployment harness for the Temple smart contracts
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactStore
from .config import get_network_profile, list_networks
from .contracts import Contract, ContractFactory, PendingDeployment, get_contract_factory
from .deploy import run
from .exceptions import (
    AmbiguousArtifactError,
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    FunctionNotFoundError,
    MissingCredentialsError,
    NetworkNotFoundError,
    NetworkUnreachableError,
    RpcError,
    SecretsNotFoundError,
    TransactionFailedError,
    VerificationError,
)
from .types import ContractArtifact, DeploymentRecord, NetworkProfile

try:
    __version__ = version("temple-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ArtifactStore",
    "Contract",
    "ContractFactory",
    "PendingDeployment",
    "get_contract_factory",
    "get_network_profile",
    "list_networks",
    "run",
    "ContractArtifact",
    "DeploymentRecord",
    "NetworkProfile",
    "DeploymentError",
    "ConfigurationError",
    "NetworkNotFoundError",
    "SecretsNotFoundError",
    "MissingCredentialsError",
    "ArtifactNotFoundError",
    "AmbiguousArtifactError",
    "FunctionNotFoundError",
    "NetworkUnreachableError",
    "RpcError",
    "TransactionFailedError",
    "ConfirmationTimeoutError",
    "VerificationError",
]
