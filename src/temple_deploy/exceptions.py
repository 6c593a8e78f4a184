"""Custom exception classes for temple-deploy."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a network profile or explorer setting is incomplete."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class SecretsNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the secrets file is missing and no override is set."""

    pass


class MissingCredentialsError(DeploymentError, ValueError):
    """Raised when a network profile has no signing credentials."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when requested contract has no build artifact."""

    pass


class AmbiguousArtifactError(DeploymentError, ValueError):
    """Raised when a bare contract name matches several source files."""

    pass


class FunctionNotFoundError(DeploymentError, ValueError):
    """Raised when requested function is not found in contract ABI."""

    pass


class NetworkUnreachableError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint cannot be reached."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Raised when the node answers with an error or a malformed response."""

    def __init__(self, message: str, code=None):
        super().__init__(message)
        self.code = code


class TransactionFailedError(DeploymentError, RuntimeError):
    """Raised when a transaction is mined with a failing status."""

    pass


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when a transaction receipt does not appear in time."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when the block explorer rejects a source verification."""

    pass
