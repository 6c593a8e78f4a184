"""Contract factories and deployed-contract handles for temple-deploy."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from eth_account.signers.local import LocalAccount
from eth_utils import decode_hex, to_checksum_address
from eth_utils.abi import collapse_if_tuple
from web3 import Web3
from web3.exceptions import TimeExhausted

from .accounts import load_signers
from .artifacts import ArtifactStore
from .constants import CONFIRMATION_TIMEOUT, POLL_INTERVAL
from .exceptions import (
    ConfirmationTimeoutError,
    DeploymentError,
    FunctionNotFoundError,
    TransactionFailedError,
)
from .rpc import connect, translate_errors
from .types import ContractArtifact, DeploymentRecord, NetworkProfile

logger = logging.getLogger(__name__)


class Contract:
    """A deployed contract bound to a Web3 connection."""

    def __init__(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        w3: Web3,
        deployment: Optional[DeploymentRecord] = None,
    ):
        self.address = to_checksum_address(address)
        self.abi = abi
        self.w3 = w3
        self.deployment = deployment
        self._contract = w3.eth.contract(address=self.address, abi=abi)

    def _check_function(self, function_name: str, arg_count: int) -> None:
        # Overloads are told apart by argument count
        for item in self.abi:
            if (
                item.get("type") == "function"
                and item.get("name") == function_name
                and len(item.get("inputs", [])) == arg_count
            ):
                return

        raise FunctionNotFoundError(
            f"Function '{function_name}' with {arg_count} argument(s) not found "
            f"in ABI of contract at {self.address}"
        )

    def encode_call(self, function_name: str, *args: Any) -> str:
        """Calldata for a function call, 0x-prefixed."""
        self._check_function(function_name, len(args))
        return self._contract.encode_abi(function_name, args=list(args))

    def call(self, function_name: str, *args: Any) -> Any:
        """
        Call a read-only function.

        Returns:
            The decoded output as web3 returns it

        Raises:
            FunctionNotFoundError: If the function is not in the ABI
        """
        self._check_function(function_name, len(args))
        with translate_errors(f"Calling {function_name} on {self.address}"):
            return self._contract.functions[function_name](*args).call()


class PendingDeployment:
    """A submitted creation transaction awaiting confirmation."""

    def __init__(
        self,
        artifact: ContractArtifact,
        w3: Web3,
        transaction_hash: str,
        network: str,
    ):
        self.artifact = artifact
        self.w3 = w3
        self.transaction_hash = transaction_hash
        self.network = network

    def wait(self, timeout: Optional[float] = None, poll_interval: Optional[float] = None) -> Contract:
        """
        Wait for the creation transaction to be mined.

        Args:
            timeout: Seconds to wait (defaults to CONFIRMATION_TIMEOUT)
            poll_interval: Seconds between receipt polls (defaults to POLL_INTERVAL)

        Returns:
            Contract bound to the confirmed address

        Raises:
            ConfirmationTimeoutError: If no receipt appears in time
            TransactionFailedError: If the transaction reverted
        """
        if timeout is None:
            timeout = CONFIRMATION_TIMEOUT
        if poll_interval is None:
            poll_interval = POLL_INTERVAL

        name = self.artifact.contract_name
        with translate_errors(f"Waiting for {name} deployment"):
            try:
                receipt = self.w3.eth.wait_for_transaction_receipt(
                    self.transaction_hash, timeout=timeout, poll_latency=poll_interval
                )
            except TimeExhausted as e:
                raise ConfirmationTimeoutError(
                    f"Transaction {self.transaction_hash} not confirmed after {timeout}s"
                ) from e

        # Receipts from before Byzantium carry no status
        status = receipt.get("status")
        if status is None:
            status = 1
        if status == 0:
            raise TransactionFailedError(
                f"Deployment of {name} reverted (transaction {self.transaction_hash})"
            )

        address = receipt.get("contractAddress")
        if not address:
            raise TransactionFailedError(
                f"Transaction {self.transaction_hash} created no contract for {name}"
            )

        record = DeploymentRecord(
            contract_name=name,
            address=to_checksum_address(address),
            transaction_hash=self.transaction_hash,
            network=self.network,
            block_number=receipt.get("blockNumber"),
            status=status,
        )
        logger.info("%s confirmed at %s", record.contract_name, record.address)
        return Contract(record.address, self.artifact.abi, self.w3, deployment=record)


class ContractFactory:
    """Submits creation transactions for one compiled contract."""

    def __init__(
        self,
        artifact: ContractArtifact,
        w3: Web3,
        signer: LocalAccount,
        profile: NetworkProfile,
    ):
        self.artifact = artifact
        self.w3 = w3
        self.signer = signer
        self.profile = profile
        self._factory = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.artifact.abi:
            if item.get("type") == "constructor":
                return item.get("inputs", [])
        return []

    def _check_args(self, args: Sequence[Any]) -> None:
        inputs = self.constructor_inputs
        if len(args) != len(inputs):
            raise ValueError(
                f"{self.artifact.contract_name} constructor takes {len(inputs)} "
                f"argument(s), got {len(args)}"
            )

    def deploy_data(self, *args: Any) -> str:
        """
        Creation code followed by encoded constructor arguments.

        Raises:
            ValueError: If the argument count does not match the constructor
        """
        self._check_args(args)
        return self._factory.constructor(*args).data_in_transaction

    def encode_constructor_args(self, *args: Any) -> bytes:
        """ABI-encoded constructor arguments alone, as block explorers expect them."""
        creation = decode_hex(self.artifact.bytecode)
        return decode_hex(self.deploy_data(*args))[len(creation):]

    def deploy(self, *args: Any, gas: Optional[int] = None) -> PendingDeployment:
        """
        Sign and submit a creation transaction.

        Args:
            *args: Constructor arguments
            gas: Gas limit (estimated by the node if omitted)

        Returns:
            PendingDeployment for the submitted transaction
        """
        name = self.artifact.contract_name
        if decode_hex(self.artifact.bytecode) == b"":
            raise DeploymentError(f"{name} has no creation code (abstract contract or interface)")
        self._check_args(args)

        constructor = self._factory.constructor(*args)
        sender = self.signer.address

        with translate_errors(f"Deploying {name}"):
            nonce = self.w3.eth.get_transaction_count(sender, "pending")
            chain_id = self.profile.chain_id or self.w3.eth.chain_id
            gas_price = self.profile.gas_price or self.w3.eth.gas_price
            if gas is None:
                gas = constructor.estimate_gas({"from": sender})

            transaction = constructor.build_transaction(
                {
                    "from": sender,
                    "nonce": nonce,
                    "gas": gas,
                    "gasPrice": gas_price,
                    "chainId": chain_id,
                }
            )
            signed = self.w3.eth.account.sign_transaction(transaction, self.signer.key)
            transaction_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed.raw_transaction))

        logger.info("sent %s creation tx %s (nonce %d)", name, transaction_hash, nonce)
        return PendingDeployment(
            artifact=self.artifact,
            w3=self.w3,
            transaction_hash=transaction_hash,
            network=self.profile.name,
        )


def get_contract_factory(
    name: str,
    profile: NetworkProfile,
    artifacts: Optional[ArtifactStore] = None,
    w3: Optional[Web3] = None,
    signer: Optional[LocalAccount] = None,
) -> ContractFactory:
    """
    Resolve a contract factory by name.

    Args:
        name: Contract name (bare or fully qualified)
        profile: Target network profile
        artifacts: Artifact store (defaults to ./src/artifacts)
        w3: Web3 connection (defaults to one for profile.url)
        signer: Deploying account (defaults to the profile's first account)

    Raises:
        ArtifactNotFoundError: If the contract was not compiled
    """
    if artifacts is None:
        artifacts = ArtifactStore()
    artifact = artifacts.get_artifact(name)

    if w3 is None:
        w3 = connect(profile.url)
    if signer is None:
        signer = load_signers(profile, count=1)[0]

    return ContractFactory(artifact, w3, signer, profile)


def coerce_arg(abi_type: str, value: Any) -> Any:
    """
    Convert a command-line string to the Python value web3 expects.

    Non-string values pass through unchanged.
    """
    if not isinstance(value, str):
        return value
    if abi_type.startswith(("uint", "int")) and "[" not in abi_type:
        return int(value, 0)
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type == "bool":
        return value.strip().lower() in ("1", "true", "yes")
    if abi_type.startswith("bytes") and "[" not in abi_type:
        return decode_hex(value)
    return value


def coerce_args(inputs: Sequence[Dict[str, Any]], args: Sequence[Any]) -> Tuple[Any, ...]:
    """Apply coerce_arg to each argument against its ABI parameter."""
    coerced = tuple(coerce_arg(collapse_if_tuple(p), a) for p, a in zip(inputs, args))
    return coerced + tuple(args[len(inputs):])
