"""Signing credentials for temple-deploy."""

import re
from typing import List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .constants import HD_ACCOUNT_COUNT
from .exceptions import MissingCredentialsError
from .types import NetworkProfile

Account.enable_unaudited_hdwallet_features()

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

# BIP-44 path for Ethereum accounts
DERIVATION_PATH = "m/44'/60'/0'/0/{index}"


def is_private_key(credential: str) -> bool:
    """Whether a credential is a hex private key rather than a mnemonic."""
    return bool(_PRIVATE_KEY_RE.match(credential.strip()))


def signers_from_credential(credential: str, count: int = HD_ACCOUNT_COUNT) -> List[LocalAccount]:
    """
    Turn one credential into signing accounts.

    A private key yields exactly one account. A mnemonic yields `count`
    accounts derived along m/44'/60'/0'/0/i.
    """
    credential = credential.strip()
    if is_private_key(credential):
        return [Account.from_key(credential)]

    phrase = " ".join(credential.split())
    return [
        Account.from_mnemonic(phrase, account_path=DERIVATION_PATH.format(index=i))
        for i in range(count)
    ]


def load_signers(profile: NetworkProfile, count: Optional[int] = None) -> List[LocalAccount]:
    """
    Load the signing accounts for a network profile.

    Args:
        profile: Network profile
        count: Accounts to derive per mnemonic (defaults to HD_ACCOUNT_COUNT)

    Returns:
        Accounts in credential order; the first one deploys

    Raises:
        MissingCredentialsError: If the profile has no credentials
    """
    if not profile.accounts:
        raise MissingCredentialsError(f"Network '{profile.name}' has no accounts configured")

    if count is None:
        count = HD_ACCOUNT_COUNT

    signers: List[LocalAccount] = []
    for credential in profile.accounts:
        signers.extend(signers_from_credential(credential, count))
    return signers
