"""Command-line interface for temple-deploy."""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from eth_utils import encode_hex

from .accounts import load_signers
from .artifacts import ArtifactStore
from .config import get_network_profile, list_networks, selected_network
from .contracts import coerce_args, get_contract_factory
from .deploy import parse_contract_spec, run
from .verification import verify_contract

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="temple", description="Temple contract deployment harness")
    p.add_argument("--log-level", default="WARNING", help="Logging level for stderr diagnostics")
    sub = p.add_subparsers(dest="command", required=True)

    deploy = sub.add_parser("deploy", help="Deploy the contract plan")
    deploy.add_argument("--network", default=None, help="Network name (default $TEMPLE_NETWORK or hardhat)")
    deploy.add_argument("--artifacts", default=None, help="Hardhat artifacts directory")
    deploy.add_argument(
        "--contract",
        action="append",
        default=None,
        metavar="NAME[:ARG,...]",
        help="Contract to deploy instead of the default plan (repeatable)",
    )
    deploy.add_argument("--verify", action="store_true", help="Verify sources on the block explorer")
    deploy.add_argument("--timeout", type=float, default=None, help="Confirmation timeout in seconds")
    deploy.set_defaults(func=_cmd_deploy)

    accounts = sub.add_parser("accounts", help="Print the list of accounts")
    accounts.add_argument("--network", default=None)
    accounts.set_defaults(func=_cmd_accounts)

    verify = sub.add_parser("verify", help="Verify a deployed contract on the block explorer")
    verify.add_argument("--network", default=None)
    verify.add_argument("--artifacts", default=None)
    verify.add_argument("contract", help="Contract name")
    verify.add_argument("address", help="Deployed address")
    verify.add_argument("args", nargs="*", help="Constructor arguments")
    verify.set_defaults(func=_cmd_verify)

    networks = sub.add_parser("networks", help="List configured networks")
    networks.set_defaults(func=_cmd_networks)

    return p


def _cmd_deploy(args: argparse.Namespace) -> int:
    profile = get_network_profile(args.network)
    plan = [parse_contract_spec(s) for s in args.contract] if args.contract else None
    run(
        profile,
        plan=plan,
        artifacts=ArtifactStore(args.artifacts),
        verify=args.verify,
        timeout=args.timeout,
    )
    return 0


def _cmd_accounts(args: argparse.Namespace) -> int:
    profile = get_network_profile(args.network)
    for account in load_signers(profile):
        print(account.address)
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    profile = get_network_profile(args.network)
    artifacts = ArtifactStore(args.artifacts)
    factory = get_contract_factory(args.contract, profile, artifacts)
    constructor_args = coerce_args(factory.constructor_inputs, args.args)
    status = verify_contract(
        profile,
        factory.artifact,
        artifacts.build_info(factory.artifact),
        args.address,
        encode_hex(factory.encode_constructor_args(*constructor_args)),
    )
    print(status)
    return 0


def _cmd_networks(args: argparse.Namespace) -> int:
    current = selected_network()
    for name in list_networks():
        marker = "*" if name == current else " "
        print(f"{marker} {name}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        0 on success, 1 on any failure (error printed to stderr)
    """
    load_dotenv(find_dotenv(usecwd=True))
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return args.func(args)
    except Exception as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
