"""Command-line interface for Aave v3 on Aptos operator scripts."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from aptos_sdk.account import Account

from .chains.aptos import AptosClient
from .codec import parse_amount
from .config import (
    MNEMONIC_ENV,
    ORACLE_KEY_ENV,
    POOL_KEY_ENV,
    RATE_KEY_ENV,
    UNDERLYING_TOKENS_KEY_ENV,
    USER_KEY_ENV,
    AppConfig,
    load_config,
    resolve_private_key,
)
from .errors import AaveAptosError, ConfigError
from .keys import load_account
from .logging_setup import configure_logging
from .profiles import PROFILES
from .services import ProtocolConfigurator, operations

logger = logging.getLogger(__name__)


def _amount_arg(value: str) -> int:
    try:
        return parse_amount(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _add_key_arg(parser: argparse.ArgumentParser, env_var: str) -> None:
    parser.add_argument(
        "-k",
        "--private-key",
        default=None,
        help=f"Signing key (default: ${env_var})",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="aave-aptos",
        description="Aave v3 on Aptos: protocol setup and operator scripts",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--network",
        default=None,
        choices=list(PROFILES),
        help="Deployment profile (overrides config)",
    )

    sub = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("supply", "Supply an asset to the pool"),
        ("borrow", "Borrow an asset at the variable rate"),
        ("repay", "Repay variable-rate debt"),
        ("withdraw", "Withdraw a supplied asset"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--symbol", required=True, help="Reserve symbol, e.g. DAI")
        p.add_argument("--amount", required=True, type=_amount_arg, help="Amount in base units")
        _add_key_arg(p, USER_KEY_ENV)

    p = sub.add_parser("mint-underlyings", help="Mint mock underlying tokens")
    p.add_argument("--to", action="append", required=True, help="Recipient (repeatable)")
    p.add_argument("--amount", required=True, type=_amount_arg)
    p.add_argument("--symbol", action="append", required=True, help="Token symbol (repeatable)")
    _add_key_arg(p, UNDERLYING_TOKENS_KEY_ENV)

    p = sub.add_parser("transfer-coins", help="Transfer APT to recipients")
    p.add_argument("--to", action="append", required=True, help="Recipient (repeatable)")
    p.add_argument("--amount", required=True, type=_amount_arg, help="Amount in octas")
    _add_key_arg(p, USER_KEY_ENV)

    p = sub.add_parser("set-asset-feed-id", help="Register oracle price feeds")
    p.add_argument(
        "--symbol", action="append", default=None, help="Reserve symbol (repeatable, default: all)"
    )
    _add_key_arg(p, ORACLE_KEY_ENV)

    for name in ("get-asset-price", "get-asset-price-and-timestamp"):
        p = sub.add_parser(name, help="Read the oracle price of an asset")
        p.add_argument("--asset", required=True, help="Asset address")

    sub.add_parser("get-protocol-data", help="Print every reserve's configuration and state")

    p = sub.add_parser("get-user-data", help="Print a user's account and reserve data")
    p.add_argument("--user", required=True, help="User address")

    sub.add_parser("setup-protocol", help="Apply the configured reserves and eModes")

    p = sub.add_parser("fund-signer", help="Derive a signer from the mnemonic and fund it")
    p.add_argument("--index", type=int, default=0, help="Derivation index (default: 0)")

    return parser


def _signer(explicit: str | None, fallback: str, env_var: str) -> Account:
    key = resolve_private_key(explicit or fallback, env_var)
    try:
        return load_account(key)
    except ValueError as e:
        raise ConfigError(f"Invalid private key: {e}") from None


async def _dispatch(args: argparse.Namespace, config: AppConfig) -> None:
    gateway = AptosClient(config.network)
    signers = config.signers
    command = args.command

    if command in ("supply", "borrow", "repay", "withdraw"):
        signer = _signer(args.private_key, signers.user_private_key, USER_KEY_ENV)
        action = getattr(operations, command)
        receipt = await action(gateway, signer, args.symbol, args.amount)
        print(f"{command} {args.amount} {args.symbol}: {receipt.hash}")

    elif command == "mint-underlyings":
        signer = _signer(
            args.private_key, signers.underlying_tokens_private_key, UNDERLYING_TOKENS_KEY_ENV
        )
        receipts = await operations.mint_underlyings(
            gateway, signer, args.to, args.amount, args.symbol
        )
        for receipt in receipts:
            print(f"minted: {receipt.hash}")

    elif command == "transfer-coins":
        signer = _signer(args.private_key, signers.user_private_key, USER_KEY_ENV)
        receipts = await operations.transfer_coins(gateway, signer, args.to, args.amount)
        for receipt in receipts:
            print(f"transferred: {receipt.hash}")

    elif command == "set-asset-feed-id":
        signer = _signer(args.private_key, signers.oracle_private_key, ORACLE_KEY_ENV)
        receipts = await operations.set_asset_feed_ids(gateway, signer, args.symbol)
        for receipt in receipts:
            print(f"feed set: {receipt.hash}")

    elif command == "get-asset-price":
        price = await operations.get_asset_price(gateway, args.asset)
        print(f"{args.asset}: {price}")

    elif command == "get-asset-price-and-timestamp":
        price, timestamp = await operations.get_asset_price_and_timestamp(gateway, args.asset)
        print(f"{args.asset}: {price} @ {timestamp}")

    elif command == "get-protocol-data":
        for snapshot in await operations.get_protocol_data(gateway):
            print(f"\n=== {snapshot.token.symbol} ({snapshot.token.token_address}) ===")
            print(f"  configuration : {snapshot.configuration}")
            print(f"  caps          : {snapshot.caps}")
            print(f"  paused        : {snapshot.paused}")
            print(f"  siloed        : {snapshot.siloed_borrowing}")
            print(f"  debt ceiling  : {snapshot.debt_ceiling}")
            print(f"  data          : {snapshot.data}")
            print(f"  price         : {snapshot.price}")

    elif command == "get-user-data":
        account, reserves = await operations.get_user_data(gateway, args.user)
        print(f"account: {account}")
        for reserve in reserves:
            print(f"  {reserve.token.symbol}: {reserve.data}")

    elif command == "setup-protocol":
        configurator = ProtocolConfigurator(
            gateway,
            resolve_private_key(signers.pool_private_key, POOL_KEY_ENV),
            resolve_private_key(signers.oracle_private_key, ORACLE_KEY_ENV),
            resolve_private_key(signers.rate_private_key, RATE_KEY_ENV),
            resolve_private_key(
                signers.underlying_tokens_private_key, UNDERLYING_TOKENS_KEY_ENV
            ),
            mnemonic=signers.mnemonic or None,
        )
        reserves = await configurator.setup_protocol(config.reserves, config.emodes)
        for reserve in reserves:
            print(f"{reserve.symbol}: {reserve.address}")

    elif command == "fund-signer":
        mnemonic = resolve_private_key(signers.mnemonic, MNEMONIC_ENV)
        account = await operations.fund_derived_signer(gateway, mnemonic, args.index)
        print(f"signer #{args.index}: {account.address()}")


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command, reporting failures on stderr."""
    configure_logging(args.log_level)
    try:
        config = load_config(args.config, args.network)
        await _dispatch(args, config)
    except (AaveAptosError, FileNotFoundError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
    except Exception as e:
        logger.exception("%s failed unexpectedly", args.command)
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
