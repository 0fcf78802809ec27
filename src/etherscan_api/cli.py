import argparse
import json
import logging
import sys
from typing import Any, Optional

from .client import EtherscanClient
from .config import load_config
from .filters import EventLogFilter, TopicOperation
from .query import DEFAULT_OFFSET, DEFAULT_PAGE
from .serialize import to_jsonable


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--address", required=True, help="Account address (0x-prefixed).")
    parser.add_argument("--page", type=int, default=DEFAULT_PAGE, help="Page number, starting at 1.")
    parser.add_argument(
        "--offset", type=int, default=DEFAULT_OFFSET, help="Number of records per page."
    )


def _parse_topic(value: str) -> tuple[str, str]:
    """Accept TOPIC or TOPIC:and|or."""
    topic, sep, op = value.rpartition(":")
    if not sep or op.lower() not in {item.value for item in TopicOperation}:
        return value, TopicOperation.AND.value
    return topic, op.lower()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query the Etherscan API and print typed results as JSON.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--network",
        required=False,
        help="Optional network override. Defaults to NETWORK env or mainnet.",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    balance_parser = subparsers.add_parser("balance", help="Ether balance of an address (wei)")
    balance_parser.add_argument("--address", required=True, help="Account address (0x-prefixed).")

    balances_parser = subparsers.add_parser("balances", help="Ether balances of up to 20 addresses")
    balances_parser.add_argument(
        "--address", required=True, action="append", help="Account address; repeat for more."
    )

    reward_parser = subparsers.add_parser("block-reward", help="Block and uncle rewards")
    reward_parser.add_argument("--block", required=True, type=int, help="Block number.")

    _add_paging(subparsers.add_parser("transactions", help="Normal transactions of an address"))
    _add_paging(
        subparsers.add_parser("internal-transactions", help="Internal transactions of an address")
    )
    transfers_parser = subparsers.add_parser("token-transfers", help="ERC-20 transfers of an address")
    _add_paging(transfers_parser)
    transfers_parser.add_argument(
        "--contract-address", required=False, help="Limit to a single token contract."
    )

    logs_parser = subparsers.add_parser("logs", help="Event logs by block range, address and topics")
    logs_parser.add_argument("--from-block", required=True, type=int, help="First block (> 0).")
    logs_parser.add_argument("--to-block", required=False, type=int, help="Last block. Defaults to latest.")
    logs_parser.add_argument("--address", required=False, help="Contract address (0x-prefixed).")
    logs_parser.add_argument(
        "--topic",
        action="append",
        default=[],
        help="Topic filter in position order, TOPIC or TOPIC:and|or (operator links to the next topic).",
    )

    abi_parser = subparsers.add_parser("abi", help="Raw ABI of a verified contract")
    abi_parser.add_argument("--address", required=True, help="Contract address (0x-prefixed).")

    subparsers.add_parser("supply", help="Total ether supply (wei)")
    subparsers.add_parser("price", help="Last ether price in BTC and USD")

    token_supply_parser = subparsers.add_parser("token-supply", help="Total supply of an ERC-20 token")
    token_supply_parser.add_argument("--contract-address", required=True, help="Token contract address.")

    token_balance_parser = subparsers.add_parser("token-balance", help="ERC-20 balance of an address")
    token_balance_parser.add_argument("--contract-address", required=True, help="Token contract address.")
    token_balance_parser.add_argument("--address", required=True, help="Account address (0x-prefixed).")

    for name, help_text in (
        ("receipt-status", "Receipt status of a transaction"),
        ("execution-status", "Contract execution status of a transaction"),
    ):
        status_parser = subparsers.add_parser(name, help=help_text)
        status_parser.add_argument("--tx-hash", required=True, help="Transaction hash (0x-prefixed).")

    return parser


def _run(client: EtherscanClient, args: argparse.Namespace) -> Any:
    timeout = args.timeout
    if args.command == "balance":
        return client.balance(args.address, timeout=timeout)
    if args.command == "balances":
        return client.balances(args.address, timeout=timeout)
    if args.command == "block-reward":
        return client.block_reward(args.block, timeout=timeout)
    if args.command == "transactions":
        return client.transactions(args.address, args.page, args.offset, timeout=timeout)
    if args.command == "internal-transactions":
        return client.internal_transactions(args.address, args.page, args.offset, timeout=timeout)
    if args.command == "token-transfers":
        return client.token_transfers(
            args.address,
            args.page,
            args.offset,
            contract_address=args.contract_address,
            timeout=timeout,
        )
    if args.command == "logs":
        log_filter = EventLogFilter(args.from_block, args.to_block, args.address)
        for raw in args.topic:
            topic, op = _parse_topic(raw)
            log_filter.add_topic_with_operation(topic, op)
        return client.event_logs(log_filter, timeout=timeout)
    if args.command == "abi":
        return json.loads(client.contract_abi(args.address, timeout=timeout))
    if args.command == "supply":
        return client.total_supply(timeout=timeout)
    if args.command == "price":
        return client.last_price(timeout=timeout)
    if args.command == "token-supply":
        return client.token_total_supply(args.contract_address, timeout=timeout)
    if args.command == "token-balance":
        return client.token_balance(args.contract_address, args.address, timeout=timeout)
    if args.command == "receipt-status":
        return client.receipt_status(args.tx_hash, timeout=timeout)
    if args.command == "execution-status":
        return client.execution_status(args.tx_hash, timeout=timeout)
    raise ValueError(f"Unknown command '{args.command}'.")


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.network)
        client = EtherscanClient(config)
        result = _run(client, args)
        print(json.dumps(to_jsonable(result), indent=2))
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
