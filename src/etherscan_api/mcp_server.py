"""
MCP server exposing the typed Etherscan queries as tools.
"""

import argparse
from collections.abc import Mapping
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from .client import EtherscanClient
from .config import load_config
from .filters import EventLogFilter
from .query import DEFAULT_OFFSET, DEFAULT_PAGE
from .serialize import to_jsonable

server = FastMCP(
    name="etherscan-api",
    instructions="Read-only Etherscan queries: balances, block rewards, transactions, logs, ABI and stats.",
)

_clients: dict[str, EtherscanClient] = {}


def _get_client(network: Optional[str] = None) -> EtherscanClient:
    cfg = load_config(network)
    key = cfg.network
    if key not in _clients:
        _clients[key] = EtherscanClient(cfg)
    return _clients[key]


def _normalize_topics(value: Optional[Any]) -> list:
    """
    Topics arrive as an ordered array; each item is either a topic string or
    an object {"topic": "...", "operator": "and|or"}.
    """
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray)):
        raise ValueError("topics must be an array (e.g. ['0x...']); got a string/bytes.")
    if isinstance(value, Mapping):
        raise ValueError("topics must be an array, not an object/map.")
    return list(value)


@server.tool(
    name="get_balance",
    title="Get Ether Balance",
    description="Ether balance of an address in wei.",
)
def get_balance(address: str, network: Optional[str] = None) -> dict:
    balance = _get_client(network).balance(address)
    return {"address": address, "balance": str(balance)}


@server.tool(
    name="get_balances",
    title="Get Ether Balances",
    description="Ether balances (wei) of up to 20 addresses. `addresses` must be an array.",
)
def get_balances(addresses: list[str], network: Optional[str] = None) -> dict:
    balances = _get_client(network).balances(addresses)
    return {"balances": [{"account": b.account, "balance": str(b.balance)} for b in balances]}


@server.tool(
    name="get_block_reward",
    title="Get Block Reward",
    description="Block miner, block reward and uncle rewards for a mined block.",
)
def get_block_reward(block_number: int, network: Optional[str] = None) -> dict:
    return to_jsonable(_get_client(network).block_reward(block_number))


@server.tool(
    name="list_transactions",
    title="List Transactions",
    description="List transactions for an address, newest first. kind: normal|internal|token.",
)
def list_transactions(
    address: str,
    network: Optional[str] = None,
    kind: str = "normal",
    page: int = DEFAULT_PAGE,
    offset: int = DEFAULT_OFFSET,
    contract_address: Optional[str] = None,
) -> dict:
    client = _get_client(network)
    if kind == "internal":
        transactions = client.internal_transactions(address, page, offset)
    elif kind == "token":
        transactions = client.token_transfers(address, page, offset, contract_address)
    elif kind == "normal":
        transactions = client.transactions(address, page, offset)
    else:
        raise ValueError(f"Unsupported kind '{kind}'. Expected normal|internal|token.")
    return {
        "address": address,
        "kind": kind,
        "page": page,
        "offset": offset,
        "transactions": to_jsonable(transactions),
    }


@server.tool(
    name="query_logs",
    title="Query Event Logs",
    description=(
        "Query event logs from from_block (> 0) to to_block (default latest). Either address or "
        "topics is required. `topics` is an ordered array of topic strings or "
        "{topic, operator} objects; operator (and|or) links a topic to the next one."
    ),
)
def query_logs(
    from_block: int,
    to_block: Optional[int] = None,
    address: Optional[str] = None,
    topics: Optional[Any] = None,
    network: Optional[str] = None,
) -> dict:
    log_filter = EventLogFilter(from_block, to_block, address)
    for item in _normalize_topics(topics):
        if isinstance(item, Mapping):
            log_filter.add_topic_with_operation(item.get("topic"), item.get("operator") or "and")
        else:
            log_filter.add_topic(item)
    logs = _get_client(network).event_logs(log_filter)
    return {"logs": to_jsonable(logs)}


@server.tool(
    name="get_contract_abi",
    title="Get Contract ABI",
    description="Raw ABI JSON text of a verified contract.",
)
def get_contract_abi(address: str, network: Optional[str] = None) -> dict:
    return {"address": address, "abi": _get_client(network).contract_abi(address)}


@server.tool(
    name="get_stats",
    title="Get Ether Stats",
    description="Total ether supply (wei) and last ether price in BTC/USD.",
)
def get_stats(network: Optional[str] = None) -> dict:
    client = _get_client(network)
    return {
        "total_supply": str(client.total_supply()),
        "last_price": to_jsonable(client.last_price()),
    }


@server.tool(
    name="get_token_info",
    title="Get Token Supply/Balance",
    description="ERC-20 total supply, plus the balance of `address` when given (base units).",
)
def get_token_info(
    contract_address: str,
    address: Optional[str] = None,
    network: Optional[str] = None,
) -> dict:
    client = _get_client(network)
    data: dict = {
        "contract_address": contract_address,
        "total_supply": str(client.token_total_supply(contract_address)),
    }
    if address:
        data["address"] = address
        data["balance"] = str(client.token_balance(contract_address, address))
    return data


@server.tool(
    name="get_transaction_status",
    title="Get Transaction Status",
    description="Receipt status and contract execution status of a transaction.",
)
def get_transaction_status(tx_hash: str, network: Optional[str] = None) -> dict:
    client = _get_client(network)
    return {
        "tx_hash": tx_hash,
        "receipt_status": client.receipt_status(tx_hash),
        "execution": to_jsonable(client.execution_status(tx_hash)),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Etherscan API MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol for MCP.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--mount-path",
        default="/",
        help="Mount path for SSE transport (only when transport=sse).",
    )
    args = parser.parse_args()

    # FastMCP uses host/port only for SSE/HTTP transports; stdio ignores them.
    server.settings.host = args.host
    server.settings.port = args.port

    if args.transport == "sse":
        server.run(transport="sse", mount_path=args.mount_path)
    else:
        server.run(transport=args.transport)


if __name__ == "__main__":
    main()
