from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class AccountBalance:
    account: str
    balance: int


@dataclass(frozen=True)
class Uncle:
    miner: str
    uncle_position: int
    block_reward: int


@dataclass(frozen=True)
class BlockReward:
    block_number: int
    timestamp: int
    block_miner: str
    block_reward: int
    uncle_inclusion_reward: int
    uncles: Tuple[Uncle, ...] = ()


@dataclass(frozen=True)
class Block:
    """Reference to the block a transaction was mined in."""

    number: int
    hash: str


@dataclass(frozen=True)
class Token:
    """ERC-20 token metadata carried by token-transfer listings."""

    name: str
    symbol: str
    # Number of decimal places used by the token
    decimals: int


@dataclass(frozen=True)
class InternalCall:
    call_type: str
    trace_id: str


@dataclass(frozen=True)
class TransactionError:
    """Error reported for a single listed transaction. Data, never raised."""

    code: str
    description: str = ""


@dataclass(frozen=True)
class Transaction:
    block: Optional[Block]
    token: Optional[Token]
    internal: Optional[InternalCall]
    timestamp: datetime
    hash: str
    nonce: int
    # Position of the transaction within its block
    index: int
    from_address: str
    to_address: str
    contract_address: Optional[str]
    # Amounts in wei (or token base units for token transfers)
    value: int
    gas_limit: int
    gas_used: int
    gas_price: int
    is_error: bool
    error: Optional[TransactionError]
    confirmations: int
    # Call data, hex encoded
    data: str

    @property
    def is_pending(self) -> bool:
        return self.block is None


@dataclass(frozen=True)
class EventLog:
    address: str
    topics: Tuple[str, ...]
    data: str
    block_number: int
    timestamp: int
    gas_price: int
    gas_used: int
    log_index: int
    transaction_hash: str
    transaction_index: int


@dataclass(frozen=True)
class PriceQuote:
    eth_btc: Decimal
    eth_btc_timestamp: int
    eth_usd: Decimal
    eth_usd_timestamp: int


@dataclass(frozen=True)
class ExecutionStatus:
    is_error: bool
    description: str
