from .client import EtherscanClient
from .config import Config, load_config
from .errors import (
    APIError,
    EmptyResultError,
    EtherscanError,
    FieldParseError,
    MalformedResponseError,
    TransportError,
    ValidationError,
)
from .filters import EventLogFilter, TopicOperation
from .models import (
    AccountBalance,
    Block,
    BlockReward,
    EventLog,
    ExecutionStatus,
    InternalCall,
    PriceQuote,
    Token,
    Transaction,
    TransactionError,
    Uncle,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "AccountBalance",
    "Block",
    "BlockReward",
    "Config",
    "EmptyResultError",
    "EtherscanClient",
    "EtherscanError",
    "EventLog",
    "EventLogFilter",
    "ExecutionStatus",
    "FieldParseError",
    "InternalCall",
    "MalformedResponseError",
    "PriceQuote",
    "Token",
    "TopicOperation",
    "Transaction",
    "TransactionError",
    "TransportError",
    "Uncle",
    "ValidationError",
    "load_config",
]
