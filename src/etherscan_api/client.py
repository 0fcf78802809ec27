import logging
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from . import parsers, query
from .config import Config
from .envelope import Body
from .errors import APIError
from .filters import EventLogFilter
from .models import (
    AccountBalance,
    BlockReward,
    EventLog,
    ExecutionStatus,
    PriceQuote,
    Transaction,
)
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EtherscanClient:
    """
    Typed read-only client for the Etherscan API.

    Each method validates its arguments, issues exactly one GET through the
    transport and returns freshly parsed values. `timeout` (seconds) overrides
    the configured request timeout for that call only.
    """

    def __init__(self, config: Config, transport: Optional[Transport] = None) -> None:
        self.config = config
        self.transport = transport or HttpTransport(timeout=config.request_timeout)

    def _call(
        self,
        params: Dict[str, str],
        parser: Callable[[Body], T],
        timeout: Optional[float],
    ) -> T:
        request = query.build_request(self.config, params)
        logger.debug(
            "etherscan request module=%s action=%s network=%s",
            params.get("module"),
            params.get("action"),
            self.config.network,
        )
        body = self.transport.execute(request, timeout=timeout)
        try:
            return parser(body)
        except APIError as exc:
            logger.warning(
                "etherscan %s/%s failed: %s",
                params.get("module"),
                params.get("action"),
                exc.message,
            )
            raise

    def balance(self, address: str, timeout: Optional[float] = None) -> int:
        """Balance of a single address, in wei."""
        return self._call(query.build_balance_params(address), parsers.parse_balance, timeout)

    def balances(
        self, addresses: Sequence[str], timeout: Optional[float] = None
    ) -> List[AccountBalance]:
        """Balances of up to 20 addresses in one request."""
        return self._call(
            query.build_multi_balance_params(addresses), parsers.parse_balances, timeout
        )

    def block_reward(self, block_number: int, timeout: Optional[float] = None) -> BlockReward:
        return self._call(
            query.build_block_reward_params(block_number), parsers.parse_block_reward, timeout
        )

    def transactions(
        self,
        address: str,
        page: int = query.DEFAULT_PAGE,
        offset: int = query.DEFAULT_OFFSET,
        timeout: Optional[float] = None,
    ) -> List[Transaction]:
        """Normal transactions to/from `address`, newest first."""
        params = query.build_transactions_params(address, page, offset)
        return self._call(params, parsers.parse_transactions, timeout)

    def internal_transactions(
        self,
        address: str,
        page: int = query.DEFAULT_PAGE,
        offset: int = query.DEFAULT_OFFSET,
        timeout: Optional[float] = None,
    ) -> List[Transaction]:
        params = query.build_transactions_params(address, page, offset, kind="internal")
        return self._call(params, parsers.parse_transactions, timeout)

    def token_transfers(
        self,
        address: str,
        page: int = query.DEFAULT_PAGE,
        offset: int = query.DEFAULT_OFFSET,
        contract_address: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> List[Transaction]:
        """ERC-20 transfers for `address`, optionally limited to one token contract."""
        params = query.build_transactions_params(
            address, page, offset, kind="token", contract_address=contract_address
        )
        return self._call(params, parsers.parse_transactions, timeout)

    def event_logs(
        self, log_filter: EventLogFilter, timeout: Optional[float] = None
    ) -> List[EventLog]:
        return self._call(
            query.build_event_logs_params(log_filter), parsers.parse_event_logs, timeout
        )

    def contract_abi(self, address: str, timeout: Optional[float] = None) -> str:
        """Raw, undecoded ABI JSON text of a verified contract."""
        return self._call(
            query.build_contract_abi_params(address), parsers.parse_contract_abi, timeout
        )

    def total_supply(self, timeout: Optional[float] = None) -> int:
        """Total supply of ether, in wei."""
        return self._call(query.build_total_supply_params(), parsers.parse_total_supply, timeout)

    def last_price(self, timeout: Optional[float] = None) -> PriceQuote:
        return self._call(query.build_last_price_params(), parsers.parse_last_price, timeout)

    def token_total_supply(self, contract_address: str, timeout: Optional[float] = None) -> int:
        return self._call(
            query.build_token_supply_params(contract_address), parsers.parse_token_amount, timeout
        )

    def token_balance(
        self, contract_address: str, address: str, timeout: Optional[float] = None
    ) -> int:
        return self._call(
            query.build_token_balance_params(contract_address, address),
            parsers.parse_token_amount,
            timeout,
        )

    def receipt_status(self, tx_hash: str, timeout: Optional[float] = None) -> Optional[bool]:
        """True if the receipt reports success; None before Byzantium."""
        return self._call(
            query.build_receipt_status_params(tx_hash), parsers.parse_receipt_status, timeout
        )

    def execution_status(
        self, tx_hash: str, timeout: Optional[float] = None
    ) -> ExecutionStatus:
        return self._call(
            query.build_execution_status_params(tx_hash), parsers.parse_execution_status, timeout
        )
