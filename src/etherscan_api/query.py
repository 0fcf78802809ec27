"""
Outbound request construction.

Every `build_*` function validates its inputs and returns the query parameters
for one endpoint; `build_request` turns them into a RequestSpec bound to the
configured endpoint. Nothing here performs I/O.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .config import Config
from .errors import ValidationError
from .filters import EventLogFilter

MAX_MULTI_BALANCE_ADDRESSES = 20
DEFAULT_PAGE = 1
DEFAULT_OFFSET = 100

TRANSACTION_ACTIONS = {
    "normal": "txlist",
    "internal": "txlistinternal",
    "token": "tokentx",
}


@dataclass(frozen=True)
class RequestSpec:
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "GET"


def _require_address(address: Any, name: str = "address") -> str:
    if not isinstance(address, str):
        raise ValidationError(f"{name} must be a string.")
    candidate = address.strip()
    if not candidate.startswith("0x"):
        raise ValidationError(f"{name} must begin with 0x")
    return candidate


def _require_int(value: Any, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer.")
    if value < minimum:
        raise ValidationError(f"{name} param must >= {minimum}")
    return value


def _require_tx_hash(tx_hash: Any) -> str:
    if not isinstance(tx_hash, str) or not tx_hash.strip().startswith("0x"):
        raise ValidationError("tx_hash must be a 0x-prefixed string.")
    return tx_hash.strip()


def build_balance_params(address: str) -> Dict[str, str]:
    return {
        "module": "account",
        "action": "balance",
        "tag": "latest",
        "address": _require_address(address),
    }


def build_multi_balance_params(addresses: Sequence[str]) -> Dict[str, str]:
    if isinstance(addresses, str) or not addresses:
        raise ValidationError("addresses must be a non-empty list of addresses.")
    if len(addresses) > MAX_MULTI_BALANCE_ADDRESSES:
        raise ValidationError(
            f"At most {MAX_MULTI_BALANCE_ADDRESSES} addresses are supported per request."
        )
    normalized = [_require_address(addr, f"addresses[{idx}]") for idx, addr in enumerate(addresses)]
    return {
        "module": "account",
        "action": "balancemulti",
        "tag": "latest",
        "address": ",".join(normalized),
    }


def build_block_reward_params(block_number: int) -> Dict[str, str]:
    return {
        "module": "block",
        "action": "getblockreward",
        "blockno": str(_require_int(block_number, "block_number", 0)),
    }


def build_transactions_params(
    address: str,
    page: int = DEFAULT_PAGE,
    offset: int = DEFAULT_OFFSET,
    kind: str = "normal",
    contract_address: Optional[str] = None,
) -> Dict[str, str]:
    action = TRANSACTION_ACTIONS.get(kind)
    if action is None:
        allowed = "|".join(TRANSACTION_ACTIONS)
        raise ValidationError(f"Unsupported transaction listing '{kind}'. Expected {allowed}.")

    params = {
        "module": "account",
        "action": action,
        "address": _require_address(address),
        # newest transactions first
        "sort": "desc",
        "page": str(_require_int(page, "page", 1)),
        "offset": str(_require_int(offset, "offset", 0)),
    }
    if contract_address is not None:
        if kind != "token":
            raise ValidationError("contract_address only applies to token transfer listings.")
        params["contractaddress"] = _require_address(contract_address, "contract_address")
    return params


def build_event_logs_params(log_filter: EventLogFilter) -> Dict[str, str]:
    from_block = log_filter.from_block
    if isinstance(from_block, bool) or not isinstance(from_block, int) or from_block <= 0:
        raise ValidationError("from block required")

    topics = log_filter.topic_params()
    if not log_filter.address and not topics:
        raise ValidationError("address or topics required")

    params = {
        "module": "logs",
        "action": "getLogs",
        "fromBlock": str(from_block),
    }
    if log_filter.to_block:
        to_block = _require_int(log_filter.to_block, "to_block", from_block)
        params["toBlock"] = str(to_block)
    else:
        params["toBlock"] = "latest"

    if log_filter.address:
        params["address"] = _require_address(log_filter.address)

    params.update(topics)
    return params


def build_contract_abi_params(address: str) -> Dict[str, str]:
    return {
        "module": "contract",
        "action": "getabi",
        "address": _require_address(address),
    }


def build_total_supply_params() -> Dict[str, str]:
    return {"module": "stats", "action": "ethsupply"}


def build_last_price_params() -> Dict[str, str]:
    return {"module": "stats", "action": "ethprice"}


def build_token_supply_params(contract_address: str) -> Dict[str, str]:
    return {
        "module": "stats",
        "action": "tokensupply",
        "contractaddress": _require_address(contract_address, "contract_address"),
    }


def build_token_balance_params(contract_address: str, address: str) -> Dict[str, str]:
    return {
        "module": "account",
        "action": "tokenbalance",
        "contractaddress": _require_address(contract_address, "contract_address"),
        "address": _require_address(address),
        "tag": "latest",
    }


def build_receipt_status_params(tx_hash: str) -> Dict[str, str]:
    return {
        "module": "transaction",
        "action": "gettxreceiptstatus",
        "txhash": _require_tx_hash(tx_hash),
    }


def build_execution_status_params(tx_hash: str) -> Dict[str, str]:
    return {
        "module": "transaction",
        "action": "getstatus",
        "txhash": _require_tx_hash(tx_hash),
    }


def build_request(config: Config, params: Dict[str, str]) -> RequestSpec:
    if not params:
        raise ValidationError("Params are empty")
    if not params.get("module"):
        raise ValidationError("Missing required parameter: module")
    if not params.get("action"):
        raise ValidationError("Missing required parameter: action")

    merged = dict(params)
    if not merged.get("apikey"):
        merged.pop("apikey", None)
        if config.api_key:
            merged["apikey"] = config.api_key

    return RequestSpec(
        url=config.base_url,
        params=merged,
        headers={"User-Agent": config.user_agent},
    )
