from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .coerce import (
    parse_big,
    parse_big_hex,
    parse_big_strict,
    parse_bool,
    parse_decimal,
    parse_int,
    parse_int_hex,
)
from .envelope import Body, decode_envelope
from .errors import EmptyResultError, MalformedResponseError
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


def _text(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    return str(value)


def _present(record: Dict[str, Any], key: str) -> bool:
    return bool(_text(record, key).strip())


def _expect_list(result: Any) -> List[Any]:
    if result is None:
        return []
    if not isinstance(result, list):
        raise MalformedResponseError("Unexpected response from Etherscan (result is not a list).")
    return result


def _expect_object(result: Any) -> Dict[str, Any]:
    if not isinstance(result, dict):
        raise MalformedResponseError("Unexpected response from Etherscan (result is not an object).")
    return result


def parse_balance(body: Body) -> int:
    envelope = decode_envelope(body)
    return parse_big_strict(envelope.result, "balance")


def parse_balances(body: Body) -> List[AccountBalance]:
    envelope = decode_envelope(body)
    balances: List[AccountBalance] = []
    for entry in _expect_list(envelope.result):
        entry = _expect_object(entry)
        balances.append(
            AccountBalance(
                account=_text(entry, "account"),
                balance=parse_big_strict(entry.get("balance"), "balance"),
            )
        )
    return balances


def parse_total_supply(body: Body) -> int:
    envelope = decode_envelope(body)
    return parse_big_strict(envelope.result, "total supply")


def parse_token_amount(body: Body) -> int:
    """Token supply and token balance share one plain-integer result."""
    envelope = decode_envelope(body)
    return parse_big_strict(envelope.result, "token amount")


def parse_block_reward(body: Body) -> BlockReward:
    envelope = decode_envelope(body, require_result=True)
    reward = _expect_object(envelope.result)

    uncles = []
    for entry in _expect_list(reward.get("uncles")):
        if not isinstance(entry, dict):
            continue
        uncles.append(
            Uncle(
                miner=_text(entry, "miner"),
                uncle_position=parse_int(entry.get("unclePosition")),
                block_reward=parse_big(entry.get("blockreward")),
            )
        )

    return BlockReward(
        block_number=parse_int(reward.get("blockNumber")),
        timestamp=parse_int(reward.get("timeStamp")),
        block_miner=_text(reward, "blockMiner"),
        block_reward=parse_big(reward.get("blockReward")),
        uncle_inclusion_reward=parse_big(reward.get("uncleInclusionReward")),
        uncles=tuple(uncles),
    )


def _parse_block(record: Dict[str, Any]) -> Optional[Block]:
    if not _present(record, "blockNumber"):
        return None
    return Block(number=parse_int(record.get("blockNumber")), hash=_text(record, "blockHash"))


def _parse_token(record: Dict[str, Any]) -> Optional[Token]:
    if not _present(record, "tokenSymbol"):
        return None
    return Token(
        name=_text(record, "tokenName"),
        symbol=_text(record, "tokenSymbol"),
        decimals=parse_int(record.get("tokenDecimal")),
    )


def _parse_internal(record: Dict[str, Any]) -> Optional[InternalCall]:
    if not _present(record, "type"):
        return None
    return InternalCall(call_type=_text(record, "type"), trace_id=_text(record, "traceId"))


def _parse_error(record: Dict[str, Any]) -> Optional[TransactionError]:
    if not _present(record, "errCode"):
        return None
    return TransactionError(
        code=_text(record, "errCode"),
        description=_text(record, "errDescription"),
    )


def parse_transaction(record: Dict[str, Any]) -> Transaction:
    try:
        timestamp = datetime.fromtimestamp(parse_int(record.get("timeStamp")), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        timestamp = datetime.fromtimestamp(0, tz=timezone.utc)
    contract_address = _text(record, "contractAddress") or None

    return Transaction(
        block=_parse_block(record),
        token=_parse_token(record),
        internal=_parse_internal(record),
        timestamp=timestamp,
        hash=_text(record, "hash"),
        nonce=parse_int(record.get("nonce")),
        index=parse_int(record.get("transactionIndex")),
        from_address=_text(record, "from"),
        to_address=_text(record, "to"),
        contract_address=contract_address,
        value=parse_big(record.get("value")),
        gas_limit=parse_int(record.get("gas")),
        gas_used=parse_int(record.get("gasUsed")),
        gas_price=parse_big(record.get("gasPrice")),
        is_error=parse_bool(record.get("isError")),
        error=_parse_error(record),
        confirmations=parse_int(record.get("confirmations")),
        data=_text(record, "input"),
    )


def parse_transactions(body: Body) -> List[Transaction]:
    """
    Parse any transaction listing: normal, internal, or token transfers.

    Optional sub-objects are attached from what each record carries, so a
    single parser handles all three listings.
    """
    envelope = decode_envelope(body)
    return [
        parse_transaction(record)
        for record in _expect_list(envelope.result)
        if isinstance(record, dict)
    ]


def parse_event_log(record: Dict[str, Any]) -> EventLog:
    topics = record.get("topics")
    if not isinstance(topics, list):
        topics = []

    return EventLog(
        address=_text(record, "address"),
        topics=tuple(str(topic) for topic in topics if topic is not None),
        data=_text(record, "data"),
        block_number=parse_int_hex(record.get("blockNumber")),
        timestamp=parse_int_hex(record.get("timeStamp")),
        gas_price=parse_big_hex(record.get("gasPrice")),
        gas_used=parse_int_hex(record.get("gasUsed")),
        log_index=parse_int_hex(record.get("logIndex")),
        transaction_hash=_text(record, "transactionHash"),
        transaction_index=parse_int_hex(record.get("transactionIndex")),
    )


def parse_event_logs(body: Body) -> List[EventLog]:
    envelope = decode_envelope(body)
    return [
        parse_event_log(record)
        for record in _expect_list(envelope.result)
        if isinstance(record, dict)
    ]


def parse_contract_abi(body: Body) -> str:
    envelope = decode_envelope(body, require_result=True)
    if not isinstance(envelope.result, str):
        raise MalformedResponseError("Unexpected response from Etherscan (ABI is not a string).")
    return envelope.result


def parse_last_price(body: Body) -> PriceQuote:
    envelope = decode_envelope(body)
    if envelope.result is None:
        raise EmptyResultError("result is empty")
    price = _expect_object(envelope.result)

    return PriceQuote(
        eth_btc=parse_decimal(price.get("ethbtc")),
        eth_btc_timestamp=parse_int(price.get("ethbtc_timestamp")),
        eth_usd=parse_decimal(price.get("ethusd")),
        eth_usd_timestamp=parse_int(price.get("ethusd_timestamp")),
    )


def parse_receipt_status(body: Body) -> Optional[bool]:
    """Returns None for pre-Byzantium transactions, which carry no receipt status."""
    envelope = decode_envelope(body)
    status = _text(_expect_object(envelope.result), "status").strip()
    if not status:
        return None
    return parse_bool(status)


def parse_execution_status(body: Body) -> ExecutionStatus:
    envelope = decode_envelope(body)
    result = _expect_object(envelope.result)
    return ExecutionStatus(
        is_error=parse_bool(result.get("isError")),
        description=_text(result, "errDescription"),
    )
