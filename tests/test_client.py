import logging

import pytest

from etherscan_api import EtherscanClient, EventLogFilter, TopicOperation
from etherscan_api.errors import APIError, ValidationError
from etherscan_api.transport import HttpTransport

ADDRESS = "0x5A0b54D5dc17e0AadC383d2db43B0a0D3E029c4c"


def test_default_transport_uses_configured_timeout(config):
    client = EtherscanClient(config)
    assert isinstance(client.transport, HttpTransport)
    assert client.transport.timeout == config.request_timeout


def test_balance_dispatch(make_client):
    client, transport = make_client("balance.json")

    assert client.balance(ADDRESS) == 669816163518885498951364

    (request,) = transport.requests
    assert request.url == "https://api.etherscan.io/api"
    assert request.params == {
        "module": "account",
        "action": "balance",
        "tag": "latest",
        "address": ADDRESS,
        "apikey": "test123",
    }
    assert request.headers["User-Agent"] == "etherscan-api-python"
    assert transport.timeouts == [None]


def test_timeout_is_forwarded(make_client):
    client, transport = make_client("stats_totalsupply.json")
    client.total_supply(timeout=2.5)
    assert transport.timeouts == [2.5]


def test_validation_happens_before_any_request(make_client):
    client, transport = make_client()

    with pytest.raises(ValidationError):
        client.balance("not-an-address")
    with pytest.raises(ValidationError):
        client.transactions(ADDRESS, page=0, offset=10)
    with pytest.raises(ValidationError):
        client.event_logs(EventLogFilter(from_block=0, address=ADDRESS))

    assert transport.requests == []


def test_block_reward(make_client):
    client, transport = make_client("block_reward.json")
    reward = client.block_reward(2165403)
    assert reward.block_reward == 5314181600000000000
    assert len(reward.uncles) == 2
    assert reward.uncles[0].uncle_position == 0
    assert transport.requests[0].params["blockno"] == "2165403"


def test_transaction_listings(make_client):
    client, transport = make_client(
        "transactions.json", "internal_transactions.json", "token_transfers.json"
    )

    assert len(client.transactions(ADDRESS, 1, 3)) == 3
    assert len(client.internal_transactions(ADDRESS)) == 2
    transfers = client.token_transfers(ADDRESS, contract_address="0x9f8f72aa9304c8b593d555f12ef6589cc3a579a2")
    assert transfers[0].token.symbol == "MKR"

    actions = [request.params["action"] for request in transport.requests]
    assert actions == ["txlist", "txlistinternal", "tokentx"]
    assert transport.requests[0].params["sort"] == "desc"
    assert transport.requests[0].params["page"] == "1"
    assert transport.requests[0].params["offset"] == "3"


def test_event_logs(make_client):
    client, transport = make_client("event_logs.json")
    log_filter = EventLogFilter(from_block=379224, address="0x33990122638b9132ca29c723bdf037f1a891a70c")
    log_filter.add_topic_with_operation(
        "0xf63780e752c6a54a94fc52715dbc5518a3b4c3c2833d301a204226548a2a8545", TopicOperation.OR
    )

    logs = client.event_logs(log_filter)

    assert logs[0].block_number == 379224
    params = transport.requests[0].params
    assert params["module"] == "logs"
    assert params["action"] == "getLogs"
    assert params["fromBlock"] == "379224"
    assert params["toBlock"] == "latest"
    assert params["topic0_1_opr"] == "or"


def test_stats_and_contract(make_client):
    client, _ = make_client(
        "abi.json",
        "stats_totalsupply.json",
        "stats_lastprice.json",
        "token_totalsupply.json",
        "token_balance.json",
        "balance_multi.json",
        "receipt_status.json",
        "execution_status.json",
    )

    assert "inputs" in client.contract_abi(ADDRESS)
    assert client.total_supply() == 102935195936600000000000000
    assert str(client.last_price().eth_usd) == "197.48"
    assert client.token_total_supply(ADDRESS) == 21265524714464
    assert client.token_balance(ADDRESS, ADDRESS) == 135499
    assert len(client.balances([ADDRESS, ADDRESS])) == 2
    tx_hash = "0x15f8e5ea1079d9a0bb04a4c58ae5fe7654b5b2b4463375ff7ffb490aa0032f3a"
    assert client.receipt_status(tx_hash) is True
    assert client.execution_status(tx_hash).description == "Bad jump destination"


def test_api_errors_are_logged_and_raised(make_client, caplog):
    client, _ = make_client("api_error.json")
    with caplog.at_level(logging.WARNING, logger="etherscan_api.client"):
        with pytest.raises(APIError) as excinfo:
            client.balance(ADDRESS)
    assert excinfo.value.message == "NOTOK"
    assert "account/balance failed: NOTOK" in caplog.text


def test_api_key_is_not_logged(make_client, caplog):
    client, _ = make_client("balance.json")
    with caplog.at_level(logging.DEBUG, logger="etherscan_api.client"):
        client.balance(ADDRESS)
    assert "module=account action=balance" in caplog.text
    assert "test123" not in caplog.text
