import json
from decimal import Decimal

import pytest

from etherscan_api import EtherscanClient, cli
from etherscan_api.models import PriceQuote, Uncle
from etherscan_api.serialize import to_jsonable

from .conftest import RecordingTransport


@pytest.fixture
def run_cli(monkeypatch, load_fixture, capsys):
    monkeypatch.setenv("ETHERSCAN_API_KEY", "test123")
    monkeypatch.delenv("NETWORK", raising=False)
    monkeypatch.delenv("ETHERSCAN_BASE_URL", raising=False)

    def _run(argv, *fixtures):
        transport = RecordingTransport([load_fixture(name) for name in fixtures])
        clients = []

        def factory(config):
            client = EtherscanClient(config, transport=transport)
            clients.append(client)
            return client

        monkeypatch.setattr(cli, "EtherscanClient", factory)
        cli.main(argv)
        out = capsys.readouterr().out
        return json.loads(out), transport, clients

    return _run


def test_balance_command(run_cli):
    output, transport, _ = run_cli(
        ["balance", "--address", "0x5A0b54D5dc17e0AadC383d2db43B0a0D3E029c4c"], "balance.json"
    )
    assert output == "669816163518885498951364"
    assert transport.requests[0].params["action"] == "balance"


def test_logs_command_encodes_topics(run_cli):
    output, transport, _ = run_cli(
        [
            "logs",
            "--from-block",
            "379224",
            "--topic",
            "0xaa:or",
            "--topic",
            "0xbb",
        ],
        "event_logs.json",
    )
    assert output[0]["block_number"] == 379224
    assert output[0]["gas_price"] == 50000000000
    params = transport.requests[0].params
    assert params["topic0"] == "0xaa"
    assert params["topic0_1_opr"] == "or"
    assert params["topic1"] == "0xbb"
    assert params["topic1_2_opr"] == "and"


def test_network_override(run_cli):
    _, transport, clients = run_cli(["--network", "rinkeby", "supply"], "stats_totalsupply.json")
    assert clients[0].config.network == "rinkeby"
    assert transport.requests[0].url == "https://api-rinkeby.etherscan.io/api"


def test_network_override_keeps_custom_base_url(run_cli, monkeypatch):
    monkeypatch.setenv("ETHERSCAN_BASE_URL", "http://localhost:8080/api/")
    _, transport, clients = run_cli(["--network", "rinkeby", "supply"], "stats_totalsupply.json")
    assert clients[0].config.network == "rinkeby"
    assert transport.requests[0].url == "http://localhost:8080/api"


def test_abi_command_decodes_text(run_cli):
    output, _, _ = run_cli(["abi", "--address", "0x1"], "abi.json")
    assert output[0]["name"] == "proposals"


def test_errors_exit_non_zero(monkeypatch, capsys):
    monkeypatch.setenv("ETHERSCAN_API_KEY", "test123")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["balance", "--address", "missing-prefix"])
    assert excinfo.value.code == 1
    assert "must begin with 0x" in capsys.readouterr().err


def test_to_jsonable():
    rendered = to_jsonable(
        {
            "uncle": Uncle(miner="0xabc", uncle_position=0, block_reward=3750000000000000000),
            "price": PriceQuote(Decimal("0.03118"), 1541092070, Decimal("197.48"), 1541092064),
        }
    )
    assert rendered == {
        "uncle": {"miner": "0xabc", "uncle_position": 0, "block_reward": "3750000000000000000"},
        "price": {
            "eth_btc": "0.03118",
            "eth_btc_timestamp": 1541092070,
            "eth_usd": "197.48",
            "eth_usd_timestamp": 1541092064,
        },
    }
