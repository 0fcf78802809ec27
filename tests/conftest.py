from pathlib import Path
from typing import List, Optional

import pytest

from etherscan_api import Config, EtherscanClient
from etherscan_api.query import RequestSpec

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class RecordingTransport:
    """Returns canned bodies in order and records every request it is given."""

    def __init__(self, bodies: List[bytes]) -> None:
        self.bodies = list(bodies)
        self.requests: List[RequestSpec] = []
        self.timeouts: List[Optional[float]] = []

    def execute(self, request: RequestSpec, timeout: Optional[float] = None) -> bytes:
        self.requests.append(request)
        self.timeouts.append(timeout)
        return self.bodies.pop(0)


@pytest.fixture
def load_fixture():
    def _load(name: str) -> bytes:
        return (FIXTURES / name).read_bytes()

    return _load


@pytest.fixture
def config() -> Config:
    return Config(api_key="test123")


@pytest.fixture
def make_client(config, load_fixture):
    def _make(*fixtures: str):
        transport = RecordingTransport([load_fixture(name) for name in fixtures])
        return EtherscanClient(config, transport=transport), transport

    return _make
