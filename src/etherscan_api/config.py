import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ValidationError

DEFAULT_NETWORK = "mainnet"
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "etherscan-api-python"

API_ENDPOINTS = {
    "mainnet": "https://api.etherscan.io/api",
    "ropsten": "https://api-ropsten.etherscan.io/api",
    "kovan": "https://api-kovan.etherscan.io/api",
    "rinkeby": "https://api-rinkeby.etherscan.io/api",
    "goerli": "https://api-goerli.etherscan.io/api",
    "sepolia": "https://api-sepolia.etherscan.io/api",
    "holesky": "https://api-holesky.etherscan.io/api",
}


def supported_networks() -> list[str]:
    return sorted(API_ENDPOINTS.keys())


def resolve_base_url(network: Optional[str]) -> str:
    """Resolve the API endpoint for a network name."""
    normalized = (network or DEFAULT_NETWORK).strip().lower()
    if normalized in API_ENDPOINTS:
        return API_ENDPOINTS[normalized]

    raise ValidationError(
        f"Invalid network: {network}. Network must be one of {', '.join(supported_networks())}."
    )


@dataclass(frozen=True)
class Config:
    """
    Client configuration, built once and handed to EtherscanClient.

    `base_url` defaults to the endpoint of `network`; pass it explicitly to
    target a proxy or a compatible explorer.
    """

    api_key: str = ""
    network: str = DEFAULT_NETWORK
    base_url: str = field(default="")
    request_timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        network = (self.network or DEFAULT_NETWORK).strip().lower()
        object.__setattr__(self, "network", network)
        if self.base_url:
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        else:
            object.__setattr__(self, "base_url", resolve_base_url(network))
        if self.request_timeout <= 0:
            raise ValidationError("request_timeout must be positive.")


def load_config(network: Optional[str] = None) -> Config:
    """
    Load configuration from environment variables.

    `network` overrides NETWORK; an ETHERSCAN_BASE_URL endpoint is kept either way.
    """
    api_key = os.getenv("ETHERSCAN_API_KEY")
    if not api_key:
        raise ValidationError("ETHERSCAN_API_KEY is required but not set.")

    network = (network or os.getenv("NETWORK", DEFAULT_NETWORK)).strip().lower()
    base_url = os.getenv("ETHERSCAN_BASE_URL", "").strip()
    timeout_raw = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout_raw)
    except ValueError as exc:
        raise ValidationError(f"REQUEST_TIMEOUT must be a number, got '{timeout_raw}'.") from exc

    return Config(
        api_key=api_key,
        network=network,
        base_url=base_url,
        request_timeout=timeout,
        user_agent=os.getenv("ETHERSCAN_USER_AGENT", DEFAULT_USER_AGENT),
    )
