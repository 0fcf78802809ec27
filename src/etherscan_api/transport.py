from typing import Optional, Protocol

import requests

from .errors import TransportError
from .query import RequestSpec


class Transport(Protocol):
    """Executes one RequestSpec and returns the raw response body."""

    def execute(self, request: RequestSpec, timeout: Optional[float] = None) -> bytes:
        ...


class HttpTransport:
    """Single-shot GET over a requests.Session. Retry policy belongs to the caller."""

    def __init__(
        self,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def execute(self, request: RequestSpec, timeout: Optional[float] = None) -> bytes:
        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params,
                headers=request.headers,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except requests.RequestException as exc:
            detail = str(exc)
            api_key = request.params.get("apikey")
            if api_key:
                # requests echoes the full query string, key included
                detail = detail.replace(api_key, "***")
            raise TransportError(f"Request to {request.url} failed: {detail}") from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Etherscan returned HTTP {response.status_code}.",
                status_code=response.status_code,
            )
        return response.content

    def close(self) -> None:
        self.session.close()
