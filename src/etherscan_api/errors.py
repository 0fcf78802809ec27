from typing import Any, Optional


class EtherscanError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        return "Etherscan request failed."


class ValidationError(EtherscanError, ValueError):
    """Malformed or missing input; raised before any request is built."""

    def get_default_message(self) -> str:
        return "Invalid request parameters."


class TransportError(EtherscanError):
    """Network or HTTP level failure reported by the transport."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    def get_default_message(self) -> str:
        return "HTTP request to Etherscan failed."


class MalformedResponseError(EtherscanError):
    """Response body is empty, not JSON, or not an envelope object."""

    def get_default_message(self) -> str:
        return "Unexpected response from Etherscan."


class APIError(EtherscanError):
    """Envelope status signals failure; `message` is the upstream text verbatim."""

    def __init__(self, message: str, result: Any = None) -> None:
        self.result = result
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"API Error: {self.message}"


class EmptyResultError(EtherscanError):
    """Success status but the payload the operation needs is absent."""

    def get_default_message(self) -> str:
        return "Etherscan returned an empty result."


class FieldParseError(EtherscanError):
    """A critical numeric field could not be parsed."""

    def __init__(self, field: str, raw: Any) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"Could not parse {field}: {raw!r}")
