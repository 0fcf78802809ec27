import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from .errors import APIError, EmptyResultError, MalformedResponseError

SUCCESS_STATUS = "1"

Body = Union[bytes, bytearray, str, Dict[str, Any], None]


class Status(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Envelope:
    status: Status
    message: str
    result: Any

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


def _load(body: Body) -> Dict[str, Any]:
    if body is None:
        raise MalformedResponseError("Response body is empty.")

    if isinstance(body, dict):
        return body

    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponseError("Response body is not valid UTF-8.") from exc

    if not isinstance(body, str) or not body.strip():
        raise MalformedResponseError("Response body is empty.")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError("Failed to parse response from Etherscan.") from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError("Unexpected response from Etherscan (non-object).")
    return payload


def _is_empty(result: Any) -> bool:
    if result is None:
        return True
    if isinstance(result, (str, list, dict)) and not result:
        return True
    return False


def read_envelope(body: Body) -> Envelope:
    """Decode the outer object without judging its status."""
    payload = _load(body)

    status = str(payload.get("status", "")).strip()
    message = payload.get("message")
    return Envelope(
        status=Status.SUCCESS if status == SUCCESS_STATUS else Status.FAILURE,
        message="" if message is None else str(message),
        result=payload.get("result"),
    )


def decode_envelope(body: Body, require_result: bool = False) -> Envelope:
    """
    Unwrap the `{status, message, result}` object every endpoint returns.

    A status other than "1" raises APIError with the upstream message. When
    `require_result` is set, a null or empty result raises EmptyResultError.
    The result itself is returned untouched for the calling parser.
    """
    envelope = read_envelope(body)

    if not envelope.ok:
        raise APIError(envelope.message, envelope.result)

    if require_result and _is_empty(envelope.result):
        raise EmptyResultError()

    return envelope
