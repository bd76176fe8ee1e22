"""Unwrapping of the JSONP wrapper around every gateway response.

Requests always carry the same callback name, so the wrapper is a fixed
``srunportal(`` prefix and ``)`` suffix and is stripped by offset instead of
being parsed.
"""
import json
import logging
from typing import Type

from .errors import DecodeError, ProtocolError, UnexpectedResponseError

logger = logging.getLogger(__name__)

CALLBACK = "srunportal"
PREFIX_LEN = 11  # "srunportal("
SUFFIX_LEN = 1  # ")"
MIN_BODY_LEN = PREFIX_LEN + SUFFIX_LEN

SUCCESS = "ok"
FALLBACK_MESSAGE = "unknown gateway error"
MESSAGE_FIELDS = ("ploy_msg", "error_msg", "error")


def unwrap(body: bytes, too_short: Type[UnexpectedResponseError]) -> dict:
    if len(body) < MIN_BODY_LEN:
        raise too_short(f"response too short: {len(body)} bytes")
    payload = body[PREFIX_LEN:len(body) - SUFFIX_LEN]
    try:
        record = json.loads(payload)
    except ValueError as exc:
        raise DecodeError(f"invalid response payload: {exc}") from exc
    if not isinstance(record, dict):
        raise DecodeError(f"response payload is {type(record).__name__}, not an object")
    return record


def error_message(record: dict) -> str:
    for field in MESSAGE_FIELDS:
        value = record.get(field)
        if value:
            return str(value)
    return FALLBACK_MESSAGE


def check(record: dict) -> dict:
    """Return ``record`` when it reports success, else raise ProtocolError."""
    if record.get("error") != SUCCESS:
        raise ProtocolError(error_message(record), record)
    return record
