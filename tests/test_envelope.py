import pytest

from srun_portal import envelope
from srun_portal.errors import (
    DecodeError,
    ProtocolError,
    UnexpectedChallengeResponseError,
    UnexpectedLoginResponseError,
)

from .helpers import wrap


def test_prefix_matches_callback():
    assert envelope.PREFIX_LEN == len(envelope.CALLBACK) + 1


def test_unwrap():
    record = envelope.unwrap(wrap({"error": "ok", "challenge": "abcd"}), UnexpectedLoginResponseError)
    assert record == {"error": "ok", "challenge": "abcd"}


@pytest.mark.parametrize("body", [b"", b"srunportal(", b"x" * 11])
def test_unwrap_too_short(body):
    with pytest.raises(UnexpectedChallengeResponseError):
        envelope.unwrap(body, UnexpectedChallengeResponseError)


def test_unwrap_minimum_length_reaches_decoder():
    with pytest.raises(DecodeError):
        envelope.unwrap(b"srunportal()", UnexpectedLoginResponseError)


def test_unwrap_not_an_object():
    with pytest.raises(DecodeError):
        envelope.unwrap(b"srunportal([1, 2])", UnexpectedLoginResponseError)


def test_check_ok():
    record = {"error": "ok"}
    assert envelope.check(record) is record


@pytest.mark.parametrize(
    "record, message",
    [
        ({"error": "login_error", "error_msg": "E2531", "ploy_msg": "blocked"}, "blocked"),
        ({"error": "login_error", "error_msg": "E2531: User not found."}, "E2531: User not found."),
        ({"error": "login_error", "error_msg": ""}, "login_error"),
        ({}, envelope.FALLBACK_MESSAGE),
    ],
)
def test_check_failure_message(record, message):
    with pytest.raises(ProtocolError) as exc_info:
        envelope.check(record)
    assert str(exc_info.value) == message
    assert exc_info.value.record == record
