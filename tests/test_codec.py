import logging

import pytest

from srun_portal import codec

from .helpers import CHALLENGE

DOCUMENT = (
    '{"username":"2000010101001@dx-uestc","password":"12345678",'
    '"ip":"1.2.3.4","acid":"1","enc_ver":"srun_bx1"}'
)
ENCODED = (
    "LMDd8Hmfuq32k+whLiNtcuRwEVxEswfsm4rKEoAoGnFeDlMijgeXC6mtK3nTlrNmjwoEmRyLsWeP"
    "yrFzDd/EI7EfgKh2gF3c9dGmUrlFO9cy6PFqBDShWsGaAuatVgZLhKBOACTShgxGraRJBoA9WS=="
)


def test_document_words():
    assert codec.to_words(DOCUMENT.encode(), include_length=True) == [
        1937056379, 1634628197, 975332717, 808464930, 808529968, 808529969,
        1681928496, 1702178168, 576943219, 1634738732, 1870099315, 975332466,
        858927394, 926299444, 573317688, 975335529, 841888034, 875442990,
        1629629474, 577005923, 573645370, 1852121644, 1702256483, 574235250,
        1853190771, 829973087, 32034, 106,
    ]


def test_challenge_words():
    assert codec.to_words(CHALLENGE.encode()) == [
        842085219, 959525985, 859071540, 959852593, 825713205, 1630681444,
        929248099, 959524916, 875651384, 845231969, 842018872, 959997490,
        1698181172, 878929252, 842217829, 895824228,
    ]


def test_short_input_is_zero_padded():
    assert codec.to_words(b"\x01\x02\x03", include_length=True) == [0x030201, 3]


def test_words_round_trip():
    data = DOCUMENT.encode()[:104]
    assert codec.from_words(codec.to_words(data)) == data


def test_portal_base64():
    assert codec.portal_b64encode(b"123456") == "9F2z0JHI"


def test_portal_alphabet_is_a_permutation():
    assert sorted(codec.PORTAL_BASE64_ALPHABET) == sorted(codec.STANDARD_BASE64_ALPHABET)


def test_mixing_constants():
    assert codec.DELTA == 0x9E3779B9
    assert codec.DELTA_MASK == codec.WORD_MIX_MASK == codec.LAST_MIX_MASK == 0xFFFFFFFF


def test_encode_known_vector():
    assert codec.encode(DOCUMENT, CHALLENGE) == ENCODED


def test_encode_accepts_bytes():
    assert codec.encode(DOCUMENT.encode(), CHALLENGE.encode()) == ENCODED


def test_encode_is_deterministic():
    assert codec.encode("hello", "abcd") == codec.encode("hello", "abcd")


def test_encode_short_key_is_padded():
    result = codec.encode("hello", "abcd")
    # 2 data words + length word = 12 bytes -> 16 base64 characters
    assert len(result) == 16


@pytest.mark.parametrize(
    "plaintext, challenge",
    [("", CHALLENGE), (DOCUMENT, ""), (DOCUMENT, CHALLENGE[:-1]), (DOCUMENT, "abcdefg")],
)
def test_encode_degenerate_inputs(plaintext, challenge, caplog):
    with caplog.at_level(logging.WARNING, logger="srun_portal.codec"):
        assert codec.encode(plaintext, challenge) == ""
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert caplog.records[0].name == "srun_portal.codec"


def test_encode_second_known_vector():
    document = (
        '{"username":"2001010101001@dx-uestc","password":"1234567890",'
        '"ip":"113.54.148.243","acid":"1","enc_ver":"srun_bx1"}'
    )
    assert codec.encode(
        document, "d26466d4036507dadb17e87e23358126e0210cb289d19151f59bcfcefdcf345e"
    ) == (
        "CfVnZ9mvKmdgvm/ivovlPibZL6RLAWcx+nBTaYmWH3kmThco+eO4LVsCPFceSmM9PyI0UcMgLE7b"
        "mpfY9pr0EWnWdTncXrbW29Aydp+lw6QjxKMgNzgYd7uopiPbIyKpxvJZDHsGw5xh8rMEeq3JXrD2vex27xeI"
    )
