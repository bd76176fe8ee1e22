"""Obfuscation of the identity document sent as the ``info`` parameter.

The gateway expects an XXTEA-style block mix of the document keyed by the
challenge token, rendered with a shuffled base64 alphabet. Only the encode
direction exists here; the gateway performs the inverse.
"""
import base64
import logging
import struct
from typing import List, Union

logger = logging.getLogger(__name__)

PORTAL_BASE64_ALPHABET = "LVoJPiCN2R8G90yg+hmFHuacZ1OWMnrsSTXkYpUq/3dlbfKwv6xztjI7DeBE45QA"
STANDARD_BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_TO_PORTAL = str.maketrans(STANDARD_BASE64_ALPHABET, PORTAL_BASE64_ALPHABET)

# Protocol-fixed literals. Both halves of each OR are kept as the gateway's
# script writes them; only the combined value matters.
DELTA = 0x86014019 | 0x183639A0
DELTA_MASK = 0x8CE0D9BF | 0x731F2640
WORD_MIX_MASK = 0xEFB8D130 | 0x10472ECF
LAST_MIX_MASK = 0xBB390742 | 0x44C6F8BD

WORD_MASK = 0xFFFFFFFF
MIN_KEY_BYTES = 16

Text = Union[str, bytes]


def _as_bytes(value: Text) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def to_words(data: bytes, include_length: bool = False) -> List[int]:
    """Split ``data`` into little-endian 32-bit words, zero-padding the tail.

    With ``include_length`` the unpadded byte length is appended as one more
    word.
    """
    padded = data + b"\0" * (-len(data) % 4)
    words = list(struct.unpack("<%dI" % (len(padded) // 4), padded))
    if include_length:
        words.append(len(data))
    return words


def from_words(words: List[int]) -> bytes:
    return struct.pack("<%dI" % len(words), *words)


def xencode(data: bytes, key: bytes) -> bytes:
    v = to_words(data, include_length=True)
    k = to_words(key.ljust(MIN_KEY_BYTES, b"\0"))
    n = len(v) - 1
    z = v[n]
    d = 0
    for _ in range(6 + 52 // (n + 1)):
        d = (d + (DELTA & DELTA_MASK)) & WORD_MASK
        e = (d >> 2) & 3
        for p in range(n):
            y = v[p + 1]
            m = (z >> 5) ^ ((y << 2) & WORD_MASK)
            m += ((y >> 3) ^ ((z << 4) & WORD_MASK)) ^ (d ^ y)
            m += k[(p & 3) ^ e] ^ z
            v[p] = (v[p] + (m & WORD_MIX_MASK)) & WORD_MASK
            z = v[p]
        y = v[0]
        m = (z >> 5) ^ ((y << 2) & WORD_MASK)
        m += ((y >> 3) ^ ((z << 4) & WORD_MASK)) ^ (d ^ y)
        m += k[(n & 3) ^ e] ^ z
        v[n] = (v[n] + (m & LAST_MIX_MASK)) & WORD_MASK
        z = v[n]
    return from_words(v)


def portal_b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").translate(_TO_PORTAL)


def encode(plaintext: Text, challenge: Text) -> str:
    """Encode ``plaintext`` keyed by ``challenge``.

    Returns an empty string when either input is empty or the challenge
    length is not a multiple of 4. The gateway never issues such a
    challenge, so hitting this case means the caller passed bad input.
    """
    data = _as_bytes(plaintext)
    key = _as_bytes(challenge)
    if not data or not key or len(key) % 4 != 0:
        logger.warning(
            "Refusing to encode: plaintext_len=%d challenge_len=%d",
            len(data),
            len(key),
        )
        return ""
    return portal_b64encode(xencode(data, key))
