from .codec import encode
from .errors import (
    CannotDetermineClientIPError,
    DecodeError,
    IllegalIPv4Error,
    IllegalLoginTypeError,
    PortalError,
    ProtocolError,
    TransportError,
    UnexpectedChallengeResponseError,
    UnexpectedLoginResponseError,
    UnexpectedResponseError,
)
from .hashing import checksum, hash_password
from .login_type import LoginType, default_server, resolve
from .portal import PortalSession
from .transport import HttpTransport

__version__ = "0.3.0"

__all__ = [
    "CannotDetermineClientIPError",
    "DecodeError",
    "HttpTransport",
    "IllegalIPv4Error",
    "IllegalLoginTypeError",
    "LoginType",
    "PortalError",
    "PortalSession",
    "ProtocolError",
    "TransportError",
    "UnexpectedChallengeResponseError",
    "UnexpectedLoginResponseError",
    "UnexpectedResponseError",
    "checksum",
    "default_server",
    "encode",
    "hash_password",
    "resolve",
]
