from typing import Optional


class PortalError(Exception):
    """Base class for every failure raised by a login attempt."""


class IllegalIPv4Error(PortalError, ValueError):
    pass


class IllegalLoginTypeError(PortalError, ValueError):
    pass


class UnexpectedResponseError(PortalError):
    """Gateway body is shorter than the smallest well-formed envelope."""


class UnexpectedChallengeResponseError(UnexpectedResponseError):
    pass


class UnexpectedLoginResponseError(UnexpectedResponseError):
    pass


class CannotDetermineClientIPError(PortalError):
    pass


class TransportError(PortalError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(PortalError):
    pass


class ProtocolError(PortalError):
    """The envelope decoded fine but the gateway reported a failure."""

    def __init__(self, message: str, record: Optional[dict] = None) -> None:
        super().__init__(message)
        self.record = record or {}
