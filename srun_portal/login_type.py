import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from .errors import IllegalLoginTypeError

logger = logging.getLogger(__name__)

SERVER_QSH = "10.253.0.237"
SERVER_QSH_DORM = "10.253.0.235"

DOMAIN_QSH = "@dx-uestc"
DOMAIN_DX = "@dx"
DOMAIN_CMCC = "@cmcc"

ACID_QSH = "1"
ACID_QSH_DORM = "3"


class LoginType(str, Enum):
    QSH_EDU = "qsh-edu"
    QSH_DX = "qsh-dx"
    QSHD_DX = "qshd-dx"
    QSHD_CMCC = "qshd-cmcc"


@dataclass(frozen=True)
class Route:
    domain: str
    acid: str
    server: str


_ROUTES: Dict[LoginType, Route] = {
    # Work-area education accounts cannot log in from the dorm segment.
    LoginType.QSH_EDU: Route(DOMAIN_QSH, ACID_QSH, SERVER_QSH),
    LoginType.QSH_DX: Route(DOMAIN_DX, ACID_QSH, SERVER_QSH),
    LoginType.QSHD_DX: Route(DOMAIN_DX, ACID_QSH_DORM, SERVER_QSH_DORM),
    LoginType.QSHD_CMCC: Route(DOMAIN_CMCC, ACID_QSH_DORM, SERVER_QSH_DORM),
}

TAGS = tuple(member.value for member in LoginType)


def route(tag: Union[str, LoginType]) -> Route:
    try:
        login_type = LoginType(tag)
    except ValueError:
        raise IllegalLoginTypeError(f"illegal login type: {tag!r}") from None
    result = _ROUTES[login_type]
    logger.debug(
        "Login type %s -> domain=%s ac_id=%s", login_type.value, result.domain, result.acid
    )
    return result


def resolve(tag: Union[str, LoginType]) -> Tuple[str, str]:
    """Return ``(domain, acid)`` for ``tag``."""
    r = route(tag)
    return r.domain, r.acid


def default_server(tag: Union[str, LoginType]) -> str:
    return route(tag).server
