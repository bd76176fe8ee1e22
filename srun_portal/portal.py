import ipaddress
import json
import logging
import time
from typing import Callable, Optional, Union
from urllib.parse import urlencode

from . import codec, envelope, hashing
from .errors import (
    CannotDetermineClientIPError,
    DecodeError,
    UnexpectedChallengeResponseError,
    UnexpectedLoginResponseError,
)
from .login_type import LoginType, route as resolve_route
from .netutil import parse_ipv4, resolve_local_ip, try_parse_ipv4
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

CHALLENGE_PATH = "/cgi-bin/get_challenge"
LOGIN_PATH = "/cgi-bin/srun_portal"

ENC_VER = "srun_bx1"
CLIENT_OS = "Windows 10"
CLIENT_PLATFORM = "Windows"
DOUBLE_STACK = "0"

IPv4Like = Union[str, bytes, ipaddress.IPv4Address]
LocalIPResolver = Callable[[str], Optional[ipaddress.IPv4Address]]


def mask_value(value: str, keep: int = 2) -> str:
    if not value:
        return ""
    if len(value) <= keep * 2:
        return "*" * len(value)
    return f"{value[:keep]}***{value[-keep:]}"


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def host(server: str) -> str:
    """URL host part for ``server``; IPv6 literals are bracketed."""
    try:
        address = ipaddress.ip_address(server)
    except ValueError:
        return server
    if address.version == 6:
        return f"[{address}]"
    return server


def challenge_url(
    server: str,
    username: str,
    domain: str,
    client_ip: Optional[ipaddress.IPv4Address],
    timestamp: int,
) -> str:
    query = urlencode(
        [
            ("callback", envelope.CALLBACK),
            ("username", username + domain),
            ("ip", str(client_ip) if client_ip is not None else ""),
            ("_", timestamp),
        ]
    )
    return f"http://{host(server)}{CHALLENGE_PATH}?{query}"


def login_url(
    server: str,
    username: str,
    domain: str,
    hmd5: str,
    acid: str,
    client_ip: ipaddress.IPv4Address,
    chksum: str,
    info: str,
    timestamp: int,
) -> str:
    query = urlencode(
        [
            ("callback", envelope.CALLBACK),
            ("action", "login"),
            ("username", username + domain),
            ("password", hashing.PASSWORD_TAG + hmd5),
            ("ac_id", acid),
            ("ip", str(client_ip)),
            ("chksum", chksum),
            ("info", hashing.CIPHER_TAG + info),
            ("n", hashing.CONSTANT_N),
            ("type", hashing.CONSTANT_TYPE),
            ("os", CLIENT_OS),
            ("name", CLIENT_PLATFORM),
            ("double_stack", DOUBLE_STACK),
            ("_", timestamp),
        ]
    )
    return f"http://{host(server)}{LOGIN_PATH}?{query}"


def user_info(
    username: str, domain: str, password: str, client_ip: ipaddress.IPv4Address, acid: str
) -> str:
    """Compact JSON identity document fed to the codec."""
    return json.dumps(
        {
            "username": username + domain,
            "password": password,
            "ip": str(client_ip),
            "acid": acid,
            "enc_ver": ENC_VER,
        },
        separators=(",", ":"),
        ensure_ascii=False,
    )


class PortalSession:
    """One login attempt against a srun gateway.

    Construct a fresh session for every attempt: challenges are single use.
    """

    def __init__(
        self,
        username: str,
        password: str,
        login_type: Union[str, LoginType] = LoginType.QSH_EDU,
        client_ip: Optional[IPv4Like] = None,
        server: Optional[str] = None,
        transport: Optional[Transport] = None,
        local_ip_resolver: LocalIPResolver = resolve_local_ip,
    ) -> None:
        route = resolve_route(login_type)
        self.username = username
        self._password = password
        self.domain = route.domain
        self.acid = route.acid
        self.server = server or route.server
        self.client_ip: Optional[ipaddress.IPv4Address] = (
            parse_ipv4(client_ip) if client_ip is not None else None
        )
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpTransport()
        self._local_ip_resolver = local_ip_resolver
        logger.debug(
            "Portal session user=%s server=%s domain=%s ac_id=%s ip=%s",
            mask_value(username),
            self.server,
            self.domain,
            self.acid,
            self.client_ip or "<late-bound>",
        )

    def get_challenge(self) -> str:
        url = challenge_url(
            self.server, self.username, self.domain, self.client_ip, timestamp_ms()
        )
        logger.debug("GET %s%s", self.server, CHALLENGE_PATH)
        body = self.transport.get(url)
        record = envelope.check(envelope.unwrap(body, UnexpectedChallengeResponseError))
        challenge = record.get("challenge")
        if not challenge or not isinstance(challenge, str):
            raise DecodeError("challenge response carries no challenge token")
        if self.client_ip is None:
            self.client_ip = self._bind_client_ip(record)
        logger.debug("Got challenge of %d characters", len(challenge))
        return challenge

    def _bind_client_ip(self, record: dict) -> ipaddress.IPv4Address:
        echoed = try_parse_ipv4(record.get("client_ip"))
        if echoed is not None:
            logger.info("Using client IP reported by gateway: %s", echoed)
            return echoed
        local = self._local_ip_resolver(self.server)
        if local is not None:
            logger.info("Using local client IP: %s", local)
            return local
        raise CannotDetermineClientIPError("cannot determine client ip")

    def login(self, challenge: str) -> dict:
        if self.client_ip is None:
            raise CannotDetermineClientIPError("client ip unknown; fetch a challenge first")
        info = codec.encode(
            user_info(self.username, self.domain, self._password, self.client_ip, self.acid),
            challenge,
        )
        hmd5 = hashing.hash_password(self._password, challenge)
        chksum = hashing.checksum(
            challenge,
            self.username,
            self.domain,
            hmd5,
            self.acid,
            str(self.client_ip),
            info,
        )
        url = login_url(
            self.server,
            self.username,
            self.domain,
            hmd5,
            self.acid,
            self.client_ip,
            chksum,
            info,
            timestamp_ms(),
        )
        logger.debug("GET %s%s", self.server, LOGIN_PATH)
        body = self.transport.get(url)
        record = envelope.unwrap(body, UnexpectedLoginResponseError)
        echoed = record.get("client_ip") or record.get("online_ip")
        if echoed and echoed != str(self.client_ip):
            logger.warning("Gateway sees client IP %s, sent %s", echoed, self.client_ip)
        envelope.check(record)
        if record.get("suc_msg"):
            logger.info("Gateway: %s", record["suc_msg"])
        return record

    def authenticate(self) -> dict:
        return self.login(self.get_challenge())

    def close(self) -> None:
        """Release the transport when this session created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "PortalSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
