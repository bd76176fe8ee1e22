import ipaddress
import json
import logging
from pathlib import Path
from typing import Optional

import click

from .errors import PortalError
from .logging_config import setup_logging
from .login_type import TAGS, LoginType
from .portal import PortalSession, mask_value
from .transport import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HttpTransport, Transport

DEFAULT_CONFIG_PATH = Path("config") / "settings.json"

EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_CHALLENGE_FAILED = 3
EXIT_LOGIN_FAILED = 4

logger = logging.getLogger("srun_portal")


def load_config(path: Optional[Path]) -> dict:
    """Read the JSON settings file; a missing default file yields ``{}``."""
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return {}
        path = DEFAULT_CONFIG_PATH
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _validate_ip(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value:
        try:
            ipaddress.ip_address(value)
        except ValueError:
            raise click.BadParameter(f"{value!r} is not an IP address") from None
    return value


def _log_level(config: dict, debug: bool, warn: bool) -> str:
    if debug:
        return "DEBUG"
    if warn:
        return "WARNING"
    return str(config.get("log_level", "INFO"))


@click.command()
@click.option("-n", "--username", help="Account name without the domain suffix.")
@click.option("-p", "--password", help="Account password; prompted when omitted.")
@click.option("--ip", "client_ip", callback=_validate_ip, help="Client IP, taken from the gateway when empty.")
@click.option("-s", "--server", callback=_validate_ip, help="Gateway address, chosen by login type when empty.")
@click.option("-t", "--login-type", type=click.Choice(TAGS), help="Login type [default: qsh-edu].")
@click.option("-d", "--debug", is_flag=True, help="Display debug-level log.")
@click.option("-w", "--warn", is_flag=True, help="Only display warn-or-higher-level log.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON settings file [default: config/settings.json if present].",
)
def main(
    username: Optional[str],
    password: Optional[str],
    client_ip: Optional[str],
    server: Optional[str],
    login_type: Optional[str],
    debug: bool,
    warn: bool,
    config_path: Optional[Path],
) -> None:
    """Log in to a srun captive portal."""
    config = load_config(config_path)
    log_dir = config.get("log_dir")
    setup_logging(Path(log_dir) if log_dir else None, _log_level(config, debug, warn))

    login_config = config.get("login", {})
    http_config = config.get("http", {})

    username = username or login_config.get("username") or click.prompt("username")
    password = password or login_config.get("password") or click.prompt(
        "password", hide_input=True
    )

    transport = HttpTransport(
        user_agent=http_config.get("user_agent", DEFAULT_USER_AGENT),
        timeout=int(http_config.get("timeout_seconds", DEFAULT_TIMEOUT)),
    )
    try:
        raise SystemExit(
            run(
                username,
                password,
                login_type or login_config.get("login_type") or LoginType.QSH_EDU.value,
                client_ip or login_config.get("client_ip") or None,
                server or login_config.get("server") or None,
                transport,
            )
        )
    finally:
        transport.close()


def run(
    username: str,
    password: str,
    login_type: str,
    client_ip: Optional[str],
    server: Optional[str],
    transport: Transport,
) -> int:
    try:
        session = PortalSession(
            username,
            password,
            login_type=login_type,
            client_ip=client_ip,
            server=server,
            transport=transport,
        )
    except PortalError as exc:
        logger.error("%s", exc)
        return EXIT_BAD_ARGS

    try:
        challenge = session.get_challenge()
    except PortalError as exc:
        logger.error("Get challenge failed: %s", exc)
        return EXIT_CHALLENGE_FAILED

    try:
        session.login(challenge)
    except PortalError as exc:
        logger.error("Login failed user=%s: %s", mask_value(username), exc)
        return EXIT_LOGIN_FAILED

    logger.info("success")
    return EXIT_OK


if __name__ == "__main__":
    main()
