import pytest

from .helpers import CHALLENGE, wrap


@pytest.fixture
def challenge_body():
    return wrap({"challenge": CHALLENGE, "client_ip": "1.2.3.4", "error": "ok", "res": "ok"})


@pytest.fixture
def login_body():
    return wrap(
        {"client_ip": "1.2.3.4", "error": "ok", "res": "ok", "suc_msg": "login_ok", "ecode": 0}
    )
