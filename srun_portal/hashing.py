import hashlib
import hmac

CIPHER_TAG = "{SRBX1}"
PASSWORD_TAG = "{MD5}"
# Echoed into the checksum exactly as sent in the login query.
CONSTANT_N = "200"
CONSTANT_TYPE = "1"


def hash_password(password: str, challenge: str) -> str:
    """HMAC-MD5 of the password keyed by the challenge, hex encoded."""
    return hmac.new(
        challenge.encode("utf-8"), password.encode("utf-8"), hashlib.md5
    ).hexdigest()


def checksum(
    challenge: str,
    username: str,
    domain: str,
    hmd5: str,
    acid: str,
    client_ip: str,
    encoded_info: str,
) -> str:
    """SHA-1 over every login field, each preceded by the challenge.

    ``encoded_info`` is the bare codec output; the cipher tag is inserted
    here.
    """
    h = hashlib.sha1()
    for part in (
        challenge,
        username,
        domain,
        challenge,
        hmd5,
        challenge,
        acid,
        challenge,
        client_ip,
        challenge,
        CONSTANT_N,
        challenge,
        CONSTANT_TYPE,
        challenge,
        CIPHER_TAG,
        encoded_info,
    ):
        h.update(part.encode("utf-8"))
    return h.hexdigest()
