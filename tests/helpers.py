import json
from typing import List

from srun_portal import envelope

CHALLENGE = "c312a4194d4310695b71d92ac3c740198a14a7a280022f89408edec4e932d1e5"


def wrap(record: dict) -> bytes:
    return f"{envelope.CALLBACK}(".encode() + json.dumps(record).encode() + b")"


class StubTransport:
    """Replays canned bodies and records every requested URL."""

    def __init__(self, *bodies: bytes) -> None:
        self.bodies = list(bodies)
        self.urls: List[str] = []
        self.closed = False

    def get(self, url: str) -> bytes:
        self.urls.append(url)
        return self.bodies.pop(0)

    def close(self) -> None:
        self.closed = True
