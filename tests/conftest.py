import json

import pytest

from pixelroom.displays import DisplayStore
from pixelroom.registry import PROBE
from pixelroom.state import Room


class FakeSocket:
    """Stands in for a server-side WebSocketResponse"""

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []
        self.pings = 0
        self.closed = False
        self.close_code = None

    async def send_str(self, data):
        if self.fail or self.closed:
            raise ConnectionResetError("Cannot write to closing transport")
        self.sent.append(data)

    async def ping(self, message=b""):
        self.pings += 1

    async def close(self, *, code=1000, message=b""):
        self.closed = True
        self.close_code = code
        return True


def drain(participant):
    """Pop every queued JSON event off a participant's outbox"""
    events = []
    while not participant.outbox.empty():
        item = participant.outbox.get_nowait()
        if item is None or item is PROBE:
            continue
        events.append(json.loads(item))
    return events


def blank_store(count=1, width=4, height=4, max_value=1):
    displays = DisplayStore(count, width, height, max_value=max_value)
    displays.restore(bytes(count * width * height))
    return displays


@pytest.fixture
def displays():
    return blank_store()


@pytest.fixture
async def room(displays):
    room = Room(displays, heartbeat_interval=60)
    yield room
    room.monitor.stop()
