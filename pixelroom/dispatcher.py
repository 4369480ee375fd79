"""
Inbound event dispatcher

Parses client frames, coerces and bounds-checks their fields, then routes
them to a display mutation or the signaling relay. Anything malformed,
out of range or of unknown kind is dropped without a reply.
"""
import json
import logging
import math
import re
from typing import Optional

from .broadcast import Router
from .displays import DisplayStore
from .protocol import MSG_SIGNAL, MSG_UPDATE, update_event
from .registry import Participant
from .signaling import SignalingRelay

logger = logging.getLogger("pixelroom")

# Longer digit runs are out of range for every field
_LEADING_INT = re.compile(r"\s*([+-]?\d{1,16})")


def to_int(value) -> Optional[int]:
    """Lenient integer parsing; None means not-a-number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def to_text(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


class Dispatcher:
    def __init__(self, displays: DisplayStore, router: Router, relay: SignalingRelay):
        self.displays = displays
        self.router = router
        self.relay = relay
        self.handlers = {
            MSG_SIGNAL: self.on_signal,
            MSG_UPDATE: self.on_update,
        }

    def on_message(self, participant: Participant, raw):
        try:
            request = json.loads(raw)
        except ValueError:
            logger.debug(f"Dropping unparseable frame from {participant.id}")
            return
        if not isinstance(request, dict):
            return
        handler = self.handlers.get(request.get("type"))
        data = request.get("data")
        if handler is None or not isinstance(data, dict):
            return
        handler(participant, data)

    def on_signal(self, participant: Participant, data: dict) -> bool:
        peer = to_text(data.get("peer"))
        signal = to_text(data.get("signal"))
        if not peer or not signal:
            return False
        return self.relay.relay(participant.id, peer, signal)

    def on_update(self, participant: Participant, data: dict) -> bool:
        pixel = data.get("pixel")
        if not isinstance(pixel, dict):
            pixel = {}
        value = data.get("value", data.get("color"))
        fields = (
            to_int(data.get("display")),
            to_int(pixel.get("x")),
            to_int(pixel.get("y")),
            to_int(value),
        )
        if None in fields:
            return False
        accepted = self.displays.apply_update(*fields)
        if accepted is None:
            logger.debug(f"Dropping out-of-range update from {participant.id}: {fields}")
            return False
        self.router.send(update_event(accepted), exclude=participant.id)
        return True
