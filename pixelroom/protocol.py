"""
Wire protocol for the room WebSocket
Every frame is a JSON object: {"type": <kind>, "data": <payload>}
"""
import json
from typing import List, Tuple

# Server -> client
MSG_LOAD = "LOAD"
MSG_JOIN = "JOIN"
MSG_LEAVE = "LEAVE"

# Both directions
MSG_SIGNAL = "SIGNAL"
MSG_UPDATE = "UPDATE"


def encode(event: dict) -> str:
    return json.dumps(event, separators=(",", ":"))


def load_event(displays: List[str], peers: List[str]) -> dict:
    return {"type": MSG_LOAD, "data": {"displays": displays, "peers": peers}}


def join_event(participant_id: str) -> dict:
    return {"type": MSG_JOIN, "data": participant_id}


def leave_event(participant_id: str) -> dict:
    return {"type": MSG_LEAVE, "data": participant_id}


def signal_event(peer: str, signal: str) -> dict:
    return {"type": MSG_SIGNAL, "data": {"peer": peer, "signal": signal}}


def update_event(update: Tuple[int, int, int, int]) -> dict:
    display, x, y, value = update
    return {
        "type": MSG_UPDATE,
        "data": {
            "display": display,
            "pixel": {"x": x, "y": y},
            "value": value,
        },
    }
