"""
Signaling relay: forward opaque WebRTC negotiation payloads between two peers
"""
import logging

from .broadcast import Router
from .protocol import signal_event
from .registry import Registry

logger = logging.getLogger("pixelroom")


class SignalingRelay:
    def __init__(self, registry: Registry, router: Router):
        self.registry = registry
        self.router = router

    def relay(self, from_id: str, to_id: str, payload: str) -> bool:
        """Deliver a payload to to_id only; unknown targets are dropped"""
        if not from_id or not to_id or not payload:
            return False
        if to_id not in self.registry:
            logger.debug(f"Dropping signal from {from_id}: unknown peer {to_id}")
            return False
        self.router.send(signal_event(from_id, payload), include=to_id)
        return True
