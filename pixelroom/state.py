"""
Room aggregate: the single owner of display state and the participant registry

All methods run on the event loop and never await, so validate, mutate and
broadcast happen as one step per event.
"""
import asyncio
import logging
from typing import Optional

from .broadcast import Router
from .dispatcher import Dispatcher
from .displays import DisplayStore
from .liveness import LivenessMonitor
from .protocol import encode, join_event, leave_event, load_event
from .registry import Participant, Registry
from .signaling import SignalingRelay

logger = logging.getLogger("pixelroom")


class Room:
    def __init__(self, displays: DisplayStore, heartbeat_interval: float = 60.0):
        self.displays = displays
        self.registry = Registry()
        self.router = Router(self.registry)
        self.relay = SignalingRelay(self.registry, self.router)
        self.dispatcher = Dispatcher(self.displays, self.router, self.relay)
        self.monitor = LivenessMonitor(self.registry, self.evict, heartbeat_interval)

    def connect(self, connection) -> Participant:
        """Register a connection, send it the snapshot, then announce it"""
        participant = self.registry.register(connection)
        peers = [pid for pid in self.registry.list_ids() if pid != participant.id]
        participant.send(encode(load_event(self.displays.snapshot(), peers)))
        self.router.send(join_event(participant.id), exclude=participant.id)
        self.monitor.start()
        logger.info(
            "✅ Participant %s joined (total: %d)", participant.id, len(self.registry)
        )
        return participant

    def disconnect(self, participant: Participant) -> bool:
        """Tear down a participant; returns False if it was already gone"""
        if not self.registry.unregister(participant.id):
            return False
        participant.close_outbox()
        self.router.send(leave_event(participant.id))
        if not len(self.registry):
            self.monitor.stop()
        logger.info(
            "👋 Participant %s left (remaining: %d)", participant.id, len(self.registry)
        )
        return True

    def evict(self, participant: Participant) -> Optional[asyncio.Future]:
        if not self.disconnect(participant):
            return None
        return participant.terminate()

    def on_message(self, participant: Participant, raw):
        self.dispatcher.on_message(participant, raw)

    def on_pong(self, participant: Participant):
        self.monitor.acknowledge(participant)

    def persist(self) -> bool:
        return self.displays.persist()

    async def shutdown(self):
        """Disconnect everyone and wait for their sockets to close"""
        closing = [self.evict(participant) for participant in self.registry]
        closing = [future for future in closing if future is not None]
        if closing:
            await asyncio.gather(*closing)
        self.monitor.stop()
