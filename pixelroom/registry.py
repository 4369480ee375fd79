"""
Connection registry: live participants, keyed by server-assigned identity
"""
import asyncio
import logging
from typing import Dict, Iterator, List, Optional

from aiohttp import WSCloseCode

from .utils import generate_participant_id

logger = logging.getLogger("pixelroom")

# Outbox marker for a heartbeat probe
PROBE = object()


class Participant:
    """
    One connected party

    Outbound frames are queued on the outbox and written by run_writer, so
    queueing never waits on the network.
    """

    def __init__(self, participant_id: str, connection):
        self.id = participant_id
        self.connection = connection
        self.is_alive = True
        self.outbox: asyncio.Queue = asyncio.Queue()
        self._closing: Optional[asyncio.Future] = None

    def __repr__(self):
        return f"<Participant {self.id}>"

    def send(self, message: str):
        self.outbox.put_nowait(message)

    def probe(self):
        self.outbox.put_nowait(PROBE)

    def close_outbox(self):
        self.outbox.put_nowait(None)

    async def run_writer(self):
        """Drain the outbox onto the socket until the outbox is closed"""
        while True:
            item = await self.outbox.get()
            if item is None:
                break
            try:
                if item is PROBE:
                    await self.connection.ping()
                else:
                    await self.connection.send_str(item)
            except Exception as e:
                logger.debug(f"Delivery to {self.id} failed: {e}")

    def terminate(self) -> asyncio.Future:
        """Close the socket without waiting behind queued frames"""
        if self._closing is None:
            self._closing = asyncio.ensure_future(self._close())
        return self._closing

    async def _close(self):
        try:
            await self.connection.close(
                code=WSCloseCode.GOING_AWAY, message=b"connection terminated"
            )
        except Exception as e:
            logger.debug(f"Closing {self.id} failed: {e}")


class Registry:
    def __init__(self):
        # Insertion order is join order
        self.participants: Dict[str, Participant] = {}

    def __len__(self) -> int:
        return len(self.participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self.participants.values()))

    def __contains__(self, participant_id) -> bool:
        return participant_id in self.participants

    def register(self, connection) -> Participant:
        """Create a participant with a fresh identity and add it to the live set"""
        participant_id = generate_participant_id()
        while participant_id in self.participants:
            participant_id = generate_participant_id()
        participant = Participant(participant_id, connection)
        self.participants[participant_id] = participant
        return participant

    def unregister(self, participant_id: str) -> bool:
        return self.participants.pop(participant_id, None) is not None

    def lookup(self, participant_id: str) -> Optional[Participant]:
        return self.participants.get(participant_id)

    def list_ids(self) -> List[str]:
        return list(self.participants)
