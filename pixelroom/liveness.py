"""
Liveness monitor: heartbeat probes that evict unresponsive participants

A participant is probed every interval. If the next tick finds that no
acknowledgment arrived since the previous probe, it is handed to on_dead.
The periodic task only runs while the registry is non-empty.
"""
import asyncio
import logging
from typing import Callable, List, Optional

from .registry import Participant, Registry

logger = logging.getLogger("pixelroom")


class LivenessMonitor:
    def __init__(
        self,
        registry: Registry,
        on_dead: Callable[[Participant], None],
        interval: float = 60.0,
    ):
        self.registry = registry
        self.on_dead = on_dead
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None

    def start(self):
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    def stop(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def acknowledge(self, participant: Participant):
        participant.is_alive = True

    def tick(self) -> List[Participant]:
        """Probe live participants and hand over those that missed the last probe"""
        dead = []
        for participant in self.registry:
            if not participant.is_alive:
                dead.append(participant)
                continue
            participant.is_alive = False
            participant.probe()
        for participant in dead:
            logger.info("💀 Participant %s missed a heartbeat", participant.id)
            self.on_dead(participant)
        return dead

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            self.tick()
