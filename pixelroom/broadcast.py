"""
Broadcast router: fan one event out to a filtered set of participants
"""
import logging
from typing import Iterable, Optional, Set, Union

from .protocol import encode
from .registry import Registry

logger = logging.getLogger("pixelroom")

IdFilter = Union[None, str, Iterable[str]]


def _as_ids(ids: IdFilter) -> Optional[Set[str]]:
    if ids is None:
        return None
    if isinstance(ids, str):
        return {ids}
    return set(ids)


class Router:
    def __init__(self, registry: Registry):
        self.registry = registry

    def send(self, event: dict, exclude: IdFilter = None, include: IdFilter = None) -> int:
        """
        Queue an event for every participant passing both filters

        The event is serialized once. Returns how many participants it was
        queued for.
        """
        include = _as_ids(include)
        exclude = _as_ids(exclude)
        message = encode(event)
        delivered = 0
        for participant in self.registry:
            if include is not None and participant.id not in include:
                continue
            if exclude is not None and participant.id in exclude:
                continue
            try:
                participant.send(message)
            except Exception as e:
                logger.debug(f"Failed to queue for {participant.id}: {e}")
                continue
            delivered += 1
        return delivered
