"""
Authoritative pixel state for the shared displays

Each display is a row-major bytearray, one byte per pixel. apply_update is
the only write path into display memory.
"""
import base64
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .utils import random_pixel

logger = logging.getLogger("pixelroom")

STORAGE_FILE = "room.bin"

Update = Tuple[int, int, int, int]


class DisplayStore:
    def __init__(
        self,
        count: int,
        width: int,
        height: int,
        max_value: int = 255,
        storage: Optional[Path] = None,
    ):
        if count < 1 or width < 1 or height < 1:
            raise ValueError("displays need a positive count and dimensions")
        if not 1 <= max_value <= 255:
            raise ValueError("max_value must fit in one byte")
        self.count = count
        self.width = width
        self.height = height
        self.max_value = max_value
        self.storage = Path(storage) if storage is not None else None
        self.displays: List[bytearray] = []
        self.load()

    @property
    def display_size(self) -> int:
        return self.width * self.height

    @property
    def total_size(self) -> int:
        return self.display_size * self.count

    # ============================================================
    # STATE ACCESS
    # ============================================================

    def snapshot(self) -> List[str]:
        """Encode every display as base64 text, in display order"""
        return [
            base64.b64encode(bytes(display)).decode("ascii")
            for display in self.displays
        ]

    def get(self, display: int, x: int, y: int) -> int:
        return self.displays[display][(self.width * y) + x]

    def in_bounds(self, display: int, x: int, y: int, value: int) -> bool:
        return (
            0 <= display < self.count
            and 0 <= x < self.width
            and 0 <= y < self.height
            and 0 <= value <= self.max_value
        )

    def apply_update(self, display: int, x: int, y: int, value: int) -> Optional[Update]:
        """Write one pixel; returns the accepted tuple or None if out of range"""
        if not self.in_bounds(display, x, y, value):
            return None
        self.displays[display][(self.width * y) + x] = value
        return display, x, y, value

    # ============================================================
    # PERSISTENCE
    # ============================================================

    def serialize(self) -> bytes:
        return b"".join(bytes(display) for display in self.displays)

    def restore(self, blob: Optional[bytes]) -> bool:
        """Replace all grids from a blob; rejected unless its length matches exactly"""
        if blob is None or len(blob) != self.total_size:
            return False
        if any(byte > self.max_value for byte in blob):
            return False
        size = self.display_size
        self.displays = [
            bytearray(blob[size * index:size * (index + 1)])
            for index in range(self.count)
        ]
        return True

    def randomize(self):
        self.displays = [
            bytearray(random_pixel(self.max_value) for _ in range(self.display_size))
            for _ in range(self.count)
        ]

    def load(self) -> bool:
        """Restore from durable storage, falling back to fresh random state"""
        blob = self._read_storage()
        if blob is not None and self.restore(blob):
            logger.info("Restored %d displays from %s", self.count, self._path())
            return True
        if blob is not None:
            logger.warning(
                "Discarding stored state: %d bytes, expected %d",
                len(blob), self.total_size
            )
        self.randomize()
        return False

    def _path(self) -> Optional[Path]:
        if self.storage is None:
            return None
        return self.storage / STORAGE_FILE

    def _read_storage(self) -> Optional[bytes]:
        path = self._path()
        if path is None:
            return None
        try:
            return path.read_bytes()
        except FileNotFoundError:
            logger.info("No stored state at %s, generating displays", path)
        except OSError as e:
            logger.warning(f"Failed to read stored state: {e}")
        return None

    def persist(self) -> bool:
        """Write all grids to durable storage; failures are logged, not raised"""
        path = self._path()
        if path is None:
            return False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.serialize())
        except OSError as e:
            logger.error(f"Failed to persist displays: {e}")
            return False
        logger.info("💾 Persisted %d displays to %s", self.count, path)
        return True
