"""
Runtime configuration, read from the environment once at import
"""
import os
from pathlib import Path

PORT = int(os.environ.get("PORT", 8080))
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")

# Shared displays
DISPLAY_COUNT = int(os.environ.get("ROOM_DISPLAYS", 4))
DISPLAY_WIDTH = int(os.environ.get("ROOM_WIDTH", 10 * 4))
DISPLAY_HEIGHT = int(os.environ.get("ROOM_HEIGHT", 3 * 4))
MAX_VALUE = int(os.environ.get("ROOM_MAX_VALUE", 255))

# Seconds between heartbeat probes
HEARTBEAT_INTERVAL = float(os.environ.get("ROOM_HEARTBEAT", 60))

DATA_DIR = Path(os.getenv("ROOM_DATA_DIR", "./data"))
STATIC_DIR = Path(os.getenv("ROOM_STATIC_DIR", "./client"))
