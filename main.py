#!/usr/bin/env python3
"""
Pixel Room - Entry Point
Shared pixel displays over WebSocket, with WebRTC signaling relay
"""
import logging
from typing import Optional

from aiohttp import web

from pixelroom import config
from pixelroom.api import close_room, persist_room, room_key, ws_room
from pixelroom.displays import DisplayStore
from pixelroom.state import Room

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("pixelroom")


def build_room() -> Room:
    """Create the room from environment configuration"""
    displays = DisplayStore(
        config.DISPLAY_COUNT,
        config.DISPLAY_WIDTH,
        config.DISPLAY_HEIGHT,
        max_value=config.MAX_VALUE,
        storage=config.DATA_DIR,
    )
    return Room(displays, heartbeat_interval=config.HEARTBEAT_INTERVAL)


def create_app(room: Optional[Room] = None) -> web.Application:
    """Create and configure the aiohttp application"""
    app = web.Application()
    app[room_key] = room if room is not None else build_room()

    # Room socket; plain GETs fall through to the client page
    app.router.add_get("/", ws_room)

    # Static client
    if config.STATIC_DIR.is_dir():
        app.router.add_static("/", config.STATIC_DIR, name="static")

    app.on_shutdown.append(close_room)
    app.on_cleanup.append(persist_room)

    displays = app[room_key].displays
    logger.info(
        "🟩 Pixel room ready • %d displays of %dx%d",
        displays.count, displays.width, displays.height
    )
    return app


def main():
    app = create_app()
    logger.info(f"🚀 Starting server on {config.SERVER_HOST}:{config.PORT}")
    web.run_app(app, host=config.SERVER_HOST, port=config.PORT)


if __name__ == "__main__":
    main()
