"""
HTTP and WebSocket handlers for the pixel room
"""
import asyncio
import logging

from aiohttp import WSMsgType, web

from . import config
from .state import Room

logger = logging.getLogger("pixelroom")

room_key = web.AppKey("room", Room)

# ============================================================
# STATIC CLIENT
# ============================================================

async def index(request: web.Request) -> web.StreamResponse:
    index_file = config.STATIC_DIR / "index.html"
    if not index_file.is_file():
        raise web.HTTPNotFound()
    return web.FileResponse(index_file)

# ============================================================
# ROOM WEBSOCKET
# ============================================================

async def ws_room(request: web.Request) -> web.StreamResponse:
    """WebSocket endpoint for one room participant"""
    ws = web.WebSocketResponse(autoping=False)
    if not ws.can_prepare(request).ok:
        return await index(request)
    await ws.prepare(request)

    room = request.app[room_key]
    participant = room.connect(ws)
    writer = asyncio.create_task(participant.run_writer())

    try:
        async for msg in ws:
            if msg.type in (WSMsgType.TEXT, WSMsgType.BINARY):
                room.on_message(participant, msg.data)
            elif msg.type == WSMsgType.PONG:
                room.on_pong(participant)
            elif msg.type == WSMsgType.PING:
                await ws.pong(msg.data)
            elif msg.type == WSMsgType.ERROR:
                logger.debug(f"WebSocket error for {participant.id}: {ws.exception()}")
                break
    finally:
        room.disconnect(participant)
        await writer

    return ws

# ============================================================
# LIFECYCLE
# ============================================================

async def close_room(app: web.Application):
    await app[room_key].shutdown()


async def persist_room(app: web.Application):
    app[room_key].persist()
