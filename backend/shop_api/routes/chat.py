"""
ShopAPI Backend — Chat Routes
===============================

What:  GET / serves the chat page; WS /ws is the broadcast channel.
How:   Each socket is registered with the app's ChatHub; every text frame it
       sends is rebroadcast to all registered sockets. A binary frame closes
       the socket with 1003; however the loop ends, the socket leaves the hub.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, WebSocket, status
from fastapi.responses import FileResponse

from shop_api.services.chat_hub import ChatHub

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])

CHAT_PAGE = Path(__file__).resolve().parent.parent / "static" / "chat.html"


@router.get("/", include_in_schema=False)
async def chat_page() -> FileResponse:
    return FileResponse(path=str(CHAT_PAGE), media_type="text/html")


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket) -> None:
    hub: ChatHub = websocket.app.state.chat_hub
    await hub.connect(websocket)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            text = frame.get("text")
            if text is None:
                # Chat is text-only
                logger.warning("Closing chat client after a binary frame")
                await websocket.close(code=status.WS_1003_UNSUPPORTED_DATA)
                break
            await hub.broadcast(text)
    finally:
        hub.disconnect(websocket)
