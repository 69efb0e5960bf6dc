"""
ShopAPI Backend — Chat Hub
============================

What:  In-memory set of open chat WebSockets with broadcast.
Why:   The document service's realtime side-channel: every message a client
       sends is rebroadcast to every connected client, sender included.

No persistence, history or delivery guarantee. A socket whose send fails
is dropped from the hub and the broadcast continues with the rest.
"""

import logging
from typing import Set

from starlette.websockets import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class ChatHub:

    def __init__(self) -> None:
        self.connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.add(websocket)
        logger.info("Chat client connected (%d online)", len(self.connections))

    def disconnect(self, websocket: WebSocket) -> None:
        self.connections.discard(websocket)
        logger.info("Chat client disconnected (%d online)", len(self.connections))

    async def broadcast(self, message: str) -> None:
        # Iterate over a copy: failed sockets are removed mid-loop
        for websocket in list(self.connections):
            try:
                await websocket.send_text(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.warning("Dropping chat client after failed send: %s", str(e))
                self.disconnect(websocket)
