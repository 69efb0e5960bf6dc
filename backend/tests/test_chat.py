"""
ShopAPI Backend — Chat Channel Tests
======================================

What we test:
    ✅ ChatHub broadcasts to every socket, sender included
    ✅ A socket whose send fails is dropped; the rest still receive
    ✅ WS /ws end to end through Starlette's TestClient
    ✅ Sockets leave the hub however they end; binary frames close with 1003
    ✅ GET / serves the chat page
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from shop_api.main import create_document_app
from shop_api.services.chat_hub import ChatHub


def _socket():
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    websocket.send_text = AsyncMock()
    return websocket


class TestChatHub:

    def setup_method(self):
        self.hub = ChatHub()

    @pytest.mark.asyncio
    async def test_connect_accepts_and_registers(self):
        ws = _socket()
        await self.hub.connect(ws)
        ws.accept.assert_awaited_once()
        assert ws in self.hub.connections

    @pytest.mark.asyncio
    async def test_broadcast_reaches_everyone(self):
        sockets = [_socket() for _ in range(3)]
        for ws in sockets:
            await self.hub.connect(ws)

        await self.hub.broadcast("hello")

        for ws in sockets:
            ws.send_text.assert_awaited_once_with("hello")

    @pytest.mark.asyncio
    async def test_failed_send_drops_socket(self):
        healthy, broken = _socket(), _socket()
        broken.send_text = AsyncMock(side_effect=WebSocketDisconnect(code=1006))
        await self.hub.connect(healthy)
        await self.hub.connect(broken)

        await self.hub.broadcast("still here?")

        healthy.send_text.assert_awaited_once_with("still here?")
        assert broken not in self.hub.connections
        assert healthy in self.hub.connections

    def test_disconnect_unknown_socket_is_harmless(self):
        self.hub.disconnect(_socket())
        assert self.hub.connections == set()


class TestChatEndpoints:

    def test_chat_page(self, fake_document_store):
        with TestClient(create_document_app(fake_document_store)) as client:
            response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/ws" in response.text

    def test_messages_are_broadcast(self, fake_document_store):
        with TestClient(create_document_app(fake_document_store)) as client:
            with client.websocket_connect("/ws") as first:
                first.send_text("ping")
                assert first.receive_text() == "ping"

                with client.websocket_connect("/ws") as second:
                    second.send_text("hi all")
                    assert first.receive_text() == "hi all"
                    assert second.receive_text() == "hi all"

    def test_lifespan_opens_and_closes_store(self, fake_document_store):
        with TestClient(create_document_app(fake_document_store)):
            assert fake_document_store.connected
        assert not fake_document_store.connected

    def test_closed_socket_leaves_hub(self, fake_document_store):
        app = create_document_app(fake_document_store)
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.send_text("hello")
                assert ws.receive_text() == "hello"
                assert len(app.state.chat_hub.connections) == 1

            assert app.state.chat_hub.connections == set()

    def test_binary_frame_closes_socket(self, fake_document_store):
        app = create_document_app(fake_document_store)
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as ws:
                ws.send_bytes(b"\x00\x01")
                with pytest.raises(WebSocketDisconnect) as exc_info:
                    ws.receive_text()
                assert exc_info.value.code == 1003

            assert app.state.chat_hub.connections == set()

    def test_binary_sender_does_not_break_others(self, fake_document_store):
        app = create_document_app(fake_document_store)
        with TestClient(app) as client:
            with client.websocket_connect("/ws") as listener:
                with client.websocket_connect("/ws") as offender:
                    offender.send_bytes(b"\xff")
                    with pytest.raises(WebSocketDisconnect):
                        offender.receive_text()

                listener.send_text("still up")
                assert listener.receive_text() == "still up"
                assert len(app.state.chat_hub.connections) == 1
