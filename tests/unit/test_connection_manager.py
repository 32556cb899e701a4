"""
Unit tests for the realtime fan-out connection manager.
"""
import json

import pytest

from app.api.ws.events import ConnectionManager
from app.core.realtime import RealtimeEvent


class FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, text: str):
        if self.fail and self.accepted and self.sent:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(text))


class TestConnectionManager:

    @pytest.fixture
    def manager(self):
        return ConnectionManager()

    @pytest.mark.asyncio
    async def test_connect_sends_welcome(self, manager):
        ws = FakeWebSocket()
        await manager.connect(ws, "u1")

        assert ws.accepted
        assert ws.sent[0]["event"] == "connected"
        assert manager.session_count() == 1

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_session(self, manager):
        first, second, third = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
        await manager.connect(first, "u1")
        await manager.connect(second, "u1")
        await manager.connect(third, "u2")

        await manager.broadcast(RealtimeEvent.NOTIFICATION_CREATED, {"uuid": "n1"})

        for ws in (first, second, third):
            assert ws.sent[-1] == {"event": "notification-created", "data": {"uuid": "n1"}}

    @pytest.mark.asyncio
    async def test_failed_session_is_dropped(self, manager):
        healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
        await manager.connect(healthy, "u1")
        await manager.connect(broken, "u2")

        await manager.broadcast(RealtimeEvent.NOTIFICATION_DELETED, {"uuid": "n1"})

        assert manager.session_count() == 1
        assert "u2" not in manager.active_connections
        assert healthy.sent[-1]["event"] == "notification-deleted"

    def test_disconnect_unknown_is_noop(self, manager):
        manager.disconnect("nobody", FakeWebSocket())
        assert manager.session_count() == 0
