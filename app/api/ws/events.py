from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List
import json
import logging

from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import Unauthenticated
from app.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Реестр подключенных сессий и рассылка событий всем им.

    Доставка без подтверждений: отключенные сессии событие не получат.
    """

    def __init__(self):
        # Хранилище активных соединений: {user_id: [websocket, ...]}
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, user_id: str):
        """Регистрация новой сессии пользователя"""
        await websocket.accept()
        self.active_connections.setdefault(user_id, []).append(websocket)
        logger.info(f"User {user_id} connected to event stream")

        await websocket.send_text(json.dumps({
            "event": "connected",
            "data": {"user_id": user_id}
        }))

    def disconnect(self, user_id: str, websocket: WebSocket):
        """Отключение сессии пользователя"""
        sessions = self.active_connections.get(user_id, [])
        if websocket in sessions:
            sessions.remove(websocket)
        if not sessions:
            self.active_connections.pop(user_id, None)

        logger.info(f"User {user_id} disconnected from event stream")

    def session_count(self) -> int:
        return sum(len(sessions) for sessions in self.active_connections.values())

    async def broadcast(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Рассылка события всем подключенным сессиям"""
        message_json = json.dumps({"event": event_name, "data": payload})
        disconnected = []

        for user_id, sessions in list(self.active_connections.items()):
            for websocket in list(sessions):
                try:
                    await websocket.send_text(message_json)
                except Exception as e:
                    logger.error(f"Failed to deliver {event_name} to user {user_id}: {e}")
                    disconnected.append((user_id, websocket))

        # Удаляем отключенные сессии
        for user_id, websocket in disconnected:
            self.disconnect(user_id, websocket)

        logger.debug(f"Broadcasted {event_name} to {self.session_count()} sessions")


manager = ConnectionManager()


def get_broadcaster() -> ConnectionManager:
    return manager


@router.websocket("/ws/events")
async def events_endpoint(
    websocket: WebSocket,
    token: str = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """WebSocket для получения уведомлений и изменений соавторов в реальном времени"""
    token = token or websocket.cookies.get(settings.jwt_cookie_name)

    try:
        user = await IdentityService(db).get_current_user_from_token(token)
    except Unauthenticated as e:
        logger.info(f"Rejected event stream connection: {e.message}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = str(user.uuid)
    await manager.connect(websocket, user_id)

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                continue

            if message.get("type") == "ping":
                # Ответ на ping для поддержания соединения
                await websocket.send_text(json.dumps({"event": "pong"}))

    except WebSocketDisconnect:
        manager.disconnect(user_id, websocket)

    except Exception as e:
        logger.error(f"WebSocket error: {e}")
        manager.disconnect(user_id, websocket)
