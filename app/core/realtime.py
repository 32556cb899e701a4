from typing import Any, Dict, Protocol


class RealtimeEvent:
    """Имена событий, рассылаемых подключенным клиентам"""
    NOTIFICATION_CREATED = "notification-created"
    NOTIFICATION_DELETED = "notification-deleted"
    COLLABORATION_CHANGED = "collaboration-changed"


class Broadcaster(Protocol):
    async def broadcast(self, event_name: str, payload: Dict[str, Any]) -> None:
        ...


class NullBroadcaster:
    """Рассылка, которая ничего не отправляет"""

    async def broadcast(self, event_name: str, payload: Dict[str, Any]) -> None:
        return None

