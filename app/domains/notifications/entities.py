import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class NotificationType(str, Enum):
    """Типы уведомлений"""
    ACCESS_REQUEST = "access request"


def render_access_request_message(sender_username: str, document_name: str) -> str:
    """Текст запроса на доступ.

    Текст детерминирован и входит в ключ дедупликации: после переименования
    документа или пользователя новые запросы уже не совпадут со старыми.
    """
    return f"User {sender_username} requests access to document: {document_name}"


class Notification:
    """Сущность уведомления; после создания не изменяется"""

    def __init__(
        self,
        uuid: uuid.UUID,
        type: NotificationType,
        reciever_id: uuid.UUID,
        sender_id: uuid.UUID,
        document_id: uuid.UUID,
        notification: str,
        created_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.type = NotificationType(type)
        self.reciever_id = reciever_id
        self.sender_id = sender_id
        self.document_id = document_id
        self.notification = notification
        self.created_at = created_at or datetime.now(timezone.utc)

    @classmethod
    def access_request(
        cls,
        reciever_id: uuid.UUID,
        sender_id: uuid.UUID,
        sender_username: str,
        document_id: uuid.UUID,
        document_name: str
    ) -> "Notification":
        return cls(
            uuid=uuid.uuid4(),
            type=NotificationType.ACCESS_REQUEST,
            reciever_id=reciever_id,
            sender_id=sender_id,
            document_id=document_id,
            notification=render_access_request_message(sender_username, document_name)
        )

    def dedup_key(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "reciever_id": self.reciever_id,
            "sender_id": self.sender_id,
            "document_id": self.document_id,
            "notification": self.notification,
        }

    def to_event_payload(self) -> Dict[str, Any]:
        return {
            "uuid": str(self.uuid),
            "type": self.type.value,
            "reciever": str(self.reciever_id),
            "sender": str(self.sender_id),
            "doc": str(self.document_id),
            "notification": self.notification,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Notification):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Notification(uuid={self.uuid}, type={self.type.value}, reciever_id={self.reciever_id})"
