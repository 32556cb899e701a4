from pydantic import BaseModel, ConfigDict
from typing import List, Optional
import uuid
from datetime import datetime

from app.domains.notifications.entities import NotificationType


class AccessRequestCreate(BaseModel):
    """Запрос на доступ к документу.

    sender_id необязателен; если указан, он должен совпадать с текущим пользователем.
    """
    document_id: uuid.UUID
    sender_id: Optional[uuid.UUID] = None


class NotificationResponse(BaseModel):
    uuid: uuid.UUID
    type: NotificationType
    reciever_id: uuid.UUID
    sender_id: uuid.UUID
    document_id: uuid.UUID
    notification: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InboxResponse(BaseModel):
    count: int
    items: List[NotificationResponse]
