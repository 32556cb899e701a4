from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.api.ws.events import ConnectionManager, get_broadcaster
from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.identity.entities import User
from app.domains.notifications.schemas import (
    AccessRequestCreate, InboxResponse, NotificationResponse
)
from app.domains.notifications.services import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=InboxResponse)
async def get_inbox(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Входящие уведомления текущего пользователя"""
    inbox = await NotificationService(db).list_inbox(current_user.uuid)
    return InboxResponse(
        count=inbox["count"],
        items=[NotificationResponse.model_validate(n) for n in inbox["items"]]
    )


@router.post("/access-requests", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def request_access(
    request_data: AccessRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broadcaster: ConnectionManager = Depends(get_broadcaster)
):
    """Запрос на доступ к чужому документу"""
    notification_service = NotificationService(db, broadcaster)
    notification = await notification_service.request_access(
        request_data.document_id,
        current_user,
        request_data.sender_id
    )
    return NotificationResponse.model_validate(notification)


@router.delete("/{notification_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broadcaster: ConnectionManager = Depends(get_broadcaster)
):
    """Удаление уведомления"""
    await NotificationService(db, broadcaster).delete_notification(notification_uuid, current_user)
