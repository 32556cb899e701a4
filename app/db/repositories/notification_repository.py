from typing import Any, Dict, List, Optional, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
import uuid

from app.core.exceptions import DuplicatePending
from app.db.models.notification import Notification as NotificationModel

if TYPE_CHECKING:
    from app.domains.notifications.entities import Notification


class NotificationRepository:
    """Репозиторий для работы с уведомлениями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: "Notification") -> "Notification":
        """Создание уведомления.

        Уникальный индекс по ключу дедупликации не дает создать второй
        ожидающий запрос даже при одновременных вызовах.
        """
        db_notification = NotificationModel(
            uuid=notification.uuid,
            type=notification.type.value,
            reciever_id=notification.reciever_id,
            sender_id=notification.sender_id,
            document_id=notification.document_id,
            notification=notification.notification
        )

        self.session.add(db_notification)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicatePending()
        await self.session.refresh(db_notification)
        return self._to_domain(db_notification)

    async def get_by_uuid(self, notification_uuid: uuid.UUID) -> Optional["Notification"]:
        """Получение уведомления по UUID"""
        result = await self.session.execute(
            select(NotificationModel).where(NotificationModel.uuid == notification_uuid)
        )
        db_notification = result.scalar_one_or_none()
        return self._to_domain(db_notification) if db_notification else None

    async def find_one(self, filters: Dict[str, Any]) -> Optional["Notification"]:
        """Поиск уведомления с точным совпадением всех полей фильтра"""
        result = await self.session.execute(
            select(NotificationModel).filter_by(**filters).limit(1)
        )
        db_notification = result.scalar_one_or_none()
        return self._to_domain(db_notification) if db_notification else None

    async def find(self, filters: Dict[str, Any]) -> List["Notification"]:
        result = await self.session.execute(
            select(NotificationModel)
            .filter_by(**filters)
            .order_by(NotificationModel.created_at.asc())
        )
        return [self._to_domain(n) for n in result.scalars().all()]

    async def get_by_reciever(self, reciever_id: uuid.UUID) -> List["Notification"]:
        """Входящие уведомления пользователя"""
        return await self.find({"reciever_id": reciever_id})

    async def delete(self, notification_uuid: uuid.UUID) -> bool:
        """Удаление уведомления"""
        result = await self.session.execute(
            delete(NotificationModel).where(NotificationModel.uuid == notification_uuid)
        )
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_notification: NotificationModel) -> "Notification":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.notifications.entities import Notification

        return Notification(
            uuid=db_notification.uuid,
            type=db_notification.type,
            reciever_id=db_notification.reciever_id,
            sender_id=db_notification.sender_id,
            document_id=db_notification.document_id,
            notification=db_notification.notification,
            created_at=db_notification.created_at
        )
