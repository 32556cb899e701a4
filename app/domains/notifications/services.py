from typing import Any, Dict, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from app.core.exceptions import (
    DuplicatePending, IdentityMismatch, NotFound, SelfRequest
)
from app.core.realtime import Broadcaster, NullBroadcaster, RealtimeEvent
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.notification_repository import NotificationRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.documents.entities import Document, as_uuid
from app.domains.identity.entities import User
from app.domains.notifications.entities import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Сервис запросов на доступ и входящих уведомлений"""

    def __init__(self, session: AsyncSession, broadcaster: Optional[Broadcaster] = None):
        self.session = session
        self.broadcaster = broadcaster or NullBroadcaster()
        self.document_repository = DocumentRepository(session)
        self.notification_repository = NotificationRepository(session)
        self.user_repository = UserRepository(session)

    async def check_duplicate_and_authorize(
        self,
        document_id: uuid.UUID,
        caller: User,
        declared_sender_id: Optional[uuid.UUID] = None
    ) -> Tuple[Document, User]:
        """Проверки перед созданием запроса на доступ.

        Возвращает документ и его владельца, которому адресован запрос.
        """
        document = await self.document_repository.get_by_uuid(document_id)
        if not document:
            raise NotFound("Document not found")

        if document.access().is_owner(caller.uuid):
            raise SelfRequest()

        if declared_sender_id is not None and as_uuid(declared_sender_id) != caller.uuid:
            logger.warning(
                f"User {caller.uuid} tried to request access to {document_id} "
                f"on behalf of {declared_sender_id}"
            )
            raise IdentityMismatch()

        owner = await self.user_repository.get_by_uuid(document.owner_id)
        if not owner:
            raise NotFound("Document owner not found")

        candidate = Notification.access_request(
            reciever_id=owner.uuid,
            sender_id=caller.uuid,
            sender_username=caller.username,
            document_id=document.uuid,
            document_name=document.name
        )
        if await self.notification_repository.find_one(candidate.dedup_key()):
            raise DuplicatePending()

        return document, owner

    async def create_access_notification(self, document: Document, owner: User, sender: User) -> Notification:
        """Создание запроса на доступ и рассылка события"""
        notification = Notification.access_request(
            reciever_id=owner.uuid,
            sender_id=sender.uuid,
            sender_username=sender.username,
            document_id=document.uuid,
            document_name=document.name
        )
        created = await self.notification_repository.create(notification)
        logger.info(f"User {sender.uuid} requested access to document {document.uuid}")

        await self.broadcaster.broadcast(RealtimeEvent.NOTIFICATION_CREATED, created.to_event_payload())
        return created

    async def request_access(
        self,
        document_id: uuid.UUID,
        caller: User,
        declared_sender_id: Optional[uuid.UUID] = None
    ) -> Notification:
        document, owner = await self.check_duplicate_and_authorize(document_id, caller, declared_sender_id)
        return await self.create_access_notification(document, owner, caller)

    async def list_inbox(self, reciever_id: uuid.UUID) -> Dict[str, Any]:
        """Все уведомления получателя, без пагинации"""
        items = await self.notification_repository.get_by_reciever(reciever_id)
        return {"count": len(items), "items": items}

    async def delete_notification(self, notification_id: uuid.UUID, caller: User) -> None:
        """Удаление уведомления по id.

        Любой авторизованный пользователь может удалить уведомление.
        """
        notification = await self.notification_repository.get_by_uuid(notification_id)
        if not notification or not await self.notification_repository.delete(notification_id):
            raise NotFound("Notification not found")

        logger.info(f"User {caller.uuid} deleted notification {notification_id}")
        await self.broadcaster.broadcast(RealtimeEvent.NOTIFICATION_DELETED, notification.to_event_payload())
