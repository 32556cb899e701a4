from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from app.core.config import settings
from app.core.exceptions import (
    AlreadyCollaborator, AlreadyOwner, EmptyCollaboratorSet, NotACollaborator, NotFound
)
from app.core.realtime import Broadcaster, NullBroadcaster, RealtimeEvent
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.documents.entities import Document, as_uuid
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)


class CollaborationService:
    """Сервис для управления соавторами документа.

    Соавтор появляется после принятия запроса на доступ и удаляется владельцем.
    Ожидающий запрос хранится только как уведомление, а не как поле документа.
    """

    def __init__(
        self,
        session: AsyncSession,
        broadcaster: Optional[Broadcaster] = None,
        accept_requires_owner: Optional[bool] = None
    ):
        self.session = session
        self.broadcaster = broadcaster or NullBroadcaster()
        if accept_requires_owner is None:
            accept_requires_owner = settings.accept_requires_owner
        self.accept_requires_owner = accept_requires_owner
        self.document_repository = DocumentRepository(session)
        self.user_repository = UserRepository(session)

    async def _load_document(self, document_id: uuid.UUID) -> Document:
        document = await self.document_repository.get_by_uuid(document_id)
        if not document:
            raise NotFound("Document not found")
        return document

    async def remove_collaborator(
        self,
        document_id: uuid.UUID,
        collaborator_id: uuid.UUID,
        caller: User
    ) -> Document:
        """Удаление соавтора владельцем. Повторный вызов дает NotACollaborator"""
        document = await self._load_document(document_id)
        document.access().require_owner(caller.uuid)

        if not document.collaborators:
            raise EmptyCollaboratorSet()

        collaborator_id = as_uuid(collaborator_id)
        if not document.has_collaborator(collaborator_id):
            raise NotACollaborator()

        # Условное удаление: если запись уже удалил параллельный запрос, строк не будет
        if not await self.document_repository.remove_collaborator(document.uuid, collaborator_id):
            raise NotACollaborator()

        updated = await self._load_document(document.uuid)
        logger.info(f"Owner {caller.uuid} removed collaborator {collaborator_id} from document {document.uuid}")

        await self._announce(updated, collaborator_id, "removed")
        return updated

    async def accept_access_request(
        self,
        document_id: uuid.UUID,
        sender_id: uuid.UUID,
        caller: User
    ) -> Document:
        """Принятие запроса на доступ: отправитель становится соавтором"""
        document = await self._load_document(document_id)
        sender = await self.user_repository.get_by_uuid(as_uuid(sender_id))
        if not sender:
            raise NotFound("User not found")

        if self.accept_requires_owner:
            document.access().require_owner(caller.uuid)

        if document.access().is_owner(sender.uuid):
            raise AlreadyOwner()

        if document.has_collaborator(sender.uuid):
            raise AlreadyCollaborator()

        if not await self.document_repository.add_collaborator(document.uuid, sender.uuid):
            raise AlreadyCollaborator()

        updated = await self._load_document(document.uuid)
        logger.info(f"User {sender.uuid} became collaborator of document {document.uuid} (accepted by {caller.uuid})")

        await self._announce(updated, sender.uuid, "added")
        return updated

    async def _announce(self, document: Document, user_id: uuid.UUID, action: str) -> None:
        await self.broadcaster.broadcast(RealtimeEvent.COLLABORATION_CHANGED, {
            "document_id": str(document.uuid),
            "user_id": str(user_id),
            "action": action,
            "collaborators": [str(c) for c in document.collaborators],
        })
