from typing import Dict, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from app.core.exceptions import DuplicateName, NotFound
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.documents.entities import Document
from app.domains.documents.schemas import DocumentCreate, DocumentUpdate
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.user_repository = UserRepository(session)

    async def load(self, document_uuid: uuid.UUID) -> Document:
        """Получение документа; NotFound, если его нет"""
        document = await self.document_repository.get_by_uuid(document_uuid)
        if not document:
            raise NotFound("Document not found")
        return document

    async def ensure_name_available(self, owner_id: uuid.UUID, name: str) -> None:
        """Имя документа уникально в пределах одного владельца"""
        if await self.document_repository.find_one(owner_id, name):
            raise DuplicateName()

    async def create_document(self, document_data: DocumentCreate, owner: User) -> Document:
        """Создание нового документа; создатель становится владельцем"""
        await self.ensure_name_available(owner.uuid, document_data.name)

        document = Document(uuid=uuid.uuid4(), name=document_data.name, owner_id=owner.uuid)
        created = await self.document_repository.create(document)
        logger.info(f"User {owner.uuid} created document {created.uuid}")
        return created

    async def list_documents(self, user: User) -> List[Document]:
        """Документы пользователя: сначала собственные, затем те, где он соавтор"""
        owned = await self.document_repository.get_by_owner(user.uuid)
        shared = await self.document_repository.get_by_collaborator(user.uuid)
        return owned + shared

    async def get_document(self, document_uuid: uuid.UUID, user: User) -> Document:
        document = await self.load(document_uuid)
        document.access().require_owner_or_collaborator(user.uuid)
        return document

    async def get_document_populated(self, document_uuid: uuid.UUID, user: User) -> Dict[str, Any]:
        """Документ с именами соавторов; доступно только владельцу"""
        document = await self.load(document_uuid)
        document.access().require_owner(user.uuid)

        collaborators = []
        for collaborator_id in document.collaborators:
            collaborator = await self.user_repository.get_by_uuid(collaborator_id)
            if collaborator:
                collaborators.append({"uuid": collaborator.uuid, "username": collaborator.username})

        return {
            "uuid": document.uuid,
            "name": document.name,
            "owner_id": document.owner_id,
            "collaborators": collaborators,
            "content": document.content,
            "created_at": document.created_at,
            "updated_at": document.updated_at,
        }

    async def get_owner(self, document_uuid: uuid.UUID) -> uuid.UUID:
        document = await self.load(document_uuid)
        return document.owner_id

    async def update_document(
        self,
        document_uuid: uuid.UUID,
        update_data: DocumentUpdate,
        user: User
    ) -> Document:
        """Обновление имени и содержимого документа владельцем или соавтором"""
        document = await self.load(document_uuid)
        document.access().require_owner_or_collaborator(user.uuid)

        if update_data.name and update_data.name != document.name:
            await self.ensure_name_available(document.owner_id, update_data.name)
            document.rename(update_data.name)

        if update_data.content is not None:
            document.replace_content(update_data.content)

        updated = await self.document_repository.update(document)
        if not updated:
            raise NotFound("Document not found")
        return updated

    async def delete_document(self, document_uuid: uuid.UUID, user: User) -> None:
        """Удаление документа; только владелец. Уведомления не удаляются"""
        document = await self.load(document_uuid)
        document.access().require_owner(user.uuid)

        if not await self.document_repository.delete(document_uuid):
            raise NotFound("Document not found")
        logger.info(f"User {user.uuid} deleted document {document_uuid}")
