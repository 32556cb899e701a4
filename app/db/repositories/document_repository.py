from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
import uuid

from app.core.exceptions import DuplicateName
from app.db.models.document import (
    Document as DocumentModel,
    DocumentCollaborator as DocumentCollaboratorModel,
)

if TYPE_CHECKING:
    from app.domains.documents.entities import Document


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self):
        return (
            select(DocumentModel)
            .options(selectinload(DocumentModel.collaborator_links))
            .execution_options(populate_existing=True)
        )

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.uuid,
            name=document.name,
            owner_id=document.owner_id,
        )
        if document.content is not None:
            db_document.content = document.content

        self.session.add(db_document)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateName()
        return await self.get_by_uuid(document.uuid)

    async def get_by_uuid(self, document_uuid: uuid.UUID) -> Optional["Document"]:
        """Получение документа по UUID"""
        result = await self.session.execute(
            self._select().where(DocumentModel.uuid == document_uuid)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def find_one(self, owner_id: uuid.UUID, name: str) -> Optional["Document"]:
        """Поиск документа владельца по имени"""
        result = await self.session.execute(
            self._select().where(
                DocumentModel.owner_id == owner_id,
                DocumentModel.name == name
            )
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_by_owner(self, owner_id: uuid.UUID) -> List["Document"]:
        """Получение документов по владельцу"""
        result = await self.session.execute(
            self._select()
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.asc())
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def get_by_collaborator(self, user_id: uuid.UUID) -> List["Document"]:
        """Получение документов, где пользователь является соавтором"""
        result = await self.session.execute(
            self._select()
            .join(DocumentCollaboratorModel, DocumentCollaboratorModel.document_id == DocumentModel.uuid)
            .where(DocumentCollaboratorModel.user_id == user_id)
            .order_by(DocumentModel.created_at.asc())
        )
        return [self._to_domain(doc) for doc in result.scalars().all()]

    async def update(self, document: "Document") -> Optional["Document"]:
        """Обновление имени и содержимого документа"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.uuid == document.uuid)
            .values(
                name=document.name,
                content=document.content,
                updated_at=document.updated_at
            )
        )

        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateName()

        if result.rowcount == 0:
            return None
        return await self.get_by_uuid(document.uuid)

    async def delete(self, document_uuid: uuid.UUID) -> bool:
        """Удаление документа вместе с записями о соавторах"""
        await self.session.execute(
            delete(DocumentCollaboratorModel).where(DocumentCollaboratorModel.document_id == document_uuid)
        )
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.uuid == document_uuid)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def add_collaborator(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Добавление соавтора, если его еще нет.

        Первичный ключ (document_id, user_id) не допускает дубликатов, поэтому
        два одновременных добавления дают одну запись. False - запись уже была.
        """
        stmt = insert(DocumentCollaboratorModel).values(document_id=document_uuid, user_id=user_id)
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def remove_collaborator(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Удаление соавтора; False, если такого соавтора не было"""
        result = await self.session.execute(
            delete(DocumentCollaboratorModel).where(
                DocumentCollaboratorModel.document_id == document_uuid,
                DocumentCollaboratorModel.user_id == user_id
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.documents.entities import Document

        return Document(
            uuid=db_document.uuid,
            name=db_document.name,
            owner_id=db_document.owner_id,
            collaborators=[link.user_id for link in db_document.collaborator_links],
            content=db_document.content,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
