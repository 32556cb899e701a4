from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentListResponse,
    DocumentPopulatedResponse, DocumentOwnerResponse
)
from app.domains.documents.services import DocumentService
from app.domains.identity.entities import User

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Документы, которыми пользователь владеет или в которых он соавтор"""
    documents = await DocumentService(db).list_documents(current_user)
    return DocumentListResponse(
        count=len(documents),
        items=[DocumentResponse.model_validate(doc) for doc in documents]
    )


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    document = await DocumentService(db).create_document(document_data, current_user)
    return DocumentResponse.model_validate(document)


@router.get("/{document_uuid}", response_model=DocumentResponse)
async def get_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа владельцем или соавтором"""
    document = await DocumentService(db).get_document(document_uuid, current_user)
    return DocumentResponse.model_validate(document)


@router.get("/{document_uuid}/populated", response_model=DocumentPopulatedResponse)
async def get_document_populated(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Документ с именами соавторов (только для владельца)"""
    return await DocumentService(db).get_document_populated(document_uuid, current_user)


@router.get("/{document_uuid}/owner", response_model=DocumentOwnerResponse)
async def get_document_owner(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение владельца документа"""
    owner_id = await DocumentService(db).get_owner(document_uuid)
    return DocumentOwnerResponse(document_id=document_uuid, owner_id=owner_id)


@router.patch("/{document_uuid}", response_model=DocumentResponse)
async def update_document(
    document_uuid: uuid.UUID,
    update_data: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление документа"""
    document = await DocumentService(db).update_document(document_uuid, update_data, current_user)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа"""
    await DocumentService(db).delete_document(document_uuid, current_user)
