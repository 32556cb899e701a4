from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.api.ws.events import ConnectionManager, get_broadcaster
from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.collaboration.schemas import AcceptRequest, RemoveCollaboratorRequest
from app.domains.collaboration.services import CollaborationService
from app.domains.documents.schemas import DocumentResponse
from app.domains.identity.entities import User

router = APIRouter(prefix="/documents/{document_uuid}/collaborators", tags=["collaboration"])


@router.post("/accept", response_model=DocumentResponse)
async def accept_access_request(
    document_uuid: uuid.UUID,
    request_data: AcceptRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broadcaster: ConnectionManager = Depends(get_broadcaster)
):
    """Принятие запроса на доступ: отправитель становится соавтором"""
    collaboration_service = CollaborationService(db, broadcaster)
    document = await collaboration_service.accept_access_request(
        document_uuid,
        request_data.sender_id,
        current_user
    )
    return DocumentResponse.model_validate(document)


@router.patch("/remove", response_model=DocumentResponse)
async def remove_collaborator(
    document_uuid: uuid.UUID,
    request_data: RemoveCollaboratorRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broadcaster: ConnectionManager = Depends(get_broadcaster)
):
    """Удаление соавтора владельцем документа"""
    collaboration_service = CollaborationService(db, broadcaster)
    document = await collaboration_service.remove_collaborator(
        document_uuid,
        request_data.collaborator_id,
        current_user
    )
    return DocumentResponse.model_validate(document)
