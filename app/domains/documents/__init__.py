from app.domains.documents.entities import Document, DocumentAccess, AccessRole
from app.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentListResponse,
    DocumentPopulatedResponse, CollaboratorInfo, DocumentOwnerResponse
)
from app.domains.documents.services import DocumentService

__all__ = [
    "Document", "DocumentAccess", "AccessRole",
    "DocumentCreate", "DocumentUpdate", "DocumentResponse", "DocumentListResponse",
    "DocumentPopulatedResponse", "CollaboratorInfo", "DocumentOwnerResponse",
    "DocumentService"
]
