from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Any, Optional, List
import uuid
from datetime import datetime


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class DocumentUpdate(BaseModel):
    """Схема для обновления документа.

    Владелец и набор соавторов через этот путь не меняются.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[List[Any]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip() if v else v


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    uuid: uuid.UUID
    name: str
    owner_id: uuid.UUID
    collaborators: List[uuid.UUID]
    content: List[Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CollaboratorInfo(BaseModel):
    uuid: uuid.UUID
    username: str


class DocumentPopulatedResponse(BaseModel):
    """Документ с раскрытыми именами соавторов"""
    uuid: uuid.UUID
    name: str
    owner_id: uuid.UUID
    collaborators: List[CollaboratorInfo]
    content: List[Any]
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    count: int
    items: List[DocumentResponse]


class DocumentOwnerResponse(BaseModel):
    document_id: uuid.UUID
    owner_id: uuid.UUID
