from pydantic import BaseModel
import uuid


class AcceptRequest(BaseModel):
    """Принятие запроса на доступ: кого добавить в соавторы"""
    sender_id: uuid.UUID


class RemoveCollaboratorRequest(BaseModel):
    collaborator_id: uuid.UUID
