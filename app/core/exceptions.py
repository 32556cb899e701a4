"""Доменные ошибки приложения.

Сервисы поднимают эти исключения, а обработчик в app.main превращает их
в ответ вида {"status": "fail", "kind": ..., "message": ...}.
"""
from typing import Optional

from fastapi import status


class DomainError(Exception):
    """Базовая ошибка домена"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"status": "fail", "kind": self.kind, "message": self.message}


class NotFound(DomainError, LookupError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Entity not found"


class Forbidden(DomainError, PermissionError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not authorized to perform this action"


class Unauthenticated(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class IdentityMismatch(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not the sender of this request"


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class DuplicateName(Conflict):
    default_message = "A document with this name already exists"


class DuplicatePending(Conflict):
    default_message = "The request already exists but has not been answered yet"


class AlreadyCollaborator(Conflict):
    default_message = "User is already a collaborator"


class AlreadyOwner(Conflict):
    default_message = "User is already the owner"


class SelfRequest(Conflict):
    default_message = "You are already the owner of this document"


class InvalidState(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid state"


class EmptyCollaboratorSet(InvalidState):
    default_message = "This document has no collaborators"


class NotACollaborator(InvalidState):
    default_message = "This user is not a collaborator"
