import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Union

from app.core.exceptions import Forbidden

UserId = Union[uuid.UUID, str]


def as_uuid(value: UserId) -> uuid.UUID:
    """Приведение идентификатора к UUID, чтобы сравнивать по значению"""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class Document:
    """Сущность документа домена Documents"""

    def __init__(
        self,
        uuid: uuid.UUID,
        name: str,
        owner_id: uuid.UUID,
        collaborators: Optional[List[uuid.UUID]] = None,
        content: Optional[List[Any]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.name = name
        self.owner_id = owner_id
        self.collaborators = list(collaborators or [])
        self.content = content
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def rename(self, new_name: str) -> None:
        self.name = new_name
        self.updated_at = datetime.now(timezone.utc)

    def replace_content(self, new_content: List[Any]) -> None:
        self.content = new_content
        self.updated_at = datetime.now(timezone.utc)

    def has_collaborator(self, user_id: UserId) -> bool:
        user_id = as_uuid(user_id)
        return any(collaborator == user_id for collaborator in self.collaborators)

    def access(self) -> "DocumentAccess":
        return DocumentAccess(self.uuid, self.owner_id, self.collaborators)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, name={self.name}, owner_id={self.owner_id})"


class AccessRole(Enum):
    """Роль пользователя по отношению к документу"""
    OWNER = "owner"
    COLLABORATOR = "collaborator"
    UNAUTHORIZED = "unauthorized"


class DocumentAccess:
    """Сущность для управления доступом к документу.

    Решение принимается заново при каждом запросе: набор соавторов может
    измениться между запросами, поэтому результат не кэшируется.
    """

    def __init__(self, document_id: uuid.UUID, owner_id: UserId, collaborators: Optional[List[UserId]] = None):
        self.document_id = document_id
        self.owner_id = as_uuid(owner_id)
        self._collaborators = [as_uuid(c) for c in (collaborators or [])]

    def role(self, user_id: UserId) -> AccessRole:
        """Классификация пользователя: владелец, соавтор или посторонний"""
        user_id = as_uuid(user_id)
        if user_id == self.owner_id:
            return AccessRole.OWNER
        if user_id in self._collaborators:
            return AccessRole.COLLABORATOR
        return AccessRole.UNAUTHORIZED

    def is_owner(self, user_id: UserId) -> bool:
        return self.role(user_id) is AccessRole.OWNER

    def can_access(self, user_id: UserId) -> bool:
        """Проверка прав на чтение и редактирование"""
        return self.role(user_id) is not AccessRole.UNAUTHORIZED

    def require_owner(self, user_id: UserId) -> None:
        if not self.is_owner(user_id):
            raise Forbidden("You are not authorized to perform this action")

    def require_owner_or_collaborator(self, user_id: UserId) -> None:
        if not self.can_access(user_id):
            raise Forbidden("You are not allowed to open or edit this document")

    def get_collaborators(self) -> List[uuid.UUID]:
        """Получение списка соавторов"""
        return list(self._collaborators)
