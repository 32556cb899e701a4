from app.db.repositories.user_repository import UserRepository
from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.notification_repository import NotificationRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "NotificationRepository"
]
