from app.db.models.user import User
from app.db.models.document import Document, DocumentCollaborator
from app.db.models.notification import Notification

__all__ = [
    "User",
    "Document",
    "DocumentCollaborator",
    "Notification"
]
