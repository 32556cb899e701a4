from app.domains.collaboration.schemas import AcceptRequest, RemoveCollaboratorRequest
from app.domains.collaboration.services import CollaborationService

__all__ = [
    "AcceptRequest", "RemoveCollaboratorRequest",
    "CollaborationService"
]
