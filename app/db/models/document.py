from sqlalchemy import Column, String, ForeignKey, JSON, DateTime, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.db import Base
from app.db.base import BaseModel, utcnow


DEFAULT_CONTENT = [
    {
        "type": "paragraph",
        "children": [
            {"text": "Example: \n"},
            {"text": "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Morbi eros libero, "
                     "elementum eu quam eget, lacinia vestibulum nunc... "},
        ],
    }
]


class Document(BaseModel):
    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_documents_owner_name"),
    )

    name = Column(String(255), nullable=False)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), nullable=False, index=True)
    content = Column(JSON, nullable=False, default=lambda: [dict(block) for block in DEFAULT_CONTENT])

    # Relationships
    owner = relationship("User")
    collaborator_links = relationship(
        "DocumentCollaborator",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentCollaborator.added_at",
    )


class DocumentCollaborator(Base):
    """Соавтор документа; первичный ключ делает набор соавторов множеством"""
    __tablename__ = "document_collaborators"

    document_id = Column(
        Uuid(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), primary_key=True)
    added_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    document = relationship("Document", back_populates="collaborator_links")
    user = relationship("User")
