from sqlalchemy import Column, String, ForeignKey, Uuid, UniqueConstraint

from app.db.base import BaseModel


class Notification(BaseModel):
    __tablename__ = "notifications"
    __table_args__ = (
        # Ключ дедупликации: не больше одного ожидающего запроса
        UniqueConstraint(
            "type", "reciever_id", "sender_id", "document_id", "notification",
            name="uq_notifications_dedup_key",
        ),
    )

    type = Column(String(50), nullable=False)
    reciever_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), nullable=False, index=True)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.uuid"), nullable=False)
    # Слабая ссылка: удаление документа не удаляет уведомления
    document_id = Column(Uuid(as_uuid=True), nullable=False)
    notification = Column(String(1000), nullable=False)
