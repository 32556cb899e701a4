from sqlalchemy import Column, String, Boolean, DateTime

from app.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # Момент последней смены пароля; токены, выданные раньше, недействительны
    password_changed_at = Column(DateTime(timezone=True), nullable=True)
