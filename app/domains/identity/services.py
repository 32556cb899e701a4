from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from app.core.exceptions import Conflict, NotFound, Unauthenticated
from app.core.security import create_access_token, verify_token
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise Conflict("Email already registered")

        if await self.user_repository.username_exists(user_data.username):
            raise Conflict("Username already taken")

        user = User.create_user(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password
        )

        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.uuid} ({created.username})")
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)

        if not user:
            logger.info(f"Failed login attempt for {login_data.email}")
            return None

        return create_access_token(data={"sub": str(user.uuid), "username": user.username})

    async def get_user(self, user_uuid: uuid.UUID) -> User:
        """Получение пользователя; NotFound, если его нет"""
        user = await self.user_repository.get_by_uuid(user_uuid)
        if not user:
            raise NotFound("User not found")
        return user

    async def change_user_password(self, user: User, current_password: str, new_password: str) -> User:
        """Смена пароля; ранее выданные токены перестают действовать"""
        if not user.authenticate(current_password):
            raise Unauthenticated("Current password is incorrect")

        user.set_password(new_password)
        updated = await self.user_repository.update(user)
        logger.info(f"Password changed for user {user.uuid}")
        return updated

    async def get_current_user_from_token(self, token: Optional[str]) -> User:
        """Получение текущего пользователя из JWT токена"""
        if not token:
            raise Unauthenticated("You are not logged in")

        payload = verify_token(token)
        if payload is None:
            raise Unauthenticated("Invalid or expired token")

        try:
            user_uuid = uuid.UUID(str(payload.get("sub")))
        except ValueError:
            raise Unauthenticated("Invalid token subject")

        user = await self.user_repository.get_by_uuid(user_uuid)
        if user is None or not user.is_active:
            raise Unauthenticated("The user belonging to this token no longer exists")

        if user.is_password_changed(int(payload.get("iat", 0))):
            raise Unauthenticated("Password was changed recently, please log in again")

        return user
