from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserNameResponse
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_uuid}", response_model=UserNameResponse)
async def get_user(
    user_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение имени пользователя"""
    user = await IdentityService(db).get_user(user_uuid)
    return UserNameResponse(uuid=user.uuid, username=user.username)
