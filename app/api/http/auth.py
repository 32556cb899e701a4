from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.auth import bearer_scheme, extract_token, get_current_user
from app.core.config import settings
from app.core.db import get_db
from app.core.exceptions import Unauthenticated
from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, Token, PasswordChange, LoginStatusResponse
)
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="strict"
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)
    user = await identity_service.register_user(user_data)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)

    token = await identity_service.login_user(login_data)

    if not token:
        raise Unauthenticated("Incorrect email or password")

    _set_auth_cookie(response, token)
    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout")
async def logout(response: Response):
    """Выход пользователя"""
    response.delete_cookie(settings.jwt_cookie_name)
    return {"status": "success"}


@router.get("/is-logged-in", response_model=LoginStatusResponse)
async def is_logged_in(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
):
    """Проверка входа; никогда не возвращает ошибку"""
    identity_service = IdentityService(db)
    try:
        user = await identity_service.get_current_user_from_token(extract_token(request, credentials))
    except Unauthenticated:
        return LoginStatusResponse(logged_in=False)
    return LoginStatusResponse(logged_in=True, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Получение информации о текущем пользователе"""
    return UserResponse.model_validate(current_user)


@router.post("/change-password", response_model=Token)
async def change_password(
    password_data: PasswordChange,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Смена пароля; выдается новый токен, старые перестают действовать"""
    identity_service = IdentityService(db)
    await identity_service.change_user_password(
        current_user,
        password_data.current_password,
        password_data.new_password
    )

    token = await identity_service.login_user(
        UserLogin(email=current_user.email, password=password_data.new_password)
    )
    _set_auth_cookie(response, token)
    return {"access_token": token, "token_type": "bearer"}
