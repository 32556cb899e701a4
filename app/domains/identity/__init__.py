from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, UserNameResponse,
    LoginStatusResponse, Token, PasswordChange
)
from app.domains.identity.services import IdentityService

__all__ = [
    "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "UserNameResponse",
    "LoginStatusResponse", "Token", "PasswordChange",
    "IdentityService"
]
