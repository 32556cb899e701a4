from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    jwt_cookie_name: str = "jwt"

    db_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # По умолчанию принять запрос на доступ может любой авторизованный пользователь
    accept_requires_owner: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
