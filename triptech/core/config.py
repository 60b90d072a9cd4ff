from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):

    DATABASE_URL: str = "sqlite:///./triptech.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Returns generated passwords in the register response instead of emailing them
    DEV_MODE: bool = False

    LOG_LEVEL: str = "INFO"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Email
    MAIL_SERVER: Optional[str] = None
    MAIL_PORT: int = 587
    MAIL_USERNAME: Optional[str] = None
    MAIL_PASSWORD: Optional[str] = None
    MAIL_FROM: str = "no-reply@triptech.local"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings():
    return Settings()
