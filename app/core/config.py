# app/core/config.py
from typing import List

from pydantic_settings import BaseSettings

DEFAULT_SECRET_KEY = "your-super-secret-jwt-key-change-in-prod"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 1 день

    DATABASE_URL: str = "sqlite:///./school.db"

    # Куда складываются картинки постов
    UPLOAD_DIR: str = "uploads/posts"

    # Названия ролей в таблице roles
    TEACHER_ROLE: str = "Teacher"
    STUDENT_ROLE: str = "Student"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"


# Экземпляр создаётся ОДИН РАЗ
settings = Settings()


def validate_runtime_config() -> None:
    if settings.APP_ENV.lower() == "production" and settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        raise RuntimeError("SECRET_KEY must be set in production.")
