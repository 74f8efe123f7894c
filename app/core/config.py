from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # JWT
    JWT_SECRET_KEY: str = "supersecretlocalkey"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    # email (disabled when SMTP_HOST is unset)
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM: str = "no-reply@cems.local"
    SMTP_START_TLS: bool = True

    # Banco de dados
    DATABASE_URL: str = "sqlite:///./cems.db"
    CREATE_TABLES: bool = True

    # uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 15 * 1024 * 1024

    # reminders
    REMINDERS_ENABLED: bool = True
    REMINDER_INTERVAL_SECONDS: int = 60
    TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
