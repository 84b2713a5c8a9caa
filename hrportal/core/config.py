# hrportal/core/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Server settings"""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "HR Portal API"
    APP_VERSION: str = "1.0.0"

    # Database connection. DATABASE_URL wins over the DB_* parts.
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: str = "3306"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "hr_portal"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    SQL_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # Authentication
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    RESET_TOKEN_EXPIRE_MINUTES: int = 30
    PASSWORD_RESET_URL: str = "http://localhost:3000/auth?mode=reset"

    # Object storage for project attachments
    STORAGE_ROOT: str = os.path.join(os.getcwd(), "storage")
    STORAGE_BUCKET: str = "project-files"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Attendance
    LATE_AFTER: str = "09:30"

    # HTTP
    RATE_LIMIT_ENABLED: bool = True
    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:8080",
        "http://localhost:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "server.log"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def sync_database_url(self) -> str:
        """URL usable by synchronous tooling such as alembic"""
        return (
            self.database_url
            .replace("+aiomysql", "+pymysql")
            .replace("+aiosqlite", "")
        )


# Create instance of settings
settings = Settings()
