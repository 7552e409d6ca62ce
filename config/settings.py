from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with defaults suitable for local development"""

    # Application
    app_name: str = "Essay Evaluation API"
    version: str = "1.0.0"
    environment: str = "development"

    # Database - SQLite by default, PostgreSQL via asyncpg in production
    database_url_async: str = "sqlite+aiosqlite:///./essays.db"
    database_url: Optional[str] = None

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    # Listing
    default_page_size: int = 10
    max_page_size: int = 100

    # Evaluation
    min_essay_length: int = 10
    scoring_seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Render hands out postgres:// URLs
        if self.database_url_async.startswith("postgres://"):
            self.database_url_async = self.database_url_async.replace(
                "postgres://", "postgresql+asyncpg://", 1
            )
        elif self.database_url_async.startswith("postgresql://"):
            self.database_url_async = self.database_url_async.replace(
                "postgresql://", "postgresql+asyncpg://", 1
            )

        # Derive the sync URL (used by Alembic) from the async one
        if not self.database_url:
            self.database_url = (
                self.database_url_async
                .replace("sqlite+aiosqlite://", "sqlite://")
                .replace("postgresql+asyncpg://", "postgresql://")
            )

    @property
    def debug(self) -> bool:
        return self.environment.lower() == "development"


# Global settings instance
settings = Settings()
