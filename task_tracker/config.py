# task_tracker/config.py
from pydantic_settings import BaseSettings
from typing import List
from pydantic import Field

class Settings(BaseSettings):
    SECRET_KEY: str = Field("change-me-in-production")
    ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(7)

    DATABASE_URL: str = Field("sqlite+aiosqlite:///./task_tracker.db")
    SQL_ECHO: bool = Field(False)

    # Listing defaults; requested sizes above MAX_PAGE_SIZE are clamped.
    DEFAULT_PAGE_SIZE: int = Field(10)
    MAX_PAGE_SIZE: int = Field(100)

    SEED_DEMO_DATA: bool = Field(True)

    # Comma-separated origins. "*" → allow any origin.
    CORS_ORIGINS: str = Field("*")

    LOG_LEVEL: str = Field("INFO")

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def effective_database_url(self) -> str:
        # Ensure asyncpg is used for plain postgres URLs
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
