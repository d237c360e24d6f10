from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./lifeflow.db",
        description="SQLAlchemy async URL, e.g., postgresql+asyncpg://... or sqlite+aiosqlite:///...",
    )

    # IANA zone that decides what "today" means for due dates and habit logs
    APP_TIMEZONE: str = "UTC"

    # Auth sessions
    SESSION_LIFETIME_HOURS: int = 24 * 7

    # Fixed list limits of the dashboard view
    DASHBOARD_TASK_LIMIT: int = 10
    DASHBOARD_GOAL_LIMIT: int = 5

settings = Settings()
