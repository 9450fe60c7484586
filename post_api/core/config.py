from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from post_api.core.env_manager import EnvManager


class Settings(BaseSettings):
    DATABASE_URL: str = EnvManager.get_env_variable(
        "DATABASE_URL", "sqlite+aiosqlite:///database.db"
    )
    DB_ECHO: bool = EnvManager.get_bool("DB_ECHO", False)
    DB_SYNCHRONIZE: bool = EnvManager.get_bool("DB_SYNCHRONIZE", True)

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "Post API")
    PROJECT_INFO: str = EnvManager.get_env_variable(
        "PROJECT_INFO", "CRUD backend for posts"
    )
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "1.0.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "Asia/Seoul")

    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = EnvManager.get_env_variable("LOG_FILE", "") or None

    HOST: str = EnvManager.get_env_variable("HOST", "0.0.0.0")
    PORT: int = int(EnvManager.get_env_variable("PORT", "8000"))
    CORS_ORIGINS: str = EnvManager.get_env_variable("CORS_ORIGINS", "*")

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)

    def get_cors_origins(self) -> List[str]:
        """Split the comma separated CORS_ORIGINS value."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
