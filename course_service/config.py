# course_service/config.py
"""
Environment-driven settings.

Values come from process environment variables, with a `.env` file loaded
first when one is present.
"""
import os
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    app_name: str = "Online Learning Platform API"
    environment: str = "dev"

    host: str = "0.0.0.0"
    port: int = 3000

    # MongoDB Atlas
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_host: str = "cluster0.0ocgkty.mongodb.net"
    db_app_name: str = "Cluster"
    db_name: str = "courses_db"
    mongodb_uri: Optional[str] = None
    server_selection_timeout_ms: int = 5000

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @property
    def database_uri(self) -> str:
        """Connection string; an explicit MONGODB_URI wins over the Atlas parts."""
        if self.mongodb_uri:
            return self.mongodb_uri
        user = quote_plus(self.db_user or "")
        password = quote_plus(self.db_pass or "")
        return f"mongodb+srv://{user}:{password}@{self.db_host}/?appName={self.db_app_name}"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings from the environment (after loading .env). Cached."""
    load_dotenv()
    return Settings(
        app_name=os.getenv("APP_NAME", "Online Learning Platform API"),
        environment=os.getenv("ENVIRONMENT", "dev"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        db_user=os.getenv("DB_USER"),
        db_pass=os.getenv("DB_PASS"),
        db_host=os.getenv("DB_HOST", "cluster0.0ocgkty.mongodb.net"),
        db_app_name=os.getenv("DB_APP_NAME", "Cluster"),
        db_name=os.getenv("DB_NAME", "courses_db"),
        mongodb_uri=os.getenv("MONGODB_URI"),
        server_selection_timeout_ms=int(os.getenv("DB_TIMEOUT_MS", "5000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
    )
