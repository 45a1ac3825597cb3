"""
Configuration for Court Sync
============================

Environment variables:
- DATABASE_URL: SQLAlchemy URL of the case store (default: sqlite:///./court_sync.db)
- SQL_ECHO: Echo SQL statements (default: false)
- REDIS_URL: Redis connection for the batch queue (default: redis://localhost:6379/0)
- BATCH_DELAY_SECONDS: Courtesy delay between sequential batch ingestions (default: 0.1)
- JOB_TIMEOUT: RQ job timeout in seconds (default: 600)
- LOG_LEVEL: Logging level for API and worker entry points (default: INFO)
- API_HOST / API_PORT / API_RELOAD: uvicorn settings for court_sync.run
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Database
    database_url: str = "sqlite:///./court_sync.db"
    sql_echo: bool = False

    # Batch queue
    redis_url: str = "redis://localhost:6379/0"
    batch_delay_seconds: float = 0.1
    job_timeout: int = 600

    # HTTP server (court_sync.run)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    # Logging
    log_level: str = "INFO"

    # Service info
    service_version: str = "1.0.0"

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
